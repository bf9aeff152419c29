"""Admin tool implementations for browsing stored log files.

Keep this layer thin: sanitize inputs, call into the viewer, and return
JSON-serializable data. Viewer errors are returned as ``{"error": ...}``
payloads so the admin client can show them as messages.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path, PureWindowsPath
from typing import Any

from log_channel.core.errors import LogFileNotFound, PathTraversalRejected
from log_channel.core.levels import DEFAULT_REGISTRY
from log_channel.core.models import LogEntry
from log_channel.core.viewer import delete_log_file, list_log_files, parse_entries, read_log_file

DEFAULT_LIMIT = 500
HARD_LIMIT = 5000


def sanitize_file_name(value: str | None) -> str:
    """Reduce a request parameter to a bare file name (last path component)."""
    if not value:
        return ""
    name = PureWindowsPath(value.strip()).name  # handles both "/" and "\"
    return "" if name in (".", "..") else name


def _parse_levels(levels: Sequence[str] | None) -> list[str] | None:
    """Validate level names against the level table."""
    if not levels:
        return None
    names = DEFAULT_REGISTRY.all_levels()
    out: list[str] = []
    for s in levels:
        name = s.strip().upper()
        if not name:
            continue
        if name not in names:
            valid = ", ".join(names)
            raise ValueError(
                f"Unknown log level '{s}'. Valid values: {valid}. "
                "Tip: levels is case-insensitive (e.g., 'error', 'WARNING')."
            )
        out.append(name)
    return out or None


def _entry_to_dict(entry: LogEntry, *, include_raw: bool) -> dict[str, Any]:
    """Convert a LogEntry into a JSON-serializable dict."""
    d: dict[str, Any] = {
        "line_no": entry.line_no,
        "timestamp": entry.timestamp.isoformat(sep=" ") if entry.timestamp is not None else None,
        "level": entry.level,
        "message": entry.message,
    }
    if include_raw and entry.raw is not None:
        d["raw"] = entry.raw
    return d


def list_logs_impl(*, directory: str | Path) -> dict[str, Any]:
    """Implementation for the `list_log_files` tool (newest name first)."""
    files = sorted(list_log_files(directory), reverse=True)
    return {"directory": str(directory), "count": len(files), "files": files}


def view_log_impl(
    *,
    directory: str | Path,
    log_file: str,
    levels: Sequence[str] | None = None,
    contains: str | None = None,
    limit: int | None = None,
    include_raw: bool = False,
) -> dict[str, Any]:
    """Implementation for the `view_log_file` tool."""
    name = sanitize_file_name(log_file)
    if not name:
        return {"error": "No log file selected."}

    if limit is None:
        limit = DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    limit = min(limit, HARD_LIMIT)

    try:
        text = read_log_file(directory, name)
    except (LogFileNotFound, PathTraversalRejected) as exc:
        return {"file": name, "error": str(exc)}

    entries = parse_entries(text, levels=_parse_levels(levels), contains=contains)
    return {
        "file": name,
        "count": len(entries[:limit]),
        "total": len(entries),
        "entries": [_entry_to_dict(e, include_raw=include_raw) for e in entries[:limit]],
    }


def delete_log_impl(*, directory: str | Path, log: str) -> dict[str, Any]:
    """Implementation for the `delete_log_file` tool.

    Returns the remaining listing so the client lands back on the file list.
    """
    name = sanitize_file_name(log)
    out: dict[str, Any]
    if not name:
        out = {"deleted": False, "error": "No log file selected."}
    else:
        try:
            out = {"file": name, "deleted": delete_log_file(directory, name)}
        except PathTraversalRejected as exc:
            out = {"file": name, "deleted": False, "error": str(exc)}

    out.update(list_logs_impl(directory=directory))
    return out
