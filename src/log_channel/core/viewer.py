"""Read-only access to stored log files, plus single-file delete.

All functions take the log directory and a bare file name. Names with path
separators, dot components or a non-``.log`` suffix are rejected before any
file system access.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

import aiofiles

from .errors import LogFileNotFound, PathTraversalRejected
from .formatting import TIMESTAMP_FORMAT
from .models import LogEntry
from .paths import LOG_FILE_SUFFIX

TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "replace"

_RECORD_RE = re.compile(r"^\[(?P<ts>[^\]]+)\]\s+\[(?P<level>[A-Za-z]+)\]\s?(?P<msg>.*)$")


def _safe_path(directory: str | Path, filename: str) -> Path:
    """Resolve ``filename`` inside ``directory`` or raise PathTraversalRejected."""
    if not filename or filename in (".", ".."):
        raise PathTraversalRejected(filename)
    if "/" in filename or "\\" in filename or "\x00" in filename:
        raise PathTraversalRejected(filename, "path separators are not allowed")
    if not filename.endswith(LOG_FILE_SUFFIX):
        raise PathTraversalRejected(filename, f"only {LOG_FILE_SUFFIX} files may be accessed")

    base = Path(directory).resolve()
    path = (base / filename).resolve()
    if path.parent != base:
        raise PathTraversalRejected(filename, "path escapes the log directory")
    return path


def list_log_files(directory: str | Path) -> set[str]:
    """Return the names of regular ``.log`` files in ``directory``."""
    try:
        entries = list(os.scandir(directory))
    except FileNotFoundError:
        return set()
    return {
        e.name
        for e in entries
        if e.name.endswith(LOG_FILE_SUFFIX) and e.is_file(follow_symlinks=False)
    }


def read_log_file(directory: str | Path, filename: str) -> str:
    """Return the full text of one log file."""
    path = _safe_path(directory, filename)
    if not path.is_file():
        raise LogFileNotFound(filename)
    return path.read_text(encoding=TEXT_ENCODING, errors=TEXT_ERRORS)


async def aread_log_file(directory: str | Path, filename: str) -> str:
    """Async variant of read_log_file."""
    path = _safe_path(directory, filename)
    if not path.is_file():
        raise LogFileNotFound(filename)
    async with aiofiles.open(path, encoding=TEXT_ENCODING, errors=TEXT_ERRORS) as f:
        return await f.read()


def delete_log_file(directory: str | Path, filename: str) -> bool:
    """Delete one log file. Returns False when it was already gone."""
    path = _safe_path(directory, filename)
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True


def _parse_ts(value: str) -> datetime | None:
    try:
        return datetime.strptime(value.strip(), TIMESTAMP_FORMAT)
    except ValueError:
        return None


def parse_entries(
    text: str,
    *,
    levels: Iterable[str] | None = None,
    contains: str | None = None,
) -> list[LogEntry]:
    """Parse stored records back into entries.

    Lines that do not start a record are continuation lines of the previous
    record (multi-line messages). ``levels`` filters by level name
    (case-insensitive); ``contains`` is a substring filter on the raw text.
    """
    allowed = {lvl.strip().upper() for lvl in levels} if levels is not None else None

    entries: list[LogEntry] = []
    current: dict | None = None

    def flush() -> None:
        if current is None:
            return
        raw = "\n".join(current["raw"])
        if allowed is not None and current["level"] not in allowed:
            return
        if contains is not None and contains not in raw:
            return
        entries.append(
            LogEntry(
                line_no=current["line_no"],
                timestamp=current["ts"],
                level=current["level"],
                message="\n".join(current["msg"]).strip(),
                raw=raw,
            )
        )

    for line_no, line in enumerate(text.splitlines(), start=1):
        m = _RECORD_RE.match(line)
        if m:
            flush()
            current = {
                "line_no": line_no,
                "ts": _parse_ts(m.group("ts")),
                "level": m.group("level").upper(),
                "msg": [m.group("msg")],
                "raw": [line],
            }
        elif current is not None:
            current["msg"].append(line)
            current["raw"].append(line)
        elif line.strip():
            # Text before the first record; keep it visible.
            current = {"line_no": line_no, "ts": None, "level": "UNKNOWN", "msg": [line], "raw": [line]}
    flush()

    return entries
