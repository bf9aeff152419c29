"""Log directory bootstrap, access protection and retention pruning."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from .errors import DirectoryUnavailable
from .paths import is_log_file_name

logger = logging.getLogger(__name__)

ACCESS_MARKER_NAME = ".htaccess"
ACCESS_MARKER_CONTENT = "Deny from all\n"
SECONDS_PER_DAY = 86400


class MarkerOutcome(str, Enum):
    """Outcome of a best-effort access marker write."""

    CREATED = "created"
    SKIPPED = "skipped"  # marker already present
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class MarkerResult:
    outcome: MarkerOutcome
    path: Path
    error: str | None = None


@dataclass(frozen=True, slots=True)
class PruneResult:
    """Files removed by a retention sweep, and the ones that could not be."""

    pruned: tuple[str, ...] = ()
    failed: tuple[tuple[str, str], ...] = ()  # (file name, error)
    disabled: bool = False  # retention <= 0, nothing was inspected

    @property
    def pruned_count(self) -> int:
        return len(self.pruned)

    @property
    def failed_count(self) -> int:
        return len(self.failed)


def ensure_directory(path: str | Path) -> Path:
    """Create ``path`` (and parents) if missing. Safe to call repeatedly."""
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryUnavailable(path, exc.strerror or str(exc)) from exc
    if not path.is_dir():
        raise DirectoryUnavailable(path, "not a directory")
    return path


def ensure_access_protection(path: str | Path) -> MarkerResult:
    """Write the deny-all marker into ``path`` unless it already exists.

    Never overwrites an existing marker. Failures are reported in the result,
    not raised.
    """
    path = Path(path)
    marker = path / ACCESS_MARKER_NAME

    if not path.is_dir():
        return MarkerResult(MarkerOutcome.FAILED, marker, "directory does not exist")
    if marker.exists():
        return MarkerResult(MarkerOutcome.SKIPPED, marker)
    if not os.access(path, os.W_OK):
        logger.warning("Log directory %s is not writable; access marker not created", path)
        return MarkerResult(MarkerOutcome.FAILED, marker, "directory not writable")

    try:
        # "x" fails if another process created the marker in the meantime.
        with marker.open("x", encoding="utf-8") as fh:
            fh.write(ACCESS_MARKER_CONTENT)
    except FileExistsError:
        return MarkerResult(MarkerOutcome.SKIPPED, marker)
    except OSError as exc:
        logger.warning("Could not create access marker %s: %s", marker, exc)
        return MarkerResult(MarkerOutcome.FAILED, marker, str(exc))

    logger.debug("Created access marker %s", marker)
    return MarkerResult(MarkerOutcome.CREATED, marker)


def prune_older_than(path: str | Path, retention_days: int, now: datetime | float) -> PruneResult:
    """Delete log files whose modification time is more than ``retention_days`` before ``now``.

    Non-positive retention disables pruning. A failure on one file is recorded
    and the sweep continues with the rest.
    """
    if retention_days <= 0:
        return PruneResult(disabled=True)

    path = Path(path)
    now_ts = now.timestamp() if isinstance(now, datetime) else float(now)
    max_age = retention_days * SECONDS_PER_DAY

    pruned: list[str] = []
    failed: list[tuple[str, str]] = []

    try:
        entries = list(os.scandir(path))
    except OSError as exc:
        logger.warning("Cannot scan log directory %s for pruning: %s", path, exc)
        return PruneResult()

    for entry in entries:
        if not is_log_file_name(entry.name):
            continue
        try:
            if not entry.is_file(follow_symlinks=False):
                continue
            age = now_ts - entry.stat(follow_symlinks=False).st_mtime
            if age <= max_age:
                continue
            os.unlink(entry.path)
        except FileNotFoundError:
            continue  # removed concurrently
        except OSError as exc:
            logger.warning("Failed to prune log file %s: %s", entry.name, exc)
            failed.append((entry.name, str(exc)))
            continue
        logger.info("Pruned log file %s (age %.1f days)", entry.name, age / SECONDS_PER_DAY)
        pruned.append(entry.name)

    if failed:
        logger.warning("Log pruning finished with %d failure(s) in %s", len(failed), path)

    return PruneResult(pruned=tuple(pruned), failed=tuple(failed))
