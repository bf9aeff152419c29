"""Error taxonomy for the log channel."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class LogChannelError(Exception):
    """Base class for every error raised by this package."""


class InvalidLevel(LogChannelError, ValueError):
    """A level integer or name is not in the level table."""

    def __init__(self, level: object, valid_levels: Sequence[int]) -> None:
        self.level = level
        self.valid_levels = tuple(valid_levels)
        valid = ", ".join(str(v) for v in self.valid_levels)
        super().__init__(f'Level "{level}" is not defined, use one of: {valid}')


class ConfigError(LogChannelError, ValueError):
    """Unknown configuration key or invalid value."""


class DirectoryUnavailable(LogChannelError, OSError):
    """The log directory could not be created or is not a directory."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Log directory unavailable: {path} ({reason})")


class LogFileNotFound(LogChannelError, FileNotFoundError):
    """Requested log file does not exist in the log directory."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"Log file not found: {filename}")


class PathTraversalRejected(LogChannelError, ValueError):
    """A file name is not a bare log file name inside the log directory."""

    def __init__(self, filename: str, reason: str = "not a bare log file name") -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"Rejected file name {filename!r}: {reason}")
