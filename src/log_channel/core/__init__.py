"""Core log channel: levels, file naming, directory lifecycle, writing and viewing."""

from __future__ import annotations

from .channel import ChannelState, LogChannel
from .config import ChannelConfig
from .directory import (
    MarkerOutcome,
    MarkerResult,
    PruneResult,
    ensure_access_protection,
    ensure_directory,
    prune_older_than,
)
from .errors import (
    ConfigError,
    DirectoryUnavailable,
    InvalidLevel,
    LogChannelError,
    LogFileNotFound,
    PathTraversalRejected,
)
from .handlers import ChannelLogHandler, ErrorHandler
from .levels import DEFAULT_REGISTRY, Level, LevelRegistry
from .models import LogEntry, LogRecord
from .paths import PathResolver, is_log_file_name, make_hmac_hasher
from .viewer import aread_log_file, delete_log_file, list_log_files, parse_entries, read_log_file

__all__ = [
    "DEFAULT_REGISTRY",
    "ChannelConfig",
    "ChannelLogHandler",
    "ChannelState",
    "ConfigError",
    "DirectoryUnavailable",
    "ErrorHandler",
    "InvalidLevel",
    "Level",
    "LevelRegistry",
    "LogChannel",
    "LogChannelError",
    "LogEntry",
    "LogFileNotFound",
    "LogRecord",
    "MarkerOutcome",
    "MarkerResult",
    "PathResolver",
    "PathTraversalRejected",
    "PruneResult",
    "aread_log_file",
    "delete_log_file",
    "ensure_access_protection",
    "ensure_directory",
    "is_log_file_name",
    "list_log_files",
    "make_hmac_hasher",
    "parse_entries",
    "prune_older_than",
    "read_log_file",
]
