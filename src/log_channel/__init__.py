"""File-based log channel with per-day files, retention pruning and a log viewer."""

from __future__ import annotations

from .core import (
    ChannelConfig,
    ChannelLogHandler,
    ErrorHandler,
    InvalidLevel,
    Level,
    LogChannel,
    make_hmac_hasher,
)

__all__ = [
    "ChannelConfig",
    "ChannelLogHandler",
    "ErrorHandler",
    "InvalidLevel",
    "Level",
    "LogChannel",
    "make_hmac_hasher",
]
