"""Core data models for log records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class LogRecord:
    """One record on its way to disk; flattened to a text line immediately."""

    timestamp: datetime
    level_name: str
    message: str
    context: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class LogEntry:
    """A record parsed back out of a stored log file."""

    line_no: int
    timestamp: datetime | None  # None when the stamp could not be parsed
    level: str
    message: str
    raw: str | None = None  # original line(s) as stored
