"""Record-to-line formatting."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date, datetime
from pathlib import PurePath
from typing import Any

from .models import LogRecord

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
LINE_TERMINATOR = "\n"


def _json_default(value: Any) -> Any:
    """Fallback for context values the JSON encoder cannot handle."""
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return str(value)


def serialize_context(context: Mapping[str, Any] | None) -> str:
    """Render context as single-line readable JSON; empty context renders as ''.

    Keys JSON cannot encode are stringified. A context that still cannot be
    encoded (circular references) falls back to its ``repr``.
    """
    if not context:
        return ""
    data = dict(context)
    try:
        return json.dumps(data, ensure_ascii=False, default=_json_default)
    except (TypeError, ValueError):
        pass
    try:
        return json.dumps(
            {str(key): value for key, value in data.items()},
            ensure_ascii=False,
            default=_json_default,
        )
    except (TypeError, ValueError):
        return repr(data)


def escape_message(message: str) -> str:
    """Escape line breaks so a record never spans more than one line."""
    return message.replace("\r", "\\r").replace("\n", "\\n")


def format_record(record: LogRecord) -> str:
    """Format ``[timestamp] [LEVEL] message context`` plus the line terminator."""
    return "[{ts}] [{level}] {message} {context}{eol}".format(
        ts=record.timestamp.strftime(TIMESTAMP_FORMAT),
        level=record.level_name,
        message=escape_message(record.message),
        context=serialize_context(record.context),
        eol=LINE_TERMINATOR,
    )
