"""Bridges from Python's own error and logging machinery into a LogChannel."""

from __future__ import annotations

import logging
import sys
import threading
import traceback
from types import TracebackType
from typing import TYPE_CHECKING, Any

from .levels import Level

if TYPE_CHECKING:
    from .channel import LogChannel

_INTERNAL_LOGGER_PREFIX = "log_channel"


def channel_level_for(levelno: int) -> Level:
    """Map a stdlib logging level to the nearest channel level at or below it."""
    if levelno >= logging.CRITICAL:
        return Level.CRITICAL
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARNING
    if levelno >= logging.INFO:
        return Level.INFO
    return Level.DEBUG


class ChannelLogHandler(logging.Handler):
    """logging.Handler that appends stdlib records to a LogChannel."""

    def __init__(self, channel: LogChannel, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.channel = channel

    def emit(self, record: logging.LogRecord) -> None:
        # This package's own diagnostics must not loop back into the channel.
        if record.name == _INTERNAL_LOGGER_PREFIX or record.name.startswith(_INTERNAL_LOGGER_PREFIX + "."):
            return
        try:
            context: dict[str, Any] = {"logger": record.name}
            if record.exc_info:
                formatter = self.formatter or logging.Formatter()
                context["exception"] = formatter.formatException(record.exc_info)
            self.channel.log(channel_level_for(record.levelno), record.getMessage(), context)
        except Exception:
            self.handleError(record)


class ErrorHandler:
    """Records uncaught exceptions (main thread and worker threads) at CRITICAL.

    The previous hooks still run after the record is written.
    """

    def __init__(self, channel: LogChannel, level: Level = Level.CRITICAL) -> None:
        self.channel = channel
        self.level = level
        self._previous_excepthook = None
        self._previous_threading_hook = None

    @property
    def registered(self) -> bool:
        return self._previous_excepthook is not None

    def register(self) -> ErrorHandler:
        if self.registered:
            return self
        self._previous_excepthook = sys.excepthook
        self._previous_threading_hook = threading.excepthook
        sys.excepthook = self._excepthook
        threading.excepthook = self._threading_excepthook
        return self

    def unregister(self) -> None:
        if not self.registered:
            return
        sys.excepthook = self._previous_excepthook
        threading.excepthook = self._previous_threading_hook
        self._previous_excepthook = None
        self._previous_threading_hook = None

    def handle_exception(
        self,
        exc_type: type[BaseException],
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        """Write one record for an uncaught exception. Returns whether it was written."""
        if issubclass(exc_type, KeyboardInterrupt):
            return False

        filename, lineno = "unknown", 0
        frames = traceback.extract_tb(exc_tb) if exc_tb is not None else []
        if frames:
            filename, lineno = frames[-1].filename, frames[-1].lineno or 0

        message = f'Uncaught Exception {exc_type.__name__}: "{exc_value}" at {filename} line {lineno}'
        context = {
            "exception": exc_value if exc_value is not None else exc_type.__name__,
            "trace": traceback.format_tb(exc_tb) if exc_tb is not None else [],
        }
        return self.channel.log(self.level, message, context)

    def _excepthook(
        self,
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            self.handle_exception(exc_type, exc_value, exc_tb)
        finally:
            previous = self._previous_excepthook or sys.__excepthook__
            previous(exc_type, exc_value, exc_tb)

    def _threading_excepthook(self, args: threading.ExceptHookArgs) -> None:
        try:
            self.handle_exception(args.exc_type, args.exc_value, args.exc_traceback)
        finally:
            previous = self._previous_threading_hook or threading.__excepthook__
            previous(args)
