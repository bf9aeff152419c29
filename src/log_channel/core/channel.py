"""The log channel: validates levels, formats records and appends them to the day's file.

A channel bootstraps its directory once, at construction: create the
directory, write the access marker, prune expired files. Only then does it
accept writes. When the host reports it is not ready yet, or the directory
cannot be created, the channel stays uninitialized and every write is a no-op
returning ``False``.

Configuration setters are not synchronized. A channel instance is meant to be
owned by one component and used sequentially; share it by passing the
instance around explicitly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from .config import ChannelConfig
from .directory import (
    MarkerResult,
    PruneResult,
    ensure_access_protection,
    ensure_directory,
    prune_older_than,
)
from .errors import DirectoryUnavailable
from .formatting import format_record
from .levels import DEFAULT_REGISTRY, Level, LevelLike, LevelRegistry
from .models import LogRecord
from .paths import KeyedHash, PathResolver

logger = logging.getLogger(__name__)

StorageBase = str | Path | Callable[[], str | Path]
ReadinessGate = bool | Callable[[], bool]


class ChannelState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class LogChannel:
    """File-backed log channel writing one file per channel per day."""

    DEBUG = Level.DEBUG
    INFO = Level.INFO
    NOTICE = Level.NOTICE
    WARNING = Level.WARNING
    ERROR = Level.ERROR
    CRITICAL = Level.CRITICAL
    ALERT = Level.ALERT
    EMERGENCY = Level.EMERGENCY

    def __init__(
        self,
        config: Mapping[str, Any] | ChannelConfig | None = None,
        *,
        storage_base: StorageBase,
        hasher: KeyedHash,
        ready: ReadinessGate = True,
        clock: Callable[[], datetime] | None = None,
        registry: LevelRegistry | None = None,
    ) -> None:
        self.registry = registry or DEFAULT_REGISTRY
        self.config = ChannelConfig.from_overrides(config, registry=self.registry)
        self.state = ChannelState.UNINITIALIZED
        self.bootstrap_error: DirectoryUnavailable | None = None
        self.marker: MarkerResult | None = None
        self.prune_result: PruneResult | None = None

        self._storage_base = storage_base
        self._resolver = PathResolver(hasher)
        self._clock = clock or datetime.now

        self._bootstrap(ready)

    def _bootstrap(self, ready: ReadinessGate) -> None:
        is_ready = ready() if callable(ready) else bool(ready)
        if not is_ready:
            logger.debug("Host not ready; channel %r stays uninitialized", self.config.channel)
            return

        directory = self.directory_path
        try:
            ensure_directory(directory)
        except DirectoryUnavailable as exc:
            logger.error("Log channel %r disabled: %s", self.config.channel, exc)
            self.bootstrap_error = exc
            return

        self.marker = ensure_access_protection(directory)
        self.prune_result = prune_older_than(
            directory, self.config.days_to_retain_logs, self._clock()
        )
        self.state = ChannelState.READY

    @property
    def ready(self) -> bool:
        return self.state is ChannelState.READY

    @property
    def storage_base(self) -> Path:
        base = self._storage_base() if callable(self._storage_base) else self._storage_base
        return Path(base)

    @property
    def directory_path(self) -> Path:
        return self._resolver.directory_path(self.storage_base, self.config.dir_name)

    def current_path(self, now: datetime | None = None) -> Path:
        """Path of the file a record written at ``now`` would go to."""
        return self._resolver.final_path(
            self.storage_base,
            self.config.dir_name,
            self.config.channel,
            now or self._clock(),
        )

    def set_channel(self, name: str) -> LogChannel:
        return self.set_config("channel", name)

    def set_config(self, key: str, value: Any) -> LogChannel:
        """Replace one config field; ``level`` is checked against this channel's registry."""
        self.config = self.config.replace(key, value, registry=self.registry)
        return self

    def log(self, level: LevelLike, message: object, context: Mapping[str, Any] | None = None) -> bool:
        """Append one record. Returns whether it was written.

        Raises InvalidLevel for an unknown level, whatever the channel state.
        """
        level_no = self.registry.resolve(level)
        if context is not None and not isinstance(context, Mapping):
            raise TypeError(f"context must be a mapping, got {type(context).__name__}")

        if self.state is not ChannelState.READY:
            return False

        now = self._clock()
        record = LogRecord(
            timestamp=now,
            level_name=self.registry.name(level_no),
            message=str(message),
            context=context or {},
        )
        data = format_record(record).encode("utf-8", errors="backslashreplace")
        path = self.current_path(now)

        try:
            # Unbuffered append: the whole line goes out in a single write call.
            with open(path, "ab", buffering=0) as fh:
                written = fh.write(data)
        except OSError as exc:
            logger.warning("Failed to append to %s: %s", path, exc)
            return False

        if written != len(data):
            logger.warning("Short write to %s (%d of %d bytes)", path, written, len(data))
            return False
        return True

    def debug(self, message: object, context: Mapping[str, Any] | None = None) -> bool:
        return self.log(Level.DEBUG, message, context)

    def info(self, message: object, context: Mapping[str, Any] | None = None) -> bool:
        return self.log(Level.INFO, message, context)

    def notice(self, message: object, context: Mapping[str, Any] | None = None) -> bool:
        return self.log(Level.NOTICE, message, context)

    def warning(self, message: object, context: Mapping[str, Any] | None = None) -> bool:
        return self.log(Level.WARNING, message, context)

    def error(self, message: object, context: Mapping[str, Any] | None = None) -> bool:
        return self.log(Level.ERROR, message, context)

    def critical(self, message: object, context: Mapping[str, Any] | None = None) -> bool:
        return self.log(Level.CRITICAL, message, context)

    def alert(self, message: object, context: Mapping[str, Any] | None = None) -> bool:
        return self.log(Level.ALERT, message, context)

    def emergency(self, message: object, context: Mapping[str, Any] | None = None) -> bool:
        return self.log(Level.EMERGENCY, message, context)
