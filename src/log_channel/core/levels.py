"""Severity levels and the level lookup table."""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum
from types import MappingProxyType

from .errors import InvalidLevel

# Either a numeric level or a level name; resolved once by LevelRegistry.resolve.
LevelLike = int | str


class Level(IntEnum):
    """Canonical severity levels, quietest first."""

    DEBUG = 100
    INFO = 200
    NOTICE = 250
    WARNING = 300
    ERROR = 400
    CRITICAL = 500
    ALERT = 550
    EMERGENCY = 600


class LevelRegistry:
    """Immutable mapping between numeric levels and canonical names.

    A registry is built from a complete ``{level: NAME}`` table. Custom level
    sets are made by constructing a new registry with a whole replacement
    table; there is no way to add or remove a single entry.
    """

    __slots__ = ("_by_level", "_by_name")

    def __init__(self, levels: Mapping[int, str] | None = None) -> None:
        if levels is None:
            levels = {member.value: member.name for member in Level}

        by_level: dict[int, str] = {}
        by_name: dict[str, int] = {}
        for level, name in sorted(levels.items()):
            if isinstance(level, bool) or not isinstance(level, int):
                raise TypeError(f"level must be an int, got {level!r}")
            if not name or name != name.upper():
                raise ValueError(f"level name must be non-empty upper-case, got {name!r}")
            if name in by_name:
                raise ValueError(f"duplicate level name {name!r}")
            by_level[level] = name
            by_name[name] = level

        if not by_level:
            raise ValueError("level table must not be empty")

        self._by_level = MappingProxyType(by_level)
        self._by_name = MappingProxyType(by_name)

    @property
    def valid_levels(self) -> tuple[int, ...]:
        return tuple(self._by_level)

    def name(self, level: int) -> str:
        """Return the canonical name for ``level``."""
        if isinstance(level, bool) or not isinstance(level, int) or level not in self._by_level:
            raise InvalidLevel(level, self.valid_levels)
        return self._by_level[level]

    def all_levels(self) -> Mapping[str, int]:
        """Return the full ``{NAME: level}`` table."""
        return self._by_name

    def resolve(self, level: LevelLike) -> int:
        """Validate an int or a (case-insensitive) name and return the numeric level."""
        if isinstance(level, str):
            try:
                return self._by_name[level.strip().upper()]
            except KeyError:
                raise InvalidLevel(level, self.valid_levels) from None
        self.name(level)
        return int(level)


DEFAULT_REGISTRY = LevelRegistry()
