"""Channel configuration."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from .errors import ConfigError
from .levels import DEFAULT_REGISTRY, Level, LevelRegistry

DEFAULT_DIR_NAME = "log-channel"
DEFAULT_CHANNEL = "dev"
DEFAULT_RETENTION_DAYS = 30


class ChannelConfig(BaseModel):
    """Settings held by one LogChannel.

    ``level`` is the configured minimum level. It is kept for introspection
    only; writes are not filtered by it.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    level: int = Field(default=Level.DEBUG.value, description="Configured minimum level.")
    dir_name: str = Field(default=DEFAULT_DIR_NAME, description="Log directory under the storage base.")
    channel: str = Field(default=DEFAULT_CHANNEL, description="Channel name used in file names.")
    days_to_retain_logs: int = Field(
        default=DEFAULT_RETENTION_DAYS,
        description="Retention window in days; zero or less keeps files forever.",
    )

    @field_validator("level", mode="before")
    @classmethod
    def _validate_level(cls, value: Any, info: ValidationInfo) -> int:
        registry = (info.context or {}).get("registry") or DEFAULT_REGISTRY
        return registry.resolve(value)

    @field_validator("dir_name", "channel")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        if value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError("must be a single path component")
        return value

    @classmethod
    def from_overrides(
        cls,
        overrides: Mapping[str, Any] | ChannelConfig | None = None,
        *,
        registry: LevelRegistry | None = None,
    ) -> ChannelConfig:
        """Merge caller-supplied overrides onto the defaults.

        ``level`` is resolved against ``registry`` (the default level table
        when omitted).
        """
        if overrides is None:
            return cls()
        if isinstance(overrides, ChannelConfig):
            overrides = overrides.model_dump(exclude_unset=True)
        try:
            return cls.model_validate(dict(overrides), context={"registry": registry})
        except ValidationError as exc:
            raise ConfigError(f"Invalid channel configuration: {exc}") from exc

    def _check_key(self, key: str) -> None:
        if key not in type(self).model_fields:
            allowed = ", ".join(type(self).model_fields)
            raise ConfigError(f"Unknown config key {key!r}. Allowed: {allowed}.")

    def set(self, key: str, value: Any) -> None:
        """Replace one field in place, validating the new value."""
        self._check_key(key)
        try:
            setattr(self, key, value)
        except ValidationError as exc:
            raise ConfigError(f"Invalid value for {key!r}: {exc}") from exc

    def replace(self, key: str, value: Any, *, registry: LevelRegistry | None = None) -> ChannelConfig:
        """Return a copy with one field replaced, resolving ``level`` against ``registry``."""
        self._check_key(key)
        try:
            return type(self).model_validate(
                {**self.model_dump(exclude_unset=True), key: value},
                context={"registry": registry},
            )
        except ValidationError as exc:
            raise ConfigError(f"Invalid value for {key!r}: {exc}") from exc
