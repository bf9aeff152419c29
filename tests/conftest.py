from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

from log_channel.core.channel import LogChannel
from log_channel.core.paths import KeyedHash, make_hmac_hasher

FIXED_NOW = datetime(2024, 1, 1, 10, 30, 0)


@pytest.fixture
def hasher() -> KeyedHash:
    return make_hmac_hasher("test-secret")


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def make_channel(
    tmp_path: Path, hasher: KeyedHash, fixed_clock: Callable[[], datetime]
) -> Callable[..., LogChannel]:
    def _make(config: dict[str, Any] | None = None, **kwargs: Any) -> LogChannel:
        kwargs.setdefault("storage_base", tmp_path)
        kwargs.setdefault("hasher", hasher)
        kwargs.setdefault("clock", fixed_clock)
        return LogChannel(config, **kwargs)

    return _make


@pytest.fixture
def write_log_file() -> Callable[[Path, str], Path]:
    def _write(directory: Path, name: str, lines: list[str] | None = None) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(
            "\n".join(
                lines
                or [
                    "[2024-01-01 08:00:00] [INFO] service started ",
                    '[2024-01-01 09:00:00] [WARNING] retrying request {"id": "abc123"}',
                    '[2024-01-01 10:00:00] [ERROR] upstream timeout {"route": "/api/v1/items"}',
                ]
            )
            + "\n",
            encoding="utf-8",
        )
        return path

    return _write
