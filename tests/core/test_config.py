from __future__ import annotations

import pytest

from log_channel.core.config import ChannelConfig
from log_channel.core.errors import ConfigError
from log_channel.core.levels import LevelRegistry


def test_defaults() -> None:
    cfg = ChannelConfig.from_overrides(None)
    assert cfg.level == 100
    assert cfg.dir_name == "log-channel"
    assert cfg.channel == "dev"
    assert cfg.days_to_retain_logs == 30


def test_overrides_merge_onto_defaults() -> None:
    cfg = ChannelConfig.from_overrides({"channel": "api", "days_to_retain_logs": 0})
    assert cfg.channel == "api"
    assert cfg.days_to_retain_logs == 0
    assert cfg.dir_name == "log-channel"


def test_existing_config_is_copied() -> None:
    original = ChannelConfig(channel="api")
    cfg = ChannelConfig.from_overrides(original)
    cfg.set("channel", "other")
    assert original.channel == "api"


def test_level_accepts_names() -> None:
    assert ChannelConfig.from_overrides({"level": "Critical"}).level == 500


@pytest.mark.parametrize(
    "overrides",
    [
        {"unknown": 1},
        {"level": 42},
        {"channel": ""},
        {"channel": "a/b"},
        {"dir_name": ".."},
        {"dir_name": "x\\y"},
        {"days_to_retain_logs": "soon"},
    ],
)
def test_invalid_overrides(overrides: dict) -> None:
    with pytest.raises(ConfigError):
        ChannelConfig.from_overrides(overrides)


def test_set_validates() -> None:
    cfg = ChannelConfig()
    cfg.set("days_to_retain_logs", 3)
    assert cfg.days_to_retain_logs == 3
    with pytest.raises(ConfigError):
        cfg.set("level", "loud")
    assert cfg.level == 100


def test_level_resolves_against_given_registry() -> None:
    registry = LevelRegistry({10: "TRACE", 20: "LOUD"})

    cfg = ChannelConfig.from_overrides({"level": "Trace", "channel": "api"}, registry=registry)
    assert cfg.level == 10

    updated = cfg.replace("level", "loud", registry=registry)
    assert updated.level == 20
    assert updated.channel == "api"
    assert cfg.level == 10

    with pytest.raises(ConfigError):
        cfg.replace("level", 100, registry=registry)
    with pytest.raises(ConfigError):
        cfg.replace("bubble", True, registry=registry)
