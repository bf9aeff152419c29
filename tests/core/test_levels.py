from __future__ import annotations

import pytest

from log_channel.core.errors import InvalidLevel
from log_channel.core.levels import DEFAULT_REGISTRY, Level, LevelRegistry

EXPECTED = {
    100: "DEBUG",
    200: "INFO",
    250: "NOTICE",
    300: "WARNING",
    400: "ERROR",
    500: "CRITICAL",
    550: "ALERT",
    600: "EMERGENCY",
}


@pytest.mark.parametrize("level,name", sorted(EXPECTED.items()))
def test_name_for_known_levels(level: int, name: str) -> None:
    assert DEFAULT_REGISTRY.name(level) == name


def test_unknown_level_lists_valid_levels() -> None:
    with pytest.raises(InvalidLevel) as excinfo:
        DEFAULT_REGISTRY.name(999)

    err = excinfo.value
    assert err.level == 999
    assert err.valid_levels == tuple(sorted(EXPECTED))
    assert "100, 200, 250, 300, 400, 500, 550, 600" in str(err)
    assert isinstance(err, ValueError)


def test_all_levels_is_name_to_level_table() -> None:
    assert dict(DEFAULT_REGISTRY.all_levels()) == {v: k for k, v in EXPECTED.items()}


def test_all_levels_cannot_be_mutated() -> None:
    table = DEFAULT_REGISTRY.all_levels()
    with pytest.raises(TypeError):
        table["TRACE"] = 50  # type: ignore[index]


def test_resolve_accepts_int_enum_and_name() -> None:
    assert DEFAULT_REGISTRY.resolve(300) == 300
    assert DEFAULT_REGISTRY.resolve(Level.ALERT) == 550
    assert DEFAULT_REGISTRY.resolve("warning") == 300
    assert DEFAULT_REGISTRY.resolve(" Emergency ") == 600


@pytest.mark.parametrize("bad", [0, 101, "verbose", "", True, 2.5, None])
def test_resolve_rejects_unknown(bad: object) -> None:
    with pytest.raises(InvalidLevel):
        DEFAULT_REGISTRY.resolve(bad)  # type: ignore[arg-type]


def test_replacement_table() -> None:
    registry = LevelRegistry({10: "TRACE", 20: "LOUD"})
    assert registry.name(10) == "TRACE"
    assert registry.valid_levels == (10, 20)
    with pytest.raises(InvalidLevel):
        registry.name(100)


def test_replacement_table_rejects_duplicate_names() -> None:
    with pytest.raises(ValueError):
        LevelRegistry({10: "TRACE", 20: "TRACE"})


def test_replacement_table_rejects_lower_case_names() -> None:
    with pytest.raises(ValueError):
        LevelRegistry({10: "trace"})
