from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path

import pytest

from log_channel.core.handlers import ChannelLogHandler, ErrorHandler, channel_level_for
from log_channel.core.levels import Level


def _content(channel) -> str:
    path = channel.current_path()
    return path.read_text(encoding="utf-8") if path.exists() else ""


@pytest.mark.parametrize(
    "levelno,expected",
    [
        (logging.DEBUG, Level.DEBUG),
        (5, Level.DEBUG),
        (logging.INFO, Level.INFO),
        (25, Level.INFO),
        (logging.WARNING, Level.WARNING),
        (logging.ERROR, Level.ERROR),
        (logging.CRITICAL, Level.CRITICAL),
        (60, Level.CRITICAL),
    ],
)
def test_channel_level_for(levelno: int, expected: Level) -> None:
    assert channel_level_for(levelno) is expected


def test_handler_forwards_stdlib_records(make_channel) -> None:
    channel = make_channel()
    log = logging.getLogger("app.handler_test")
    log.propagate = False
    log.setLevel(logging.DEBUG)
    handler = ChannelLogHandler(channel)
    log.addHandler(handler)
    try:
        log.warning("careful %s", "now")
    finally:
        log.removeHandler(handler)

    assert _content(channel) == '[2024-01-01 10:30:00] [WARNING] careful now {"logger": "app.handler_test"}\n'


def test_handler_includes_exception_text(make_channel) -> None:
    channel = make_channel()
    log = logging.getLogger("app.handler_exc")
    log.propagate = False
    handler = ChannelLogHandler(channel)
    log.addHandler(handler)
    try:
        try:
            raise ValueError("bad input")
        except ValueError:
            log.exception("request failed")
    finally:
        log.removeHandler(handler)

    content = _content(channel)
    assert "[ERROR] request failed" in content
    assert "ValueError: bad input" in content


def test_handler_ignores_internal_loggers(make_channel) -> None:
    channel = make_channel()
    handler = ChannelLogHandler(channel)
    record = logging.LogRecord(
        "log_channel.core.channel", logging.WARNING, __file__, 1, "internal", None, None
    )

    handler.emit(record)

    assert _content(channel) == ""


def test_error_handler_records_uncaught_exception(make_channel) -> None:
    channel = make_channel()
    handler = ErrorHandler(channel)

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        written = handler.handle_exception(*sys.exc_info())

    assert written is True
    content = _content(channel)
    assert '[CRITICAL] Uncaught Exception RuntimeError: "boom" at ' in content
    assert "test_handlers.py line" in content
    assert '"exception": "RuntimeError: boom"' in content


def test_error_handler_skips_keyboard_interrupt(make_channel) -> None:
    channel = make_channel()
    assert ErrorHandler(channel).handle_exception(KeyboardInterrupt, KeyboardInterrupt(), None) is False
    assert _content(channel) == ""


def test_register_chains_and_unregister_restores(make_channel, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[type[BaseException]] = []
    thread_seen: list[type[BaseException]] = []

    def previous(exc_type, exc_value, exc_tb) -> None:
        seen.append(exc_type)

    def previous_thread(args) -> None:
        thread_seen.append(args.exc_type)

    monkeypatch.setattr(sys, "excepthook", previous)
    monkeypatch.setattr(threading, "excepthook", previous_thread)

    channel = make_channel()
    handler = ErrorHandler(channel).register()
    assert handler.registered
    assert sys.excepthook is not previous

    sys.excepthook(LookupError, LookupError("missing"), None)

    def worker() -> None:
        raise OSError("thread failure")

    t = threading.Thread(target=worker)
    t.start()
    t.join()

    handler.unregister()

    assert seen == [LookupError]
    assert thread_seen == [OSError]
    assert sys.excepthook is previous
    assert threading.excepthook is previous_thread
    content = _content(channel)
    assert 'LookupError: "missing" at unknown line 0' in content
    assert 'OSError: "thread failure"' in content


def test_chained_hooks_run_when_recording_fails(make_channel, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[type[BaseException]] = []
    thread_seen: list[type[BaseException]] = []

    monkeypatch.setattr(sys, "excepthook", lambda exc_type, exc_value, exc_tb: seen.append(exc_type))
    monkeypatch.setattr(threading, "excepthook", lambda args: thread_seen.append(args.exc_type))

    channel = make_channel()

    def failing_log(*args, **kwargs) -> bool:
        raise RuntimeError("channel broken")

    monkeypatch.setattr(channel, "log", failing_log)
    handler = ErrorHandler(channel).register()

    with pytest.raises(RuntimeError, match="channel broken"):
        sys.excepthook(ValueError, ValueError("bad"), None)
    with pytest.raises(RuntimeError, match="channel broken"):
        threading.excepthook(threading.ExceptHookArgs((KeyError, KeyError("k"), None, None)))

    handler.unregister()

    assert seen == [ValueError]
    assert thread_seen == [KeyError]


def test_error_handler_records_exception_with_surrogate_text(make_channel) -> None:
    channel = make_channel()

    assert ErrorHandler(channel).handle_exception(ValueError, ValueError("bad \udcff"), None) is True
    assert 'ValueError: "bad \\udcff"' in _content(channel)
