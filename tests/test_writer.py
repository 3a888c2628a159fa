"""Unit tests for the stream writer and the dependency-logger adapters."""

import logging

import pytest

from clog import consts
from clog.config import STDERR, Settings
from clog.context import LogContext, seed
from clog.logging import LoggerHandle
from clog.wrapper import ClogHandler, wrap
from clog.writer import Writer


class ExplodingLogger:
    def bind(self, **values):
        raise RuntimeError("sink is gone")


def test_write_emits_info_and_reports_length(captured) -> None:
    log_ctx, cap = captured

    n = Writer(log_ctx).write(b"some bytes")

    assert n == len(b"some bytes")
    (entry,) = cap.entries
    assert entry["event"] == "some bytes"
    assert entry["log_level"] == "info"


def test_write_accepts_text(captured) -> None:
    log_ctx, cap = captured

    assert Writer(log_ctx).write("text") == 4
    assert cap.entries[0]["event"] == "text"


def test_write_never_fails() -> None:
    handle = LoggerHandle(logger=ExplodingLogger(), settings=Settings(file=STDERR).ensure_defaults())
    log_ctx = seed(LogContext(), handle)

    assert Writer(log_ctx).write(b"12345") == 5


def test_wrapper_formats_messages(captured) -> None:
    log_ctx, cap = captured

    wrapper = wrap(log_ctx)
    wrapper.logf("%d items from %s", 3, "upstream")
    wrapper.errorf("plain")

    assert [(e["event"], e["log_level"]) for e in cap.entries] == [
        ("3 items from upstream", "info"),
        ("plain", "error"),
    ]


def test_wrapper_survives_bad_format_args(captured) -> None:
    log_ctx, cap = captured

    wrapper = wrap(log_ctx)
    wrapper.logf("%d items", "many")
    wrapper.errorf("no placeholders", 1)

    assert [e["event"] for e in cap.entries] == [
        "%d items ('many',)",
        "no placeholders (1,)",
    ]


def test_wrapper_force_debug_level(make_capture) -> None:
    handle, cap = make_capture(level=logging.INFO)
    log_ctx = seed(LogContext(), handle)

    wrap(log_ctx, force_debug_level=True).logf("noisy dependency")
    wrap(log_ctx, force_debug_level=True).errorf("noisy failure")
    wrap(log_ctx).logf("kept")

    assert [e["event"] for e in cap.entries] == ["kept"]


@pytest.fixture()
def stdlib_logger():
    logger = logging.getLogger("clog.tests.dependency")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield logger
    logger.handlers.clear()


def test_handler_routes_stdlib_records(captured, stdlib_logger) -> None:
    log_ctx, cap = captured
    stdlib_logger.addHandler(ClogHandler(log_ctx))

    stdlib_logger.info("connected to %s", "db")
    stdlib_logger.warning("slow query")

    info, warning = cap.entries
    assert info["event"] == "connected to db"
    assert info["logger"] == "clog.tests.dependency"
    assert warning["log_level"] == "info"
    assert warning[consts.KEY_LABELS] == [consts.WARNING]


def test_handler_attaches_exceptions(captured, stdlib_logger) -> None:
    log_ctx, cap = captured
    stdlib_logger.addHandler(ClogHandler(log_ctx))

    try:
        raise KeyError("missing")
    except KeyError:
        stdlib_logger.exception("lookup failed")

    (entry,) = cap.entries
    assert entry["log_level"] == "error"
    assert entry[consts.KEY_ERROR] == "'missing'"


def test_handler_force_debug_level(captured, stdlib_logger) -> None:
    log_ctx, cap = captured
    stdlib_logger.addHandler(ClogHandler(log_ctx, force_debug_level=True))

    stdlib_logger.error("demoted")

    assert cap.entries[0]["log_level"] == "debug"
