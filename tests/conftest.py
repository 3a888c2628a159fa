"""Shared fixtures: isolate the process-wide logger and log-file cache per test."""

import logging
from pathlib import Path
from typing import Iterator, Tuple

import pytest
import structlog
from structlog.testing import LogCapture

from clog import config
from clog.config import STDERR, Settings
from clog.context import LogContext, seed
from clog.logging import LoggerHandle, reset_singleton
from clog.sensitive import set_hasher


@pytest.fixture(autouse=True)
def isolated_logging(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    for var in (
        "CLOG_FILE",
        "CLOG_FORMAT",
        "CLOG_LEVEL",
        "CLOG_SENSITIVE_INFO_HANDLING",
        "CLOG_ONLY_LOG_DEBUG_IF_CONTAINS_LABEL",
    ):
        monkeypatch.delenv(var, raising=False)

    log_file = tmp_path / "logs" / "clog.log"
    monkeypatch.setenv("CLOG_FILE", str(log_file))

    reset_singleton()
    config.reset_resolved_log_file()
    structlog.contextvars.clear_contextvars()

    yield log_file

    reset_singleton()
    config.reset_resolved_log_file()
    structlog.contextvars.clear_contextvars()
    set_hasher("plaintext")


def capture_handle(level: int = logging.DEBUG, **settings: object) -> Tuple[LoggerHandle, LogCapture]:
    cap = LogCapture()
    logger = structlog.wrap_logger(
        structlog.ReturnLogger(),
        processors=[cap],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
    )
    resolved = Settings(file=STDERR, **settings).ensure_defaults()
    return LoggerHandle(logger=logger, settings=resolved), cap


@pytest.fixture()
def captured() -> Tuple[LogContext, LogCapture]:
    """A context seeded with a handle that records events instead of writing them."""

    handle, cap = capture_handle()
    return seed(LogContext(), handle), cap


@pytest.fixture()
def make_capture():
    """Factory for capture handles with a given level and settings."""

    return capture_handle
