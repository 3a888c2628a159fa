"""Structured logger construction and the process-wide default logger.

clog doesn't write a logger. It wraps structlog in an opinionated shell:
the handles built here own their processor chain and output stream, so
nothing depends on the global ``structlog.configure`` state.
"""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TextIO

import structlog

from .config import STDERR, STDOUT, LogFormat, LogLevel, Settings
from .sensitive import conceal_secrets, set_hasher

# Filtering loggers only exist for stdlib levels; critical and anything
# logged through it are dropped by _drop_everything.
DISABLED_LEVEL = logging.CRITICAL

_LEVELS: Dict[str, int] = {
    LogLevel.DEBUG.value: logging.DEBUG,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.DISABLED.value: DISABLED_LEVEL,
}

_loggerton: Optional["LoggerHandle"] = None
_single_mu = threading.Lock()


@dataclass(frozen=True)
class LoggerHandle:
    """A structlog bound logger plus the settings and stream it was built from."""

    logger: Any
    settings: Settings
    stream: Optional[TextIO] = None
    owns_stream: bool = False

    def sync(self) -> None:
        """Flush buffered output. Best effort: records emitted concurrently may be missed."""

        if self.stream is None:
            return
        try:
            self.stream.flush()
        except (OSError, ValueError):
            pass

    def close(self) -> None:
        self.sync()
        if self.owns_stream and self.stream is not None:
            self.stream.close()


def to_level(level: str) -> int:
    """Convert a clog level name into a stdlib logging level."""

    return _LEVELS.get(level, logging.INFO)


def _drop_everything(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    raise structlog.DropEvent


def _silencers(settings: Settings) -> List[Any]:
    return [_drop_everything] if settings.level == LogLevel.DISABLED.value else []


def _timestamper(settings: Settings) -> Any:
    if settings.format == LogFormat.JSON.value:
        return structlog.processors.TimeStamper(fmt="iso", utc=True)
    return structlog.processors.TimeStamper(fmt="%H:%M:%S.%f", utc=False)


def _renderers(settings: Settings, colors: bool) -> List[Any]:
    if settings.format == LogFormat.JSON.value:
        return [
            structlog.processors.EventRenamer("msg"),
            structlog.processors.JSONRenderer(default=str),
        ]
    return [structlog.dev.ConsoleRenderer(colors=colors)]


def _open_output(target: str) -> tuple:
    if target == STDOUT:
        return sys.stdout, False
    if target == STDERR:
        return sys.stderr, False
    return open(target, "a", encoding="utf-8"), True


def gen_logger(settings: Settings) -> LoggerHandle:
    """Build the primary logger described by already-defaulted settings.

    JSON format writes one object per line; the text format uses the
    columnar console renderer, colourised when writing to a terminal. If the
    output can't be opened the fallback logger is returned instead.
    """

    try:
        stream, owned = _open_output(settings.file)
    except (OSError, ValueError):
        return fallback_logger(settings)

    colors = not owned and bool(getattr(stream, "isatty", lambda: False)())

    logger = structlog.wrap_logger(
        structlog.PrintLogger(file=stream),
        processors=[
            *_silencers(settings),
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            _timestamper(settings),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            conceal_secrets,
            *_renderers(settings, colors),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(to_level(settings.level)),
        context_class=dict,
    )

    return LoggerHandle(logger=logger, settings=settings, stream=stream, owns_stream=owned)


def fallback_logger(settings: Settings) -> LoggerHandle:
    """Minimal stderr logger used when the configured one can't be built.

    Everyone still wants their logs, so this logs at debug level and does
    no I/O during construction.
    """

    logger = structlog.wrap_logger(
        structlog.PrintLogger(file=sys.stderr),
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            conceal_secrets,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
    )

    return LoggerHandle(logger=logger, settings=settings.model_copy(update={"file": STDERR}), stream=sys.stderr)


def singleton(settings: Optional[Settings] = None) -> LoggerHandle:
    """Construct-or-get the process-wide logger.

    The first caller's settings win; settings passed later are ignored.
    """

    global _loggerton

    with _single_mu:
        if _loggerton is not None:
            return _loggerton

        resolved = (settings if settings is not None else Settings()).ensure_defaults()
        set_hasher(resolved.sensitive_info_handling)

        _loggerton = gen_logger(resolved)
        return _loggerton


def reset_singleton() -> None:
    """Close and forget the process-wide logger."""

    global _loggerton

    with _single_mu:
        if _loggerton is not None:
            _loggerton.close()
        _loggerton = None


def build_logger(name: str, **context: Any) -> Any:
    """Create a bound logger from the process-wide logger with default context."""

    return singleton().logger.bind(logger=name, **context)
