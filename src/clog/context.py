"""
Request-scoped carrier for the logger handle and contextual metadata.

A :class:`LogContext` is immutable: attaching a handle or adding values
returns a derived context and leaves the parent untouched, so a child scope
can override what it inherited. Code that cannot thread a context through
its call chain can activate one with :func:`use`; every function here
treats ``ctx=None`` as "the active context".
"""

from __future__ import annotations

import contextlib
import dataclasses
from contextvars import ContextVar
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union

import structlog

from .config import STDERR, Settings
from .logging import LoggerHandle, singleton


def _frozen(values: Mapping[Any, Any]) -> Mapping[Any, Any]:
    return MappingProxyType(dict(values))


@dataclass(frozen=True)
class LogContext:
    """Logger handle (or None for the process default) plus contextual values."""

    handle: Optional[LoggerHandle] = None
    values: Mapping[Any, Any] = field(default_factory=lambda: _frozen({}))

    def with_values(self, **values: Any) -> "LogContext":
        merged = dict(self.values)
        merged.update(values)
        return dataclasses.replace(self, values=_frozen(merged))

    def add(self, *pairs: Any) -> "LogContext":
        """Add alternating key/value pairs. An odd trailing key gets ``None``."""

        merged = dict(self.values)
        for i in range(0, len(pairs), 2):
            merged[pairs[i]] = pairs[i + 1] if i + 1 < len(pairs) else None
        return dataclasses.replace(self, values=_frozen(merged))


_ROOT = LogContext()

_active: ContextVar[Optional[LogContext]] = ContextVar("clog_context", default=None)


def current() -> LogContext:
    """Return the active context, or an empty one."""

    active = _active.get()
    return active if active is not None else _ROOT


@contextlib.contextmanager
def use(ctx: LogContext) -> Iterator[LogContext]:
    """Make ``ctx`` the active context for the duration of the block."""

    token = _active.set(ctx)
    try:
        yield ctx
    finally:
        _active.reset(token)


def resolve(ctx: Optional[LogContext]) -> LogContext:
    return ctx if ctx is not None else current()


def _as_handle(logger: Union[LoggerHandle, Any]) -> LoggerHandle:
    if isinstance(logger, LoggerHandle):
        return logger
    # Handles built elsewhere carry no clog settings; give them neutral ones.
    return LoggerHandle(logger=logger, settings=Settings(file=STDERR).ensure_defaults())


def seed(ctx: Optional[LogContext], logger: Union[LoggerHandle, Any, None]) -> LogContext:
    """Embed a logger within the context.

    Accepts a :class:`LoggerHandle` or any structlog bound logger, which is
    handy for inheriting a logger that was built elsewhere. ``None`` leaves
    the context unchanged.
    """

    ctx = resolve(ctx)
    if logger is None:
        return ctx
    return dataclasses.replace(ctx, handle=_as_handle(logger))


def from_ctx(ctx: Optional[LogContext] = None) -> LoggerHandle:
    """Pull the handle out of the context, falling back to the process-wide logger."""

    handle = resolve(ctx).handle
    if handle is None:
        handle = singleton(Settings())
    return handle


def init(ctx: Optional[LogContext], settings: Settings) -> Tuple[LogContext, LoggerHandle]:
    """Construct-or-get the process-wide logger and embed it in the context."""

    handle = singleton(settings)
    handle.logger.debug("seeding logger", logger_settings=settings.model_dump())

    return seed(ctx, handle), handle


def ctx_or_seed(
    ctx: Optional[LogContext],
    logger: Union[LoggerHandle, Any, None],
    settings: Settings,
) -> Tuple[LogContext, LoggerHandle]:
    """Return the handle already in the context, else attach one.

    The given logger is attached when present; otherwise the process-wide
    logger built from ``settings``.
    """

    ctx = resolve(ctx)
    if ctx.handle is not None:
        return ctx, ctx.handle

    handle = _as_handle(logger) if logger is not None else singleton(settings)
    return seed(ctx, handle), handle


def ctx_values(ctx: Optional[LogContext] = None) -> Dict[Any, Any]:
    """Contextual metadata: structlog contextvars overlaid by the context's own values."""

    values: Dict[Any, Any] = dict(structlog.contextvars.get_contextvars())
    values.update(resolve(ctx).values)
    return values
