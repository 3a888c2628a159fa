"""Adapters for dependency packages that expect a different logging API."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .builder import DEBUG, ERROR, INFO, Builder
from .consts import WARNING
from .context import LogContext


class Wrapper:
    """Printf-style logger for packages that want ``logf``/``errorf``.

    With ``force_debug_level`` everything is reduced to debug, which silences
    noisy dependencies without losing their output altogether.
    """

    def __init__(self, log_ctx: Optional[LogContext] = None, force_debug_level: bool = False) -> None:
        self.ctx = log_ctx
        self.force_debug_level = force_debug_level

    def _emit(self, level: str, template: str, args: Any) -> None:
        try:
            msg = template % args if args else template
        except (TypeError, ValueError):
            msg = f"{template} {args}"
        Builder(self.ctx).log(DEBUG if self.force_debug_level else level, msg)

    def logf(self, template: str, *args: Any) -> None:
        self._emit(INFO, template, args)

    def errorf(self, template: str, *args: Any) -> None:
        self._emit(ERROR, template, args)


def wrap(log_ctx: Optional[LogContext] = None, force_debug_level: bool = False) -> Wrapper:
    return Wrapper(log_ctx, force_debug_level=force_debug_level)


class ClogHandler(logging.Handler):
    """Route stdlib ``logging`` records from third-party packages through clog.

    Warnings become info records labelled ``clabel_warning``; critical records
    are logged at error level.
    """

    def __init__(
        self,
        log_ctx: Optional[LogContext] = None,
        force_debug_level: bool = False,
        level: int = logging.NOTSET,
    ) -> None:
        super().__init__(level=level)
        self.ctx = log_ctx
        self.force_debug_level = force_debug_level

    def _level(self, record: logging.LogRecord) -> str:
        if self.force_debug_level or record.levelno < logging.INFO:
            return DEBUG
        if record.levelno >= logging.ERROR:
            return ERROR
        return INFO

    def emit(self, record: logging.LogRecord) -> None:
        try:
            bld = Builder(self.ctx).with_("logger", record.name)
            if logging.WARNING <= record.levelno < logging.ERROR:
                bld.label(WARNING)
            if record.exc_info and record.exc_info[1] is not None:
                bld.err(record.exc_info[1])
            bld.log(self._level(record), record.getMessage())
        except Exception:  # noqa: BLE001 - stdlib handler contract
            self.handleError(record)
