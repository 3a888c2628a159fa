"""
clog: an opinionated shell around structlog.

Carry a logger through a request-scoped context, gather values, labels,
comments and errors on a builder, and emit them as one structured record.

Example::
    log_ctx, _ = clog.init(None, clog.Settings(format="json"))
    clog.ctx(log_ctx).with_("user", clog.hide(user_id)).label(clog.consts.START_OF_RUN).info("kicking off")
"""

from . import consts
from .builder import Builder, ctx, ctx_err, flush
from .config import (
    STDERR,
    STDOUT,
    LogFormat,
    LogLevel,
    SensitiveInfoHandling,
    Settings,
    get_log_file,
    load_settings,
)
from .context import LogContext, ctx_or_seed, ctx_values, current, from_ctx, init, seed, use
from .errors import ClueError, error_labels, error_values
from .flags import add_logging_flags, settings_from_flags
from .logging import LoggerHandle, build_logger, singleton
from .sensitive import Secret, hide
from .wrapper import ClogHandler, Wrapper, wrap
from .writer import Writer

__all__ = [
    "consts",
    # settings
    "Settings",
    "LogLevel",
    "LogFormat",
    "SensitiveInfoHandling",
    "STDOUT",
    "STDERR",
    "get_log_file",
    "load_settings",
    "add_logging_flags",
    "settings_from_flags",
    # loggers and context
    "LoggerHandle",
    "LogContext",
    "singleton",
    "build_logger",
    "init",
    "seed",
    "ctx_or_seed",
    "from_ctx",
    "ctx_values",
    "current",
    "use",
    # builder
    "Builder",
    "ctx",
    "ctx_err",
    "flush",
    "Writer",
    "Wrapper",
    "wrap",
    "ClogHandler",
    # errors and secrets
    "ClueError",
    "error_values",
    "error_labels",
    "Secret",
    "hide",
]
