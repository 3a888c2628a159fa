"""
The builder is the primary logging handle.

Most calls in daily use return or modify a :class:`Builder`. It gathers the
data passed to it until a level method (``debug``, ``info`` or ``error``) is
called, then consumes all of it to emit a single record.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Set

from .consts import KEY_COMMENTS, KEY_ERROR, KEY_ERROR_LABELS, KEY_LABELS, RESERVED_KEYS
from .context import LogContext, ctx_values, from_ctx, resolve
from .errors import error_labels, error_values

DEBUG = "debug"
INFO = "info"
ERROR = "error"


def _field_name(key: Any) -> str:
    name = str(key)
    return f"{name}_" if name in RESERVED_KEYS else name


class Builder:
    """Accumulates values, labels, comments and an error for one log call.

    A builder belongs to a single call chain and is not safe to mutate from
    several threads at once.
    """

    def __init__(self, log_ctx: Optional[LogContext] = None) -> None:
        self.ctx = resolve(log_ctx)
        self.handle = from_ctx(self.ctx)
        self.exc: Optional[BaseException] = None
        self.values: Dict[Any, Any] = {}
        self.labels: Set[str] = set()
        self.comments: Set[str] = set()

    def err(self, err: Optional[BaseException]) -> "Builder":
        """Attach an error.

        When logged, the error's own values and labels are added to the
        record. Given ``ClueError("badness").with_("cause", reason)`` the
        record gets both ``error="badness"`` and ``cause=reason``.
        """

        self.exc = err
        return self

    def label(self, *names: str) -> "Builder":
        """Add labels to the record.

        Labels categorise logs into broad concepts like "configuration" or
        "process kickoff". They also drive debug filtering: settings can
        restrict debug logs to those carrying one of a set of labels.
        """

        self.labels.update(names)
        return self

    def comment(self, text: str) -> "Builder":
        """Embed a comment in the record, so nobody has to go back to the code for it."""

        self.comments.add(text)
        return self

    def with_(self, *pairs: Any) -> "Builder":
        """Add alternating key/value pairs. An odd trailing key gets a ``None`` value.

        Keys the logger writes itself (``self``, ``event``, ``msg``, ``level``,
        ``timestamp``) are emitted with a trailing underscore, e.g. ``level_``.
        """

        for i in range(0, len(pairs), 2):
            self.values[pairs[i]] = pairs[i + 1] if i + 1 < len(pairs) else None
        return self

    def fields(self) -> Dict[str, Any]:
        """Merge everything into the key/value set of the record.

        Context values are overridden by error values, and both by values
        added on the builder.
        """

        merged = ctx_values(self.ctx)

        if self.exc is not None:
            merged.update(error_values(self.exc))
            merged[KEY_ERROR] = str(self.exc) or type(self.exc).__name__
            merged[KEY_ERROR_LABELS] = sorted(error_labels(self.exc))

        merged.update(self.values)

        merged[KEY_LABELS] = sorted(self.labels)
        merged[KEY_COMMENTS] = sorted(self.comments)

        return {_field_name(key): value for key, value in merged.items()}

    def _suppressed(self, level: str) -> bool:
        if level != DEBUG:
            return False

        allowed = self.handle.settings.only_log_debug_if_contains_label
        return bool(allowed) and not self.labels.intersection(allowed)

    def log(self, level: str, msg: str) -> None:
        if self._suppressed(level):
            return

        logger = self.handle.logger.bind(**self.fields())
        getattr(logger, level)(msg)

    def debug(self, msg: str) -> None:
        """Debug level logging. Add a label whenever possible so debug output can be filtered."""

        self.log(DEBUG, msg)

    def info(self, msg: str) -> None:
        self.log(INFO, msg)

    def error(self, msg: str) -> None:
        """Error level logging. An attached error is optional, at this level or any other."""

        self.log(ERROR, msg)


def ctx(log_ctx: Optional[LogContext] = None) -> Builder:
    """Return a new builder for the given (or active) context."""

    return Builder(log_ctx)


def ctx_err(log_ctx: Optional[LogContext], err: Optional[BaseException]) -> Builder:
    """Return a new builder with the error already attached."""

    return Builder(log_ctx).err(err)


def flush(log_ctx: Optional[LogContext] = None) -> None:
    """Write out buffered logs. Call once during graceful shutdown."""

    from_ctx(log_ctx).sync()
