"""
Errors that carry structured metadata into the logs.

Any exception can be logged through a builder. Exceptions that expose
``values`` (a mapping) and ``labels`` (an iterable of strings) contribute
them to the record, and so does every exception in their
``__cause__``/``__context__`` chain.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional, Set


class ClueError(Exception):
    """
    Exception with attached key/value metadata and labels.

    Example:
        raise ClueError("badness").with_("cause", reason).label("configuration")
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.message = message
        self.values: Dict[Any, Any] = {}
        self.labels: Set[str] = set()
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def with_(self, *pairs: Any) -> "ClueError":
        """Add key/value pairs. An odd trailing key gets a ``None`` value."""

        for i in range(0, len(pairs), 2):
            value = pairs[i + 1] if i + 1 < len(pairs) else None
            self.values[pairs[i]] = value
        return self

    def with_map(self, values: Dict[Any, Any]) -> "ClueError":
        self.values.update(values)
        return self

    def label(self, *names: str) -> "ClueError":
        self.labels.update(names)
        return self


def _chain(err: BaseException) -> Iterator[BaseException]:
    seen = set()
    current: Optional[BaseException] = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        else:
            current = None if current.__suppress_context__ else current.__context__


def error_values(err: Optional[BaseException]) -> Dict[Any, Any]:
    """Return all metadata attached along the error chain; outer errors win."""

    if err is None:
        return {}

    merged: Dict[Any, Any] = {}
    for link in reversed(list(_chain(err))):
        values = getattr(link, "values", None)
        if isinstance(values, dict):
            merged.update(values)
    return merged


def error_labels(err: Optional[BaseException]) -> Set[str]:
    """Return the union of labels along the error chain."""

    if err is None:
        return set()

    labels: Set[str] = set()
    for link in _chain(err):
        found = getattr(link, "labels", None)
        if isinstance(found, (set, frozenset, list, tuple)):
            labels.update(str(label) for label in found)
    return labels
