"""File-like adapter that turns the logger in a context into a writable stream."""

from __future__ import annotations

from typing import Optional, Union

from .builder import INFO, Builder
from .context import LogContext


class Writer:
    """Every write becomes one info-level record.

    Logging must never break the writer contract, so ``write`` always
    reports the full length and never raises.
    """

    def __init__(self, log_ctx: Optional[LogContext] = None) -> None:
        self.ctx = log_ctx

    def write(self, data: Union[bytes, str]) -> int:
        text = data.decode("utf-8", errors="replace") if isinstance(data, (bytes, bytearray)) else str(data)
        try:
            Builder(self.ctx).log(INFO, text)
        except Exception:  # noqa: BLE001 - sink failures are dropped
            pass
        return len(data)

    def flush(self) -> None:
        pass

    def writable(self) -> bool:
        return True
