"""Rendering of values marked as sensitive."""

from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import Any, Dict, Optional

from .config import SensitiveInfoHandling

MASK = "***"

_handling = SensitiveInfoHandling.PLAINTEXT
_hash_key = secrets.token_bytes(32)


def set_hasher(handling: str, key: Optional[bytes] = None) -> None:
    """Select how :class:`Secret` values are rendered for the rest of the process."""

    global _handling, _hash_key

    try:
        _handling = SensitiveInfoHandling(handling)
    except ValueError:
        _handling = SensitiveInfoHandling.PLAINTEXT

    if key:
        _hash_key = key


def current_handling() -> SensitiveInfoHandling:
    return _handling


def conceal(value: Any) -> str:
    text = str(value)

    if _handling is SensitiveInfoHandling.MASK:
        return MASK
    if _handling is SensitiveInfoHandling.HASH:
        return hmac.new(_hash_key, text.encode("utf-8"), hashlib.sha256).hexdigest()[:16]
    return text


class Secret:
    """Wraps a value that must not reach the logs unaltered."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def conceal(self) -> str:
        return conceal(self.value)

    def __str__(self) -> str:
        return self.conceal()

    def __repr__(self) -> str:
        return f"Secret({self.conceal()!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Secret) and other.value == self.value

    def __hash__(self) -> int:
        return hash(("clog.Secret", self.value))


def hide(value: Any) -> Secret:
    return Secret(value)


def _render(value: Any) -> Any:
    if isinstance(value, Secret):
        return value.conceal()
    if isinstance(value, dict):
        return {key: _render(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_render(item) for item in value]
    return value


def conceal_secrets(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """structlog processor that renders every Secret in the event."""

    return {key: _render(value) for key, value in event_dict.items()}
