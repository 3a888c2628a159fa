"""Logging settings and log-file resolution."""

from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

STDOUT = "stdout"
STDERR = "stderr"

# Names the output destination. "-" means stdout.
CLOG_FILE_ENV = "CLOG_FILE"

# Populated by the first resolution of the log file so that later lookups
# point at the same file for the life of the process.
resolved_log_file: str = ""


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    ERROR = "error"
    DISABLED = "disabled"


class LogFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


class SensitiveInfoHandling(str, Enum):
    PLAINTEXT = "plaintext"
    MASK = "mask"
    HASH = "hash"


def _valid(value: Optional[str], allowed: type[Enum]) -> bool:
    return bool(value) and value in {member.value for member in allowed}


class Settings(BaseSettings):
    """The user's preferred logging settings.

    Values are kept as plain strings so that anything read from flags or the
    environment survives until :meth:`ensure_defaults` normalises it.
    """

    file: str = Field(default="", description="Log destination: a path, 'stdout' or 'stderr'.")
    format: str = Field(default="", description="'text' for columnar console output, 'json' for one object per line.")
    level: str = Field(default="", description="Minimum level: debug, info, error or disabled.")
    sensitive_info_handling: str = Field(
        default="",
        description="How values marked as sensitive are rendered: plaintext, mask or hash.",
    )
    only_log_debug_if_contains_label: List[str] = Field(
        default_factory=list,
        description="When populated, debug logs are only emitted if they carry one of these labels.",
    )

    model_config = {
        "env_prefix": "CLOG_",
    }

    def ensure_defaults(self) -> "Settings":
        """Return a copy with every unset or invalid field replaced by its default."""

        update = {}

        level = (self.level or "").lower()
        update["level"] = level if _valid(level, LogLevel) else LogLevel.INFO.value

        fmt = (self.format or "").lower()
        update["format"] = fmt if _valid(fmt, LogFormat) else LogFormat.TEXT.value

        handling = (self.sensitive_info_handling or "").lower()
        update["sensitive_info_handling"] = (
            handling if _valid(handling, SensitiveInfoHandling) else SensitiveInfoHandling.PLAINTEXT.value
        )

        update["only_log_debug_if_contains_label"] = [
            label for label in self.only_log_debug_if_contains_label if label
        ]

        update["file"] = _ensure_writable(self.file) if self.file else get_log_file("")

        return self.model_copy(update=update)


def user_logs_dir() -> Path:
    """Platform directory under which default log files are written."""

    home = Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Logs"
    if sys.platform.startswith("win"):
        return Path(os.environ.get("LOCALAPPDATA") or home / "AppData" / "Local")

    state_home = os.environ.get("XDG_STATE_HOME")
    return Path(state_home) if state_home else home / ".local" / "state"


def default_log_location() -> str:
    """Return the default location for log file storage."""

    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%SZ")
    return str(user_logs_dir() / "clog" / f"{stamp}.log")


def get_log_file(override: str = "") -> str:
    """Resolve the file that logs should be written to.

    Order: explicit override, the previously resolved file, the ``CLOG_FILE``
    env var, then the default location. ``-`` is rewritten to stdout. When the
    result is a real path its directory is created; if that fails the logs go
    to stderr instead.
    """

    global resolved_log_file

    if override:
        return _ensure_writable(override)

    if resolved_log_file:
        return resolved_log_file

    target = os.environ.get(CLOG_FILE_ENV) or default_log_location()
    resolved_log_file = _ensure_writable(target)

    return resolved_log_file


def _ensure_writable(target: str) -> str:
    if target == "-":
        return STDOUT

    if target in (STDOUT, STDERR):
        return target

    try:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
    except (OSError, ValueError):
        return STDERR

    return target


def reset_resolved_log_file() -> None:
    """Forget the cached log-file resolution."""

    global resolved_log_file
    resolved_log_file = ""


def load_settings() -> Settings:
    """Load configuration using pydantic-settings."""

    return Settings()  # type: ignore[arg-type]
