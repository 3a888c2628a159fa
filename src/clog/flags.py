"""Command line flags for logging settings."""

from __future__ import annotations

import argparse
from typing import List, Optional, Sequence

from .config import LogFormat, LogLevel, SensitiveInfoHandling, Settings

LOG_FILE_FN = "--log-file"
LOG_FORMAT_FN = "--log-format"
LOG_LEVEL_FN = "--log-level"
SENSITIVE_INFO_HANDLING_FN = "--sensitive-info-handling"
DEBUG_LABELS_FN = "--debug-labels"


def add_logging_flags(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Register the logging flags on an existing parser."""

    group = parser.add_argument_group("logging")

    group.add_argument(
        LOG_FILE_FN,
        dest="log_file",
        default="",
        help="Log file path, 'stdout', 'stderr' or '-' for stdout (default: CLOG_FILE env var or the user log dir)",
    )
    group.add_argument(
        LOG_FORMAT_FN,
        dest="log_format",
        choices=[fmt.value for fmt in LogFormat],
        default="",
        help="Log output format (default: text)",
    )
    group.add_argument(
        LOG_LEVEL_FN,
        dest="log_level",
        type=str.lower,
        choices=[level.value for level in LogLevel],
        default="",
        help="Minimum log level (default: info)",
    )
    group.add_argument(
        SENSITIVE_INFO_HANDLING_FN,
        dest="sensitive_info_handling",
        choices=[alg.value for alg in SensitiveInfoHandling],
        default="",
        help="How values marked as sensitive are logged (default: plaintext)",
    )
    group.add_argument(
        DEBUG_LABELS_FN,
        dest="debug_labels",
        action="append",
        default=[],
        help="Only emit debug logs carrying one of these labels; repeatable or comma separated",
    )

    return parser


def _split_labels(values: Sequence[str]) -> List[str]:
    labels: List[str] = []
    for value in values:
        labels.extend(part.strip() for part in value.split(",") if part.strip())
    return labels


def settings_from_flags(namespace: argparse.Namespace, base: Optional[Settings] = None) -> Settings:
    """Overlay parsed flag values onto ``base`` (default: settings from the environment)."""

    settings = base if base is not None else Settings()
    update = {}

    if getattr(namespace, "log_file", ""):
        update["file"] = namespace.log_file
    if getattr(namespace, "log_format", ""):
        update["format"] = namespace.log_format
    if getattr(namespace, "log_level", ""):
        update["level"] = namespace.log_level
    if getattr(namespace, "sensitive_info_handling", ""):
        update["sensitive_info_handling"] = namespace.sensitive_info_handling

    labels = _split_labels(getattr(namespace, "debug_labels", None) or [])
    if labels:
        update["only_log_debug_if_contains_label"] = labels

    return settings.model_copy(update=update)
