"""Unit tests for the logging command line flags."""

import argparse

import pytest

from clog.config import Settings
from clog.flags import add_logging_flags, settings_from_flags


@pytest.fixture()
def parser() -> argparse.ArgumentParser:
    return add_logging_flags(argparse.ArgumentParser(prog="app"))


def test_flags_map_onto_settings(parser: argparse.ArgumentParser) -> None:
    args = parser.parse_args(
        [
            "--log-file",
            "-",
            "--log-format",
            "json",
            "--log-level",
            "DEBUG",
            "--sensitive-info-handling",
            "hash",
            "--debug-labels",
            "clabel_api_call,clabel_cleanup",
            "--debug-labels",
            "clabel_progress_ticker",
        ]
    )

    resolved = settings_from_flags(args).ensure_defaults()

    assert resolved.file == "stdout"
    assert resolved.format == "json"
    assert resolved.level == "debug"
    assert resolved.sensitive_info_handling == "hash"
    assert resolved.only_log_debug_if_contains_label == [
        "clabel_api_call",
        "clabel_cleanup",
        "clabel_progress_ticker",
    ]


def test_unset_flags_keep_base_settings(parser: argparse.ArgumentParser) -> None:
    base = Settings(level="error", format="json")

    resolved = settings_from_flags(parser.parse_args([]), base=base)

    assert resolved.level == "error"
    assert resolved.format == "json"
    assert resolved.only_log_debug_if_contains_label == []


def test_invalid_choice_is_rejected(parser: argparse.ArgumentParser) -> None:
    with pytest.raises(SystemExit):
        parser.parse_args(["--log-format", "yaml"])
