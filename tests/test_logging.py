# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the user-facing output helpers."""

import pytest

from apexpmd.console import RichConsoleManager, detect_tty
from apexpmd.logging import MessageKind, fail, info, message, ok, section, status, warn


@pytest.mark.parametrize(
    ("emit", "text"),
    [(info, "starting"), (ok, "done"), (warn, "careful"), (fail, "broken")],
)
def test_messages_are_written_to_stderr(emit, text: str, capsys: pytest.CaptureFixture[str]) -> None:
    emit(text, use_emoji=False, use_color=False)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.strip() == text


def test_message_prefixes_emoji_when_enabled(capsys: pytest.CaptureFixture[str]) -> None:
    message(MessageKind.FAIL, "PMD Path not set", use_emoji=True, use_color=False)

    assert capsys.readouterr().err.strip() == "❌ PMD Path not set"


def test_section_and_status_belong_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    section("PMD", use_color=False)
    status("$(stop) 3 ISSUES", use_color=False)

    captured = capsys.readouterr()
    assert captured.err == ""
    assert captured.out.splitlines() == ["", "--- PMD ---", "$(stop) 3 ISSUES"]


def test_console_manager_separates_streams() -> None:
    manager = RichConsoleManager()

    report = manager.get(color=False, emoji=False)
    messages = manager.messages(color=False, emoji=False)

    assert report is not messages
    assert messages.stderr is True
    assert report.stderr is False
    assert manager.get(color=False, emoji=False) is report


def test_detect_tty_handles_streams_without_isatty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stderr", object())

    assert detect_tty(stderr=True) is False
