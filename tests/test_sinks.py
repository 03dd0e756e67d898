# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the default collaborator implementations."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import pytest

from apexpmd.interfaces import DiagnosticsSink, DocumentProvider, OutputChannel, ProcessExecutor, StatusIndicator
from apexpmd.models import DiagnosticRecord, Range
from apexpmd.process import ShellProcessExecutor
from apexpmd.severity import Severity
from apexpmd.sinks import (
    LOGGER_NAME,
    FileSystemDocumentProvider,
    InMemoryDiagnosticsSink,
    LoggingOutputChannel,
    StatusBarIndicator,
)


def _diag(message: str) -> DiagnosticRecord:
    return DiagnosticRecord(range=Range.from_coordinates(0, 0, 0, 1), message=message, severity=Severity.ERROR)


def test_default_implementations_satisfy_protocols() -> None:
    assert isinstance(InMemoryDiagnosticsSink(), DiagnosticsSink)
    assert isinstance(StatusBarIndicator(), StatusIndicator)
    assert isinstance(FileSystemDocumentProvider(), DocumentProvider)
    assert isinstance(ShellProcessExecutor(), ProcessExecutor)
    assert isinstance(LoggingOutputChannel(), OutputChannel)


def test_in_memory_sink_replaces_per_file() -> None:
    sink = InMemoryDiagnosticsSink()
    sink.set("A", [_diag("one"), _diag("two")])
    sink.set("B", [_diag("three")])

    sink.delete("A")
    sink.set("A", [_diag("four")])
    sink.delete("missing")

    assert [diag.message for diag in sink.get("A")] == ["four"]
    assert dict(sink.items()).keys() == {"A", "B"}
    assert len(sink) == 2


@pytest.mark.parametrize(
    ("count", "text", "visible"),
    [(0, "", False), (1, "$(stop) 1 ISSUE", True), (7, "$(stop) 7 ISSUES", True), (-1, "", False)],
)
def test_status_bar_text(count: int, text: str, visible: bool) -> None:
    status = StatusBarIndicator()

    status.update(count)

    assert status.text == text
    assert status.visible is visible


def test_status_bar_render_hidden_prints_nothing(capsys: pytest.CaptureFixture[str]) -> None:
    status = StatusBarIndicator(use_color=False)
    status.update(0)

    status.render()

    assert capsys.readouterr().out == ""


def test_status_bar_render_visible(capsys: pytest.CaptureFixture[str]) -> None:
    status = StatusBarIndicator(use_color=False)
    status.update(2)

    status.render()

    assert "$(stop) 2 ISSUES" in capsys.readouterr().out


def test_file_system_document_provider(tmp_path: Path) -> None:
    source = tmp_path / "Foo.cls"
    source.write_text("public class Foo {}\n", encoding="utf-8")

    text = asyncio.run(FileSystemDocumentProvider().read_text(str(source)))

    assert text == "public class Foo {}\n"
    with pytest.raises(OSError):
        asyncio.run(FileSystemDocumentProvider().read_text(str(tmp_path / "missing.cls")))


def test_logging_output_channel(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        LoggingOutputChannel().append_line("PMD Command: java")

    assert caplog.messages == ["PMD Command: java"]
