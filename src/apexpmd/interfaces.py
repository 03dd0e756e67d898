# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Collaborator interfaces the PMD runner publishes through."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .models import DiagnosticRecord, ProcessResult


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Store that holds the published diagnostics for each file."""

    def delete(self, path: str) -> None:
        """Drop every diagnostic recorded for ``path``."""

        raise NotImplementedError

    def set(self, path: str, diagnostics: Sequence[DiagnosticRecord]) -> None:
        """Replace the diagnostics recorded for ``path``."""

        raise NotImplementedError


@runtime_checkable
class StatusIndicator(Protocol):
    """Surface showing how many issues the last run reported."""

    def update(self, count: int) -> None:
        """Display ``count`` issues; hide the indicator when it is zero."""

        raise NotImplementedError


@runtime_checkable
class DocumentProvider(Protocol):
    """Asynchronous lookup of document text by path."""

    async def read_text(self, path: str) -> str:
        """Return the full text of the document at ``path``."""

        raise NotImplementedError


@runtime_checkable
class ProcessExecutor(Protocol):
    """Run a shell command to completion and capture its output."""

    async def execute(self, command: str) -> ProcessResult:
        """Execute ``command`` and return its captured result."""

        raise NotImplementedError


@runtime_checkable
class OutputChannel(Protocol):
    """Free-text log sink for advisory run output."""

    def append_line(self, text: str) -> None:
        """Append ``text`` as a new line."""

        raise NotImplementedError


__all__ = [
    "DiagnosticsSink",
    "DocumentProvider",
    "OutputChannel",
    "ProcessExecutor",
    "StatusIndicator",
]
