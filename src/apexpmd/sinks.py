# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Default collaborator implementations used outside an editor."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Final

from .logging import status
from .models import DiagnosticRecord

LOGGER_NAME: Final[str] = "apexpmd"
STATUS_ICON: Final[str] = "$(stop)"


class InMemoryDiagnosticsSink:
    """Diagnostics collection with per-file replace semantics."""

    def __init__(self) -> None:
        self._entries: dict[str, list[DiagnosticRecord]] = {}

    def delete(self, path: str) -> None:
        self._entries.pop(path, None)

    def set(self, path: str, diagnostics: Sequence[DiagnosticRecord]) -> None:
        self._entries[path] = list(diagnostics)

    def get(self, path: str) -> list[DiagnosticRecord]:
        """Return the diagnostics published for *path* (empty when none)."""

        return list(self._entries.get(path, ()))

    def items(self) -> Iterator[tuple[str, list[DiagnosticRecord]]]:
        """Yield ``(path, diagnostics)`` pairs in publish order."""

        for path, diagnostics in self._entries.items():
            yield path, list(diagnostics)

    def __len__(self) -> int:
        return len(self._entries)


class StatusBarIndicator:
    """Issue counter mirroring an editor status bar item."""

    def __init__(self, *, use_color: bool = True, use_emoji: bool = True) -> None:
        self._use_color = use_color
        self._use_emoji = use_emoji
        self.count = 0
        self.text = ""
        self.visible = False

    def update(self, count: int) -> None:
        self.count = max(count, 0)
        if self.count > 0:
            label = "1 ISSUE" if self.count == 1 else f"{self.count} ISSUES"
            self.text = f"{STATUS_ICON} {label}"
            self.visible = True
        else:
            self.text = ""
            self.visible = False

    def render(self) -> None:
        """Print the indicator text when it is visible."""

        if not self.visible:
            return
        status(self.text, use_color=self._use_color, use_emoji=self._use_emoji)


class FileSystemDocumentProvider:
    """Read documents from disk without blocking the event loop."""

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    async def read_text(self, path: str) -> str:
        return await asyncio.to_thread(Path(path).read_text, encoding=self._encoding, errors="replace")


class LoggingOutputChannel:
    """Output channel forwarding each line to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(LOGGER_NAME)

    def append_line(self, text: str) -> None:
        self._logger.info("%s", text)


__all__ = [
    "FileSystemDocumentProvider",
    "InMemoryDiagnosticsSink",
    "LOGGER_NAME",
    "LoggingOutputChannel",
    "StatusBarIndicator",
]
