# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Narrow diagnostic ranges to the meaningful text of their line."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Final

from .models import DiagnosticRecord, Range


# Only the three newline conventions end a line; form feeds and Unicode separators stay in the text.
_LINE_BREAK: Final = re.compile(r"\r\n|\r|\n")


class RangeAdjustmentError(LookupError):
    """Raised when a diagnostic points past the end of its file."""

    def __init__(self, path: str | None, line: int, line_count: int) -> None:
        location = path or "<document>"
        super().__init__(f"{location}: line {line + 1} is outside the document ({line_count} lines)")
        self.path = path
        self.line = line
        self.line_count = line_count


def _as_lines(content: str | Sequence[str]) -> Sequence[str]:
    if isinstance(content, str):
        lines = _LINE_BREAK.split(content)
        if lines[-1] == "":
            lines.pop()
        return lines
    return content


def first_non_whitespace_index(text: str) -> int:
    """Return the index of the first non-whitespace character, or ``len(text)``."""

    return len(text) - len(text.lstrip())


def adjust_range(
    diagnostic: DiagnosticRecord,
    content: str | Sequence[str],
    *,
    path: str | None = None,
) -> DiagnosticRecord:
    """Replace the range of *diagnostic* so it skips indentation and spans to line end.

    Args:
        diagnostic: Diagnostic whose start line is used; updated in place.
        content: Full document text or its lines.
        path: Optional file path used in error messages.

    Returns:
        DiagnosticRecord: The same diagnostic, for chaining.

    Raises:
        RangeAdjustmentError: If the start line does not exist in *content*.
    """

    lines = _as_lines(content)
    line_index = diagnostic.range.start.line
    if line_index < 0 or line_index >= len(lines):
        raise RangeAdjustmentError(path, line_index, len(lines))
    text = lines[line_index]
    diagnostic.range = Range.from_coordinates(
        line_index,
        first_non_whitespace_index(text),
        line_index,
        len(text),
    )
    return diagnostic


def adjust_ranges(
    diagnostics: Iterable[DiagnosticRecord],
    content: str | Sequence[str],
    *,
    path: str | None = None,
) -> tuple[list[DiagnosticRecord], list[RangeAdjustmentError]]:
    """Adjust every diagnostic, separating the ones that do not fit the document."""

    lines = _as_lines(content)
    adjusted: list[DiagnosticRecord] = []
    errors: list[RangeAdjustmentError] = []
    for diagnostic in diagnostics:
        try:
            adjusted.append(adjust_range(diagnostic, lines, path=path))
        except RangeAdjustmentError as exc:
            errors.append(exc)
    return adjusted, errors


__all__ = ["RangeAdjustmentError", "adjust_range", "adjust_ranges", "first_non_whitespace_index"]
