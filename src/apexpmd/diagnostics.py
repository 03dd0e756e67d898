# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Translate PMD report rows into editor diagnostics."""

from __future__ import annotations

from typing import Final

from .models import DiagnosticRecord, ProblemRecord, Range
from .parsers import parse_problem_line
from .severity import Thresholds

# Provisional end column; the real line length is only known once the file is read.
PLACEHOLDER_END_COLUMN: Final[int] = 100


def diagnostic_from_record(record: ProblemRecord, thresholds: Thresholds) -> DiagnosticRecord | None:
    """Return a diagnostic for *record* or ``None`` when it lacks a usable line number."""

    if record.line_number is None:
        return None
    return DiagnosticRecord(
        range=Range.from_coordinates(record.line_number, 0, record.line_number, PLACEHOLDER_END_COLUMN),
        message=record.message,
        severity=thresholds.classify(record.priority),
        rule=record.rule_name,
        ruleset=record.ruleset_name,
        package=record.package_name,
        priority=record.priority,
    )


def build_diagnostic(line: str, thresholds: Thresholds) -> tuple[str, DiagnosticRecord] | None:
    """Build a ``(file_path, diagnostic)`` pair from one raw report row.

    Args:
        line: Raw CSV row emitted by PMD.
        thresholds: Priority cut-offs used for severity classification.

    Returns:
        tuple[str, DiagnosticRecord] | None: The owning file path and its
        diagnostic, or ``None`` when the row is malformed, is the header or
        carries a non-numeric line number. A non-numeric priority yields a hint.
    """

    try:
        record = parse_problem_line(line)
    except ValueError:
        return None
    if record is None:
        return None
    diagnostic = diagnostic_from_record(record, thresholds)
    if diagnostic is None:
        return None
    return record.file_path, diagnostic


__all__ = ["PLACEHOLDER_END_COLUMN", "build_diagnostic", "diagnostic_from_record"]
