# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser for the CSV report PMD writes with ``-f csv``."""

from __future__ import annotations

import csv
import re
from typing import Final

from .models import ProblemRecord

REPORT_COLUMNS: Final[tuple[str, ...]] = (
    "problem",
    "package",
    "file",
    "priority",
    "line",
    "description",
    "ruleset",
    "rule",
)

_QUOTED_FIELD: Final[str] = r'"(?:[^"]|"")*"'
QUOTED_ROW_PATTERN: Final[re.Pattern[str]] = re.compile(rf"^{_QUOTED_FIELD}(?:,{_QUOTED_FIELD})*$")
_SPACE_RUN: Final[re.Pattern[str]] = re.compile(r" {2,}")


def _coerce_optional_int(value: str) -> int | None:
    try:
        return int(value.strip())
    except ValueError:
        return None


def collapse_spaces(text: str) -> str:
    """Return *text* with every run of spaces reduced to a single space."""

    return _SPACE_RUN.sub(" ", text)


def split_report_row(line: str) -> list[str] | None:
    """Split one report row into its unquoted fields.

    Args:
        line: Raw text of a single report row.

    Returns:
        list[str] | None: Field values when the row consists of exactly
        :data:`REPORT_COLUMNS` double-quoted fields, otherwise ``None``.
    """

    row = line.strip()
    if not QUOTED_ROW_PATTERN.match(row):
        return None
    try:
        fields = next(csv.reader([row], strict=True))
    except (csv.Error, StopIteration):
        return None
    if len(fields) != len(REPORT_COLUMNS):
        return None
    return fields


def parse_problem_line(line: str) -> ProblemRecord | None:
    """Parse one PMD CSV row into a :class:`ProblemRecord`.

    The PMD line column is one based; the record stores it zero based.
    Rows that do not split into the eight expected columns yield ``None``
    so callers can skip them.
    """

    fields = split_report_row(line)
    if fields is None:
        return None
    values = dict(zip(REPORT_COLUMNS, fields, strict=True))
    reported_line = _coerce_optional_int(values["line"])
    return ProblemRecord(
        problem=values["problem"],
        package_name=values["package"],
        file_path=values["file"],
        priority=_coerce_optional_int(values["priority"]),
        line_number=reported_line - 1 if reported_line is not None else None,
        message=collapse_spaces(values["description"]),
        ruleset_name=values["ruleset"],
        rule_name=values["rule"],
    )


__all__ = [
    "QUOTED_ROW_PATTERN",
    "REPORT_COLUMNS",
    "collapse_spaces",
    "parse_problem_line",
    "split_report_row",
]
