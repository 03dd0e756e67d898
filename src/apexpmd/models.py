# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the apexpmd package."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity


class Position(BaseModel):
    """Zero-based line/character location inside a text document."""

    model_config = ConfigDict(frozen=True)

    line: int
    character: int


class Range(BaseModel):
    """Span of text annotated by a diagnostic."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @classmethod
    def from_coordinates(cls, start_line: int, start_col: int, end_line: int, end_col: int) -> Range:
        """Build a range from four zero-based coordinates."""

        return cls(
            start=Position(line=start_line, character=start_col),
            end=Position(line=end_line, character=end_col),
        )

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return ``(start_line, start_col, end_line, end_col)``."""

        return (self.start.line, self.start.character, self.end.line, self.end.character)


class ProblemRecord(BaseModel):
    """One finding parsed from a PMD CSV report row.

    ``line_number`` is zero based. Numeric columns PMD reported as something
    other than an integer are kept as ``None`` so callers can reject them.
    """

    model_config = ConfigDict(frozen=True)

    problem: str
    package_name: str
    file_path: str
    priority: int | None
    line_number: int | None
    message: str
    ruleset_name: str
    rule_name: str


class DiagnosticRecord(BaseModel):
    """Editor-facing diagnostic produced from a :class:`ProblemRecord`."""

    model_config = ConfigDict(validate_assignment=True)

    range: Range
    message: str
    severity: Severity
    rule: str | None = None
    ruleset: str | None = None
    package: str | None = None
    priority: int | None = None

    @property
    def line(self) -> int:
        """Return the zero-based line the diagnostic starts on."""

        return self.range.start.line


class ProcessResult(BaseModel):
    """Captured outcome of a single external process invocation."""

    model_config = ConfigDict(frozen=True)

    stdout: str = ""
    stderr: str = ""
    returncode: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the process spawned and exited with status zero."""

        return self.error is None and self.returncode == 0

    def stdout_lines(self) -> list[str]:
        """Return non-blank lines of standard output."""

        return [line for line in self.stdout.splitlines() if line.strip()]


class PublishedFile(BaseModel):
    """Record of diagnostics handed to the sink for one file."""

    model_config = ConfigDict(frozen=True)

    path: str
    diagnostics: tuple[DiagnosticRecord, ...] = Field(default_factory=tuple)


__all__ = [
    "DiagnosticRecord",
    "Position",
    "ProblemRecord",
    "ProcessResult",
    "PublishedFile",
    "Range",
]
