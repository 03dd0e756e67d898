# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Group diagnostics by the file that owns them."""

from __future__ import annotations

from collections.abc import Iterable

from .models import DiagnosticRecord

FileDiagnosticGroup = dict[str, list[DiagnosticRecord]]


def group_by_file(pairs: Iterable[tuple[str, DiagnosticRecord]]) -> FileDiagnosticGroup:
    """Return a fresh mapping of file path to its diagnostics.

    Paths are compared verbatim. Order within each file follows *pairs* and
    duplicate diagnostics are kept.
    """

    grouped: FileDiagnosticGroup = {}
    for path, diagnostic in pairs:
        grouped.setdefault(path, []).append(diagnostic)
    return grouped


def count_diagnostics(group: FileDiagnosticGroup) -> int:
    """Return the total number of diagnostics across all files."""

    return sum(len(entries) for entries in group.values())


__all__ = ["FileDiagnosticGroup", "count_diagnostics", "group_by_file"]
