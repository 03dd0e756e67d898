# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for rendering published diagnostics."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from typing import Final

from rich.text import Text

from .console import get_console_manager
from .models import DiagnosticRecord
from .severity import Severity, severity_to_sarif

LOCATION_SEPARATOR: Final[str] = ":"


def join_output(lines: Sequence[str]) -> str:
    """Join output lines for deterministic console rendering."""

    return "\n".join(lines)


def severity_color(sev: Severity) -> str:
    """Return the rich colour name associated with a severity level."""

    return {
        Severity.ERROR: "red",
        Severity.WARNING: "yellow",
        Severity.HINT: "cyan",
    }.get(sev, "yellow")


def location(path: str, diagnostic: DiagnosticRecord) -> str:
    """Return ``path:line:column`` using one-based coordinates."""

    start = diagnostic.range.start
    return LOCATION_SEPARATOR.join((path, str(start.line + 1), str(start.character + 1)))


def concise_lines(group: Mapping[str, Sequence[DiagnosticRecord]]) -> list[str]:
    """Return one line per diagnostic, ordered by path then by report order."""

    lines: list[str] = []
    for path in sorted(group):
        for diagnostic in group[path]:
            rule = f" [{diagnostic.rule}]" if diagnostic.rule else ""
            lines.append(f"{location(path, diagnostic)}: {diagnostic.severity.value} {diagnostic.message}{rule}")
    return lines


def severity_totals(diagnostics: Iterable[DiagnosticRecord]) -> dict[Severity, int]:
    """Count diagnostics per severity, listing every level."""

    totals = dict.fromkeys(Severity, 0)
    for diagnostic in diagnostics:
        totals[diagnostic.severity] += 1
    return totals


def summary_line(group: Mapping[str, Sequence[DiagnosticRecord]]) -> str:
    """Return the totals line printed after the concise listing."""

    totals = severity_totals(diagnostic for entries in group.values() for diagnostic in entries)
    parts = ", ".join(f"{count} {severity.value}" for severity, count in totals.items())
    files = sum(1 for entries in group.values() if entries)
    return f"{sum(totals.values())} diagnostics in {files} files ({parts})"


def render_concise(
    group: Mapping[str, Sequence[DiagnosticRecord]],
    *,
    use_color: bool,
    use_emoji: bool = True,
) -> None:
    """Print *group* in the concise ``path:line:col: severity message`` format."""

    console = get_console_manager().get(color=use_color, emoji=use_emoji)
    for path in sorted(group):
        for diagnostic in group[path]:
            text = Text(location(path, diagnostic))
            text.append(": ")
            text.append(diagnostic.severity.value, style=severity_color(diagnostic.severity) if use_color else None)
            text.append(f" {diagnostic.message}")
            if diagnostic.rule:
                text.append(f" [{diagnostic.rule}]", style="dim" if use_color else None)
            console.print(text)
    console.print(summary_line(group), markup=False)


def to_json(group: Mapping[str, Sequence[DiagnosticRecord]]) -> str:
    """Serialise *group* as a JSON document keyed by file path."""

    payload: dict[str, list[dict[str, object]]] = {}
    for path in sorted(group):
        entries: list[dict[str, object]] = []
        for diagnostic in group[path]:
            data = diagnostic.model_dump(mode="json")
            data["level"] = severity_to_sarif(diagnostic.severity)
            entries.append(data)
        payload[path] = entries
    return json.dumps(payload, indent=2, sort_keys=True)


__all__ = [
    "concise_lines",
    "join_output",
    "location",
    "render_concise",
    "severity_color",
    "severity_totals",
    "summary_line",
    "to_json",
]
