# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final

from pydantic import BaseModel, ConfigDict

DEFAULT_ERROR_THRESHOLD: Final[int] = 1
DEFAULT_WARNING_THRESHOLD: Final[int] = 3


class Severity(str, Enum):
    """Severity levels derived from PMD rule priorities."""

    ERROR = "error"
    WARNING = "warning"
    HINT = "hint"


def classify(priority: int | None, error_threshold: int, warning_threshold: int) -> Severity:
    """Map a PMD *priority* onto a :class:`Severity`.

    Lower priorities are more severe. Anything at or below ``error_threshold``
    is an error, anything else at or below ``warning_threshold`` a warning and
    the remainder are hints. A missing priority sits in no band and is a hint.

    Args:
        priority: Priority reported by PMD for the finding, ``None`` when unparseable.
        error_threshold: Highest priority still reported as an error.
        warning_threshold: Highest priority still reported as a warning.

    Returns:
        Severity: Classified severity level.
    """

    if priority is None:
        return Severity.HINT
    if priority <= error_threshold:
        return Severity.ERROR
    if priority <= warning_threshold:
        return Severity.WARNING
    return Severity.HINT


class Thresholds(BaseModel):
    """Pair of priority cut-offs used to classify findings."""

    model_config = ConfigDict(frozen=True)

    error: int = DEFAULT_ERROR_THRESHOLD
    warning: int = DEFAULT_WARNING_THRESHOLD

    def classify(self, priority: int | None) -> Severity:
        """Classify *priority* using the configured cut-offs."""

        return classify(priority, self.error, self.warning)

    @property
    def ordered(self) -> bool:
        """Return ``True`` when the error cut-off sits below the warning cut-off."""

        return self.error < self.warning


_SEVERITY_TO_SARIF_LEVEL: Final[dict[Severity, str]] = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
    Severity.HINT: "note",
}


def severity_to_sarif(severity: Severity) -> str:
    """Map :class:`Severity` to a SARIF reporting level."""

    return _SEVERITY_TO_SARIF_LEVEL.get(severity, "warning")


__all__ = [
    "DEFAULT_ERROR_THRESHOLD",
    "DEFAULT_WARNING_THRESHOLD",
    "Severity",
    "Thresholds",
    "classify",
    "severity_to_sarif",
]
