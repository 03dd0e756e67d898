# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Construct the PMD command line."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

PMD_MAIN_CLASS: Final[str] = "net.sourceforge.pmd.PMD"
REPORT_FORMAT: Final[str] = "csv"
DEFAULT_JAVA: Final[str] = "java"


def _quote(value: str | Path) -> str:
    # Embedded double quotes are passed through unescaped.
    return f'"{value}"'


def pmd_classpath(install_dir: str | Path) -> str:
    """Return the classpath glob covering every jar shipped with PMD."""

    return os.path.join(str(install_dir), "lib", "*")


def build_pmd_command(
    install_dir: str | Path,
    ruleset_path: str | Path,
    target_path: str | Path,
    *,
    java: str = DEFAULT_JAVA,
) -> str:
    """Return the shell command that runs PMD over *target_path*.

    Args:
        install_dir: PMD installation directory containing ``lib/``.
        ruleset_path: Ruleset XML passed with ``-R``.
        target_path: File or directory analysed with ``-d``.
        java: Java launcher to invoke.

    Returns:
        str: Command string with every path argument double quoted.
    """

    return (
        f"{java} -cp {_quote(pmd_classpath(install_dir))} {PMD_MAIN_CLASS} "
        f"-d {_quote(target_path)} -f {REPORT_FORMAT} -R {_quote(ruleset_path)}"
    )


__all__ = ["DEFAULT_JAVA", "PMD_MAIN_CLASS", "REPORT_FORMAT", "build_pmd_command", "pmd_classpath"]
