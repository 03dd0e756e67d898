# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from apexpmd.config import PmdConfig
from apexpmd.severity import Thresholds

from fakes import RecordingChannel


@pytest.fixture
def pmd_install(tmp_path: Path) -> Path:
    """Return a directory shaped like a PMD installation."""

    install = tmp_path / "pmd"
    (install / "lib").mkdir(parents=True)
    return install


@pytest.fixture
def ruleset(tmp_path: Path) -> Path:
    """Return an existing ruleset file."""

    path = tmp_path / "rules.xml"
    path.write_text("<ruleset/>\n", encoding="utf-8")
    return path


@pytest.fixture
def pmd_config(pmd_install: Path, ruleset: Path) -> PmdConfig:
    """Return a configuration whose preconditions hold."""

    return PmdConfig(pmd_path=pmd_install, ruleset_path=ruleset, thresholds=Thresholds(error=1, warning=3))


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()
