# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Asynchronous wrapper around running the PMD shell command."""

from __future__ import annotations

import asyncio

# Bandit: the PMD invocation is a single shell string built from configured paths.
import subprocess  # nosec B404
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from .models import ProcessResult

TIMEOUT_RETURNCODE: Final[int] = 124


def _ensure_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode(errors="replace")


class ShellProcessExecutor:
    """Run commands through the shell and capture both output streams."""

    def __init__(
        self,
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> None:
        self._cwd = cwd
        self._env = dict(env) if env is not None else None
        self._timeout = timeout

    async def execute(self, command: str) -> ProcessResult:
        """Run *command* to completion.

        Spawn failures are reported through :attr:`ProcessResult.error` rather
        than raised. A timeout kills the process and reports status 124 with
        whatever output was captured.
        """

        try:
            # Bandit: the command string is assembled from validated configuration.
            proc = await asyncio.create_subprocess_shell(  # nosec B602
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=str(self._cwd) if self._cwd is not None else None,
                env=self._env,
            )
        except OSError as exc:
            return ProcessResult(error=f"failed to start command: {exc}")

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError:
            proc.kill()
            stdout, stderr = await proc.communicate()
            timeout_msg = f"Command timed out after {self._timeout:.1f}s"
            stderr_text = _ensure_text(stderr)
            return ProcessResult(
                stdout=_ensure_text(stdout),
                stderr=f"{stderr_text}\n{timeout_msg}" if stderr_text else timeout_msg,
                returncode=TIMEOUT_RETURNCODE,
                error=timeout_msg,
            )

        returncode = proc.returncode
        return ProcessResult(
            stdout=_ensure_text(stdout),
            stderr=_ensure_text(stderr),
            returncode=returncode,
            error=f"Command exited with status {returncode}" if returncode else None,
        )


__all__ = ["TIMEOUT_RETURNCODE", "ShellProcessExecutor"]
