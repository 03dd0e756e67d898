# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Sequence a PMD run from command construction to published diagnostics."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .aggregate import FileDiagnosticGroup, count_diagnostics, group_by_file
from .command import build_pmd_command
from .config import ConfigurationError, PmdConfig, check_pmd_path, check_ruleset_path
from .diagnostics import build_diagnostic
from .interfaces import DiagnosticsSink, DocumentProvider, OutputChannel, ProcessExecutor, StatusIndicator
from .logging import fail
from .models import DiagnosticRecord, ProcessResult, PublishedFile
from .process import ShellProcessExecutor
from .ranges import adjust_ranges
from .severity import Severity, Thresholds
from .sinks import FileSystemDocumentProvider, LoggingOutputChannel


class RunState(str, Enum):
    """Lifecycle of a single PMD run."""

    IDLE = "idle"
    COMMAND_BUILT = "command_built"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"


class RunReport(BaseModel):
    """Summary of what a run executed and published."""

    model_config = ConfigDict(validate_assignment=True)

    state: RunState
    command: str | None = None
    issue_count: int = 0
    process: ProcessResult | None = None
    diagnostics: dict[str, list[DiagnosticRecord]] = Field(default_factory=dict)
    published: list[PublishedFile] = Field(default_factory=list)
    skipped_lines: int = 0
    errors: list[str] = Field(default_factory=list)
    error: str | None = None
    superseded: bool = False

    @property
    def ok(self) -> bool:
        """Return ``True`` when the run completed."""

        return self.state is RunState.COMPLETED

    def published_count(self) -> int:
        """Return the number of diagnostics handed to the sink."""

        return sum(len(entry.diagnostics) for entry in self.published)

    def has_errors(self) -> bool:
        """Return ``True`` when any published diagnostic is an error."""

        return any(
            diagnostic.severity is Severity.ERROR for entry in self.published for diagnostic in entry.diagnostics
        )


def translate_lines(
    lines: Iterable[str],
    thresholds: Thresholds,
    channel: OutputChannel,
) -> tuple[FileDiagnosticGroup, int]:
    """Convert report rows into a fresh per-file diagnostic group.

    Args:
        lines: Non-blank rows of PMD output.
        thresholds: Priority cut-offs used for severity classification.
        channel: Output channel receiving per-row failures.

    Returns:
        tuple[FileDiagnosticGroup, int]: Grouped diagnostics and the number of
        rows that produced no diagnostic.
    """

    pairs: list[tuple[str, DiagnosticRecord]] = []
    skipped = 0
    for line in lines:
        try:
            built = build_diagnostic(line, thresholds)
        except Exception as exc:  # noqa: BLE001 - a single bad row never aborts the batch
            channel.append_line(f"Failed to parse PMD row {line!r}: {exc}")
            skipped += 1
            continue
        if built is None:
            skipped += 1
            continue
        pairs.append(built)
    return group_by_file(pairs), skipped


class PmdRunner:
    """Run PMD over a target and publish the resulting diagnostics.

    Each call to :meth:`run` takes a new generation number. File publishes
    belonging to a run that has since been superseded are dropped so they
    cannot overwrite the results of the newer run.
    """

    def __init__(
        self,
        config: PmdConfig,
        *,
        sink: DiagnosticsSink,
        status: StatusIndicator,
        documents: DocumentProvider | None = None,
        executor: ProcessExecutor | None = None,
        channel: OutputChannel | None = None,
        use_emoji: bool = True,
        use_color: bool | None = None,
    ) -> None:
        self._config = config
        self._sink = sink
        self._status = status
        self._documents = documents or FileSystemDocumentProvider()
        self._executor = executor or ShellProcessExecutor(timeout=config.timeout)
        self._channel = channel or LoggingOutputChannel()
        self._use_emoji = use_emoji
        self._use_color = use_color
        self._generation = 0
        self._state = RunState.IDLE

    @property
    def state(self) -> RunState:
        """Return the state of the most recent run."""

        return self._state

    @property
    def generation(self) -> int:
        """Return the generation number of the most recent run."""

        return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _set_state(self, generation: int, state: RunState) -> None:
        if self._is_current(generation):
            self._state = state

    def build_command(self, target_path: str | Path) -> str:
        """Validate the configured paths and return the PMD command for *target_path*.

        Raises:
            ConfigurationError: If the installation directory or ruleset is missing.
        """

        try:
            pmd_path = check_pmd_path(self._config.pmd_path)
        except ConfigurationError:
            self._channel.append_line(str(self._config.pmd_path))
            raise
        ruleset_path = check_ruleset_path(self._config.ruleset_path)
        return build_pmd_command(pmd_path, ruleset_path, target_path, java=self._config.java)

    async def run(self, target_path: str | Path) -> RunReport:
        """Run PMD over *target_path* and publish diagnostics per file.

        Only configuration problems fail the run. Process errors, unparseable
        rows, unreadable files and out-of-range lines are logged to the output
        channel and recorded on the returned report.
        """

        self._generation += 1
        generation = self._generation
        self._state = RunState.IDLE

        try:
            command = self.build_command(target_path)
        except ConfigurationError as exc:
            self._set_state(generation, RunState.FAILED)
            fail(str(exc), use_emoji=self._use_emoji, use_color=self._use_color)
            return RunReport(state=RunState.FAILED, error=str(exc))

        self._set_state(generation, RunState.COMMAND_BUILT)
        self._channel.append_line(f"PMD Command: {command}")

        self._set_state(generation, RunState.EXECUTING)
        result = await self._executor.execute(command)
        self._log_process(result)

        report = RunReport(state=RunState.COMPLETED, command=command, process=result)
        if not self._is_current(generation):
            self._channel.append_line(f"Discarding output of superseded run for {target_path}")
            report.superseded = True
            return report

        lines = result.stdout_lines()
        # PMD prints a header row ahead of the findings.
        report.issue_count = max(len(lines) - 1, 0)
        self._status.update(report.issue_count)

        group, skipped = translate_lines(lines, self._config.thresholds, self._channel)
        report.diagnostics = group
        report.skipped_lines = skipped

        outcomes = await self._publish_all(group, generation)
        for published, errors in outcomes:
            if published is not None:
                report.published.append(published)
            report.errors.extend(errors)
        if not self._is_current(generation):
            report.superseded = True

        self._set_state(generation, RunState.COMPLETED)
        self._channel.append_line(
            f"Published {report.published_count()} of {count_diagnostics(group)} diagnostics "
            f"across {len(report.published)} files",
        )
        return report

    def _log_process(self, result: ProcessResult) -> None:
        self._channel.append_line(f"error: {result.error}")
        self._channel.append_line(f"stdout: {result.stdout}")
        self._channel.append_line(f"stderr: {result.stderr}")

    async def _publish_all(
        self,
        group: FileDiagnosticGroup,
        generation: int,
    ) -> list[tuple[PublishedFile | None, list[str]]]:
        semaphore = asyncio.Semaphore(self._config.max_concurrent_reads)

        async def _bounded(
            path: str,
            diagnostics: Sequence[DiagnosticRecord],
        ) -> tuple[PublishedFile | None, list[str]]:
            async with semaphore:
                return await self._publish_file(path, diagnostics, generation)

        return list(await asyncio.gather(*(_bounded(path, diags) for path, diags in group.items())))

    async def _publish_file(
        self,
        path: str,
        diagnostics: Sequence[DiagnosticRecord],
        generation: int,
    ) -> tuple[PublishedFile | None, list[str]]:
        try:
            content = await self._documents.read_text(path)
        except Exception as exc:  # noqa: BLE001 - one unreadable file never aborts the others
            message = f"Unable to open {path}: {exc}"
            self._channel.append_line(message)
            return None, [message]

        adjusted, range_errors = adjust_ranges(diagnostics, content, path=path)
        errors = [str(exc) for exc in range_errors]
        for message in errors:
            self._channel.append_line(message)

        if not self._is_current(generation):
            self._channel.append_line(f"Dropping stale diagnostics for {path}")
            return None, errors

        self._sink.delete(path)
        self._sink.set(path, adjusted)
        return PublishedFile(path=path, diagnostics=tuple(adjusted)), errors


__all__ = ["PmdRunner", "RunReport", "RunState", "translate_lines"]
