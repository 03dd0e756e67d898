# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line entry point for running PMD over Apex sources."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any, Final

import typer

from .config import ConfigError, PmdConfig, load_config
from .console import detect_tty
from .logging import fail, info, ok, section, warn
from .models import DiagnosticRecord
from .orchestrator import PmdRunner, RunState
from .reporting import concise_lines, join_output, render_concise, to_json
from .sinks import LOGGER_NAME, InMemoryDiagnosticsSink, StatusBarIndicator

EXIT_OK: Final[int] = 0
EXIT_ERRORS_FOUND: Final[int] = 1
EXIT_CONFIG_ERROR: Final[int] = 2

_OUTPUT_FORMATS: Final[tuple[str, ...]] = ("concise", "raw", "json")

app = typer.Typer(
    name="apex-pmd",
    help="Run PMD over Apex sources and report diagnostics.",
    no_args_is_help=True,
    add_completion=False,
)


@dataclass(slots=True)
class PresentationOptions:
    """Output preferences shared by every command."""

    use_color: bool
    use_emoji: bool


TargetArgument = Annotated[Path, typer.Argument(help="File or directory to analyse.")]
RootOption = Annotated[Path, typer.Option("--root", help="Project root used to discover configuration.")]
ConfigOption = Annotated[Path | None, typer.Option("--config", help="Explicit configuration file.")]
PmdPathOption = Annotated[Path | None, typer.Option("--pmd-path", help="PMD installation directory.")]
RulesetOption = Annotated[Path | None, typer.Option("--ruleset", help="Ruleset XML passed to PMD.")]
ErrorThresholdOption = Annotated[
    int | None,
    typer.Option("--error-threshold", help="Highest priority reported as an error."),
]
WarningThresholdOption = Annotated[
    int | None,
    typer.Option("--warning-threshold", help="Highest priority reported as a warning."),
]
JavaOption = Annotated[str | None, typer.Option("--java", help="Java launcher used to start PMD.")]
TimeoutOption = Annotated[float | None, typer.Option("--timeout", help="Seconds before PMD is killed.")]


def _resolve_config(
    root: Path,
    config_file: Path | None,
    overrides: dict[str, Any],
    presentation: PresentationOptions,
) -> PmdConfig:
    try:
        config = load_config(root, config_file=config_file, overrides=overrides)
    except ConfigError as exc:
        fail(str(exc), use_emoji=presentation.use_emoji, use_color=presentation.use_color)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc
    if not config.thresholds.ordered:
        warn(
            f"error threshold {config.thresholds.error} is not below warning threshold "
            f"{config.thresholds.warning}; warnings will never be reported",
            use_emoji=presentation.use_emoji,
            use_color=presentation.use_color,
        )
    return config


def _overrides(
    *,
    pmd_path: Path | None,
    ruleset: Path | None,
    error_threshold: int | None,
    warning_threshold: int | None,
    java: str | None,
    timeout: float | None,
) -> dict[str, Any]:
    return {
        "pmd_path": pmd_path.resolve() if pmd_path is not None else None,
        "ruleset_path": ruleset.resolve() if ruleset is not None else None,
        "error_threshold": error_threshold,
        "warning_threshold": warning_threshold,
        "java": java,
        "timeout": timeout,
    }


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO if verbose else logging.WARNING)
    if verbose and not logger.handlers:
        logger.addHandler(logging.StreamHandler())


@app.command("run")
def run_command(
    target: TargetArgument,
    root: RootOption = Path(),
    config_file: ConfigOption = None,
    pmd_path: PmdPathOption = None,
    ruleset: RulesetOption = None,
    error_threshold: ErrorThresholdOption = None,
    warning_threshold: WarningThresholdOption = None,
    java: JavaOption = None,
    timeout: TimeoutOption = None,
    output_format: Annotated[
        str,
        typer.Option("--format", help="Output format: concise, raw or json."),
    ] = "concise",
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log the PMD command and output.")] = False,
    color: Annotated[bool, typer.Option("--color/--no-color", help="Toggle ANSI colour output.")] = True,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji output.")] = True,
) -> None:
    """Run PMD over TARGET and print the diagnostics it reports."""

    presentation = PresentationOptions(use_color=color and detect_tty(), use_emoji=emoji)
    if output_format not in _OUTPUT_FORMATS:
        fail(f"unknown format '{output_format}'", use_emoji=emoji, use_color=presentation.use_color)
        raise typer.Exit(code=EXIT_CONFIG_ERROR)
    _configure_logging(verbose)

    overrides = _overrides(
        pmd_path=pmd_path,
        ruleset=ruleset,
        error_threshold=error_threshold,
        warning_threshold=warning_threshold,
        java=java,
        timeout=timeout,
    )
    config = _resolve_config(root, config_file, overrides, presentation)

    sink = InMemoryDiagnosticsSink()
    status = StatusBarIndicator(use_color=presentation.use_color, use_emoji=emoji)
    runner = PmdRunner(
        config,
        sink=sink,
        status=status,
        use_emoji=emoji,
        use_color=presentation.use_color,
    )
    if verbose:
        info(f"Running PMD over {target}", use_emoji=emoji, use_color=presentation.use_color)
    report = asyncio.run(runner.run(target.resolve()))
    if report.state is RunState.FAILED:
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    published = dict(sink.items())
    _emit(published, output_format, presentation)
    if output_format == "concise":
        status.render()
        for message in report.errors:
            warn(message, use_emoji=emoji, use_color=presentation.use_color)
        if not published:
            ok("No PMD issues found", use_emoji=emoji, use_color=presentation.use_color)
    raise typer.Exit(code=EXIT_ERRORS_FOUND if report.has_errors() else EXIT_OK)


def _emit(
    published: dict[str, list[DiagnosticRecord]],
    output_format: str,
    presentation: PresentationOptions,
) -> None:
    if output_format == "json":
        typer.echo(to_json(published))
        return
    if output_format == "raw":
        lines = concise_lines(published)
        if lines:
            typer.echo(join_output(lines))
        return
    section("PMD", use_color=presentation.use_color)
    render_concise(published, use_color=presentation.use_color, use_emoji=presentation.use_emoji)


@app.command("command")
def show_command(
    target: TargetArgument,
    root: RootOption = Path(),
    config_file: ConfigOption = None,
    pmd_path: PmdPathOption = None,
    ruleset: RulesetOption = None,
    java: JavaOption = None,
) -> None:
    """Print the PMD command that would run over TARGET."""

    presentation = PresentationOptions(use_color=detect_tty(), use_emoji=True)
    overrides = _overrides(
        pmd_path=pmd_path,
        ruleset=ruleset,
        error_threshold=None,
        warning_threshold=None,
        java=java,
        timeout=None,
    )
    config = _resolve_config(root, config_file, overrides, presentation)
    runner = PmdRunner(config, sink=InMemoryDiagnosticsSink(), status=StatusBarIndicator())
    try:
        command = runner.build_command(target.resolve())
    except ConfigError as exc:
        fail(str(exc), use_emoji=presentation.use_emoji, use_color=presentation.use_color)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc
    typer.echo(command)


def main() -> None:
    """Console script entry point."""

    app()


__all__ = ["app", "main"]
