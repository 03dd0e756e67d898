# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for PMD runs."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .command import DEFAULT_JAVA
from .severity import Thresholds

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "apex-pmd"
PROJECT_CONFIG_FILENAME: Final[str] = ".apex-pmd.toml"
PATH_KEYS: Final[tuple[str, ...]] = ("pmd_path", "ruleset_path")

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class ConfigurationError(ConfigError):
    """Raised when the configured PMD installation or ruleset cannot be used."""


class PmdConfig(BaseModel):
    """Settings consumed by a PMD run."""

    model_config = ConfigDict(validate_assignment=True)

    pmd_path: Path | None = None
    ruleset_path: Path | None = None
    thresholds: Thresholds = Field(default_factory=Thresholds)
    java: str = DEFAULT_JAVA
    timeout: float | None = None
    max_concurrent_reads: int = Field(default=8, ge=1)


def check_pmd_path(path: Path | None) -> Path:
    """Return *path* when it is an existing directory.

    Raises:
        ConfigurationError: If the PMD installation directory is missing.
    """

    if path is not None and path.is_dir():
        return path
    raise ConfigurationError("PMD Path not set. Please see Installation Instructions.")


def check_ruleset_path(path: Path | None) -> Path:
    """Return *path* when it is an existing file.

    Raises:
        ConfigurationError: If the ruleset file is missing.
    """

    if path is not None and path.is_file():
        return path
    raise ConfigurationError(
        f"No Ruleset found at {path}. Ensure configuration correct or change back to the default.",
    )


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {k: _expand_env_value(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(v, env) for v in value]
    return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None:
            return match.group(0)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    normalised: dict[str, Any] = {}
    for key, value in data.items():
        name = str(key).replace("-", "_")
        normalised[name] = _normalise_keys(value) if isinstance(value, Mapping) else value
    # Flat threshold keys are accepted alongside the [thresholds] table.
    thresholds = dict(normalised.pop("thresholds", None) or {})
    for flat, nested in (("error_threshold", "error"), ("warning_threshold", "warning")):
        if flat in normalised:
            thresholds[nested] = normalised.pop(flat)
    if thresholds:
        normalised["thresholds"] = thresholds
    return normalised


def _resolve_paths(data: dict[str, Any], base_dir: Path) -> dict[str, Any]:
    for key in PATH_KEYS:
        raw = data.get(key)
        if isinstance(raw, str) and raw:
            candidate = Path(raw).expanduser()
            data[key] = candidate if candidate.is_absolute() else base_dir / candidate
    return data


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def load_toml_fragment(
    path: Path,
    *,
    pyproject: bool = False,
    env: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Load one configuration fragment from *path*.

    Args:
        path: TOML document to read. Missing files produce an empty fragment.
        pyproject: When ``True`` only ``[tool.apex-pmd]`` is read.
        env: Environment used for ``$VAR`` expansion; defaults to ``os.environ``.

    Returns:
        dict[str, Any]: Normalised fragment with paths resolved against the
        directory holding *path*.
    """

    if not path.is_file():
        return {}
    document: Mapping[str, Any] = _read_toml(path)
    if pyproject:
        tool_section = document.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        document = tool_section.get(PYPROJECT_SECTION_KEY) or {}
        if not isinstance(document, Mapping):
            raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    expanded = _expand_env_value(dict(document), env if env is not None else os.environ)
    return _resolve_paths(_normalise_keys(expanded), path.parent.resolve())


def load_config(
    root: Path,
    *,
    config_file: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
) -> PmdConfig:
    """Resolve a :class:`PmdConfig` from layered sources.

    Precedence, lowest first: built-in defaults, ``[tool.apex-pmd]`` in
    ``pyproject.toml``, ``.apex-pmd.toml`` (or *config_file*), *overrides*.
    Override values of ``None`` are ignored.

    Raises:
        ConfigError: If a source is unreadable or the merged values are invalid.
    """

    root = root.resolve()
    merged: dict[str, Any] = {}
    merged = _deep_merge(merged, load_toml_fragment(root / PYPROJECT_FILENAME, pyproject=True, env=env))
    if config_file is not None and not config_file.is_file():
        raise ConfigError(f"Configuration file {config_file} does not exist")
    project_file = config_file if config_file is not None else root / PROJECT_CONFIG_FILENAME
    merged = _deep_merge(merged, load_toml_fragment(project_file, env=env))
    if overrides:
        explicit = {key: value for key, value in overrides.items() if value is not None}
        merged = _deep_merge(merged, _normalise_keys(explicit))
    try:
        return PmdConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


__all__ = [
    "ConfigError",
    "ConfigurationError",
    "PROJECT_CONFIG_FILENAME",
    "PmdConfig",
    "check_pmd_path",
    "check_ruleset_path",
    "load_config",
    "load_toml_fragment",
]
