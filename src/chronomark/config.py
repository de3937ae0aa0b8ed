"""Export configuration and YAML profile loading.

Handles:
- Loading export profiles from YAML files.
- Merging CLI options with profile values.
- Validating the resulting targets before anything is written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from chronomark.export.formats import ExportFormat
from chronomark.units import Unit

log = logging.getLogger("chronomark")


# ---------------------------------------------------------------------------
# ExportConfig
# ---------------------------------------------------------------------------


@dataclass
class ExportTarget:
    """One output: a format and where to write it (``None`` = stdout)."""

    format: ExportFormat
    path: Path | None = None


@dataclass
class ExportConfig:
    """Resolved configuration for one export invocation."""

    time_unit: Unit | None = None  # None = pick from the first result
    targets: list[ExportTarget] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass
class ValidationError:
    """A single configuration validation error."""

    field: str
    message: str
    severity: str = "error"  # "error" or "warning"


def validate_config(config: ExportConfig) -> list[ValidationError]:
    """Validate an export configuration.

    Returns a list of validation errors.  Empty list means valid.
    """
    errors: list[ValidationError] = []

    if not config.targets:
        errors.append(
            ValidationError(
                field="exports",
                message="No export targets defined. Use --format or an 'exports' profile list.",
            )
        )

    stdout_targets = [t for t in config.targets if t.path is None]
    if len(stdout_targets) > 1:
        errors.append(
            ValidationError(
                field="exports",
                message="Only one export target may write to stdout.",
            )
        )

    seen: set[Path] = set()
    for target in config.targets:
        if target.path is None:
            continue
        if target.path in seen:
            errors.append(
                ValidationError(
                    field="exports",
                    message=f"Export path used more than once: {target.path}",
                )
            )
        seen.add(target.path)
        if not target.path.parent.exists():
            errors.append(
                ValidationError(
                    field="exports",
                    message=f"Output directory does not exist: {target.path.parent}",
                )
            )

    return errors


# ---------------------------------------------------------------------------
# YAML profile loading
# ---------------------------------------------------------------------------


def load_profile(profile_path: Path) -> dict[str, Any]:
    """Load an export profile from a YAML file.

    Profile format::

        time_unit: ms
        exports:
          - format: markdown
            path: results.md
          - format: csv
            path: results.csv

    Returns:
        The parsed YAML as a dict.
    """
    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_path}")

    data = yaml.safe_load(profile_path.read_text(encoding="utf-8"))
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Profile must be a YAML mapping, got {type(data).__name__}")

    return data


def parse_format(name: str) -> ExportFormat:
    """Look up an export format by name (case-insensitive)."""
    try:
        return ExportFormat(name.strip().lower())
    except ValueError:
        valid = ", ".join(f.value for f in ExportFormat)
        raise ValueError(f"Unknown export format '{name}'. Valid formats: {valid}") from None


def config_from_profile(
    profile_data: dict[str, Any],
    *,
    cli_overrides: dict[str, Any] | None = None,
) -> ExportConfig:
    """Build an ExportConfig from a parsed YAML profile.

    CLI overrides take precedence over profile values.  Recognized
    override keys: ``time_unit`` (str), ``format`` (str) and ``output``
    (path).  A CLI format replaces the profile's export list with a
    single target; an ``output`` without a ``format`` is rejected
    because it would not say which export to redirect.

    Raises:
        ValueError: If the profile contains unknown formats or units, or
            ``output`` is overridden without ``format``.
    """
    cli = cli_overrides or {}
    config = ExportConfig()

    unit_name = cli.get("time_unit") or profile_data.get("time_unit")
    if unit_name:
        config.time_unit = Unit.parse(str(unit_name))

    if cli.get("output") and not cli.get("format"):
        raise ValueError("--output needs --format when exporting from a profile")

    if cli.get("format"):
        output = cli.get("output")
        config.targets.append(
            ExportTarget(
                format=parse_format(cli["format"]),
                path=Path(output) if output else None,
            )
        )
        return config

    exports = profile_data.get("exports", [])
    if not isinstance(exports, list):
        raise ValueError("Profile 'exports' must be a list of {format, path} mappings")

    for i, item in enumerate(exports):
        if not isinstance(item, dict) or "format" not in item:
            raise ValueError(f"Export entry {i} must be a mapping with a 'format' key")
        path = item.get("path")
        config.targets.append(
            ExportTarget(format=parse_format(str(item["format"])), path=Path(path) if path else None)
        )

    log.debug("Loaded %d export targets from profile", len(config.targets))
    return config
