"""Command-line interface for chronomark.

Subcommands:
    chronomark export   Write results as Markdown, AsciiDoc, Org mode, CSV or JSON
    chronomark show     Print the Markdown table and a relative speed summary
"""

from __future__ import annotations

from pathlib import Path

import click

from chronomark import __version__
from chronomark.logging import get_logger, setup_logging

log = get_logger("cli")

_FORMAT_NAMES = ["asciidoc", "csv", "json", "markdown", "orgmode"]
_UNIT_NAMES = ["s", "ms", "µs", "us", "second", "millisecond", "microsecond"]


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Show debug output on stderr.")
@click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write a DEBUG log to this file.",
)
def main(verbose: bool, quiet: bool, log_file: Path | None) -> None:
    """chronomark — compare benchmarked commands by relative speed."""
    try:
        setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------


@main.command("export")
@click.argument("results_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--format",
    "fmt",
    type=click.Choice(_FORMAT_NAMES, case_sensitive=False),
    default=None,
    help="Output format (default: markdown, or the profile's exports).",
)
@click.option(
    "--time-unit",
    type=click.Choice(_UNIT_NAMES, case_sensitive=False),
    default=None,
    help="Unit for all times (default: chosen from the first result).",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to a file instead of stdout (with --profile, requires --format).",
)
@click.option(
    "--profile",
    "profile_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="YAML profile listing export targets.",
)
def export(
    results_file: Path,
    fmt: str | None,
    time_unit: str | None,
    output: Path | None,
    profile_path: Path | None,
) -> None:
    """Export benchmark results from RESULTS_FILE.

    RESULTS_FILE is a JSON document with a top-level "results" list.

    \b
    Examples:
        chronomark export results.json > table.md
        chronomark export results.json --format orgmode --time-unit ms -o table.org
        chronomark export results.json --profile exports.yaml
        chronomark -v export results.json --log-file export.log
    """
    from chronomark.config import (
        ExportTarget,
        config_from_profile,
        load_profile,
        validate_config,
    )
    from chronomark.export.base import ExportError
    from chronomark.export.formats import get_exporter
    from chronomark.results import load_results

    overrides: dict[str, object] = {"time_unit": time_unit, "format": fmt, "output": output}
    try:
        if profile_path:
            config = config_from_profile(load_profile(profile_path), cli_overrides=overrides)
        else:
            overrides["format"] = fmt or "markdown"
            config = config_from_profile({}, cli_overrides=overrides)
        results = load_results(results_file)
    except (FileNotFoundError, ValueError) as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc

    errors = [e for e in validate_config(config) if e.severity == "error"]
    if errors:
        for e in errors:
            click.echo(f"Error: {e.field}: {e.message}", err=True)
        raise SystemExit(1)

    # Serialize all targets before writing; a failing format writes nothing.
    rendered: list[tuple[ExportTarget, bytes]] = []
    for target in config.targets:
        try:
            data = get_exporter(target.format).serialize(results, config.time_unit)
            rendered.append((target, data))
        except ExportError as exc:
            click.echo(f"Error: {exc}", err=True)
            raise SystemExit(1) from exc

    for target, data in rendered:
        if target.path is None:
            click.echo(data.decode("utf-8"), nl=False)
        else:
            target.path.write_bytes(data)
            log.info("Wrote %s export to %s", target.format.value, target.path)


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------


@main.command("show")
@click.argument("results_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--time-unit",
    type=click.Choice(_UNIT_NAMES, case_sensitive=False),
    default=None,
    help="Unit for all times (default: chosen from the first result).",
)
def show(results_file: Path, time_unit: str | None) -> None:
    """Display a comparison table and summary for RESULTS_FILE."""
    from chronomark import relative_speed
    from chronomark.display import format_relative_summary
    from chronomark.export.markup import MarkdownDialect, render_table, resolve_unit
    from chronomark.results import load_results
    from chronomark.units import Unit

    try:
        results = load_results(results_file)
    except (FileNotFoundError, ValueError) as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc

    entries = relative_speed.compute(results)
    if entries is None:
        click.echo("Error: No results to compare.", err=True)
        raise SystemExit(1)

    unit = resolve_unit(results, Unit.parse(time_unit) if time_unit else None)
    click.echo(render_table(MarkdownDialect(), entries, unit), nl=False)
    click.echo()
    click.echo(format_relative_summary(entries))
