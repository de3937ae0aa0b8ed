"""Relative-speed tables in lightweight markup languages.

Pipeline for one export::

    resolve_unit -> relative_speed.compute -> render_table -> bytes

Each dialect keeps its own table framing and escaping rules, so adding
a markup language means adding one :class:`MarkupDialect` subclass.
"""

from __future__ import annotations

import logging
from typing import Sequence

from chronomark import relative_speed
from chronomark.export.base import Exporter, RelativeComparisonUnavailable
from chronomark.relative_speed import RelativeSpeedEntry
from chronomark.results import BenchmarkResult
from chronomark.units import Unit, format_duration_value, round_half_away

log = logging.getLogger("chronomark")

_COLUMNS = ("Command", "Mean [{unit}]", "Min [{unit}]", "Max [{unit}]", "Relative")


# ---------------------------------------------------------------------------
# Unit resolution
# ---------------------------------------------------------------------------


def resolve_unit(results: Sequence[BenchmarkResult], forced_unit: Unit | None = None) -> Unit:
    """Pick the one unit used for every time in a table.

    A forced unit always wins.  Otherwise the unit is chosen from the
    first result's mean alone and applied to all rows, even where a
    later row would prefer another unit.  With no results there is
    nothing to inspect and seconds are used.
    """
    if forced_unit is not None:
        return forced_unit
    if not results:
        return Unit.SECOND
    unit = Unit.for_duration(results[0].mean)
    log.debug("Resolved display unit %s from %r", unit.short_name, results[0].command)
    return unit


# ---------------------------------------------------------------------------
# Dialects
# ---------------------------------------------------------------------------


class MarkupDialect:
    """Formatting rules for one markup language.

    Number formatting is shared; subclasses provide the command
    wrapping and the table framing.
    """

    name = ""  # human-readable format name used in messages

    def format_time(self, value: float, stddev: float | None, unit: Unit) -> str:
        """Format a duration in *unit*, with ``' ± stddev'`` when known."""
        text, _ = format_duration_value(value, unit)
        if stddev is None:
            return text
        stddev_text, _ = format_duration_value(stddev, unit)
        return f"{text} ± {stddev_text}"

    def format_relative(self, relative_mean: float, relative_stddev: float | None) -> str:
        """Format a ratio to 2 decimals, with ``' ± stddev'`` when known."""
        text = round_half_away(relative_mean, 2)
        if relative_stddev is None:
            return text
        return f"{text} ± {round_half_away(relative_stddev, 2)}"

    def format_command(self, command: str) -> str:
        """Wrap *command* in inline-code markup, escaping cell separators."""
        raise NotImplementedError

    def table_header(self, unit_short_name: str) -> str:
        """Column titles plus any separator line, newline-terminated."""
        raise NotImplementedError

    def table_row(self, cells: Sequence[str]) -> str:
        """Frame one row of already formatted cells, newline-terminated."""
        raise NotImplementedError

    def table_footer(self) -> str:
        """Text closing the table; most dialects need none."""
        return ""


class MarkdownDialect(MarkupDialect):
    """GitHub-flavored Markdown pipe tables."""

    name = "Markdown"

    def format_command(self, command: str) -> str:
        return "`{}`".format(command.replace("|", "\\|"))

    def table_header(self, unit_short_name: str) -> str:
        titles = [c.format(unit=unit_short_name) for c in _COLUMNS]
        return self.table_row(titles) + "|:---|---:|---:|---:|---:|\n"

    def table_row(self, cells: Sequence[str]) -> str:
        return "| " + " | ".join(cells) + " |\n"


class AsciiDocDialect(MarkupDialect):
    """AsciiDoc tables, one cell per line."""

    name = "AsciiDoc"

    def format_command(self, command: str) -> str:
        return "`{}`".format(command.replace("|", "\\|"))

    def table_header(self, unit_short_name: str) -> str:
        lines = ['[cols="<,>,>,>,>"]', "|==="]
        lines.extend(f"| {c.format(unit=unit_short_name)} " for c in _COLUMNS)
        return "\n".join(lines) + "\n"

    def table_row(self, cells: Sequence[str]) -> str:
        return "\n| " + " \n| ".join(cells) + " \n"

    def table_footer(self) -> str:
        return "|===\n"


class OrgModeDialect(MarkupDialect):
    """Emacs Org mode tables."""

    name = "Org mode"

    def format_command(self, command: str) -> str:
        return "={}=".format(command.replace("|", "\\vert{}"))

    def table_header(self, unit_short_name: str) -> str:
        titles = [c.format(unit=unit_short_name) for c in _COLUMNS]
        return self.table_row(titles) + "|--+--+--+--+--|\n"

    def table_row(self, cells: Sequence[str]) -> str:
        return "| " + " | ".join(cells) + " |\n"


# ---------------------------------------------------------------------------
# Table rendering
# ---------------------------------------------------------------------------


def render_table(
    dialect: MarkupDialect,
    entries: Sequence[RelativeSpeedEntry],
    unit: Unit,
) -> str:
    """Render a header plus one row per entry, in entry order.

    Raw per-run times and exit codes are never part of the table.  The
    fastest entry's relative speed is shown without an uncertainty.
    """
    parts = [dialect.table_header(unit.short_name)]
    for entry in entries:
        r = entry.result
        rel_stddev = None if entry.is_fastest else entry.relative_stddev
        parts.append(
            dialect.table_row(
                [
                    dialect.format_command(r.command),
                    dialect.format_time(r.mean, r.stddev, unit),
                    dialect.format_time(r.min, None, unit),
                    dialect.format_time(r.max, None, unit),
                    dialect.format_relative(entry.relative_mean, rel_stddev),
                ]
            )
        )
    parts.append(dialect.table_footer())
    return "".join(parts)


# ---------------------------------------------------------------------------
# Exporters
# ---------------------------------------------------------------------------


class MarkupExporter(Exporter):
    """Exports a relative-speed table in one markup dialect."""

    def __init__(self, dialect: MarkupDialect) -> None:
        self.dialect = dialect
        self.name = dialect.name

    def serialize(self, results: Sequence[BenchmarkResult], unit: Unit | None = None) -> bytes:
        """Render the comparison table as UTF-8 bytes.

        Raises:
            RelativeComparisonUnavailable: If there is no fastest result
                to compare against.
        """
        display_unit = resolve_unit(results, unit)
        entries = relative_speed.compute(results)
        if entries is None:
            raise RelativeComparisonUnavailable(
                f"Relative speed comparison is not available for {self.dialect.name} export."
            )
        table = render_table(self.dialect, entries, display_unit)
        log.debug("Rendered %s table with %d rows", self.dialect.name, len(entries))
        return table.encode("utf-8")


class MarkdownExporter(MarkupExporter):
    """Relative-speed table as Markdown."""

    def __init__(self) -> None:
        super().__init__(MarkdownDialect())


class AsciiDocExporter(MarkupExporter):
    """Relative-speed table as AsciiDoc."""

    def __init__(self) -> None:
        super().__init__(AsciiDocDialect())


class OrgModeExporter(MarkupExporter):
    """Relative-speed table as an Org mode table."""

    def __init__(self) -> None:
        super().__init__(OrgModeDialect())
