"""Registry of supported export formats."""

from __future__ import annotations

import enum
from typing import Sequence

from chronomark.export.base import Exporter
from chronomark.export.data import CsvExporter, JsonExporter
from chronomark.export.markup import AsciiDocExporter, MarkdownExporter, OrgModeExporter
from chronomark.results import BenchmarkResult
from chronomark.units import Unit


class ExportFormat(enum.Enum):
    """Output formats accepted by ``chronomark export --format``."""

    ASCIIDOC = "asciidoc"
    CSV = "csv"
    JSON = "json"
    MARKDOWN = "markdown"
    ORGMODE = "orgmode"

    @property
    def extension(self) -> str:
        """Conventional file extension, without the dot."""
        extensions = {
            ExportFormat.ASCIIDOC: "adoc",
            ExportFormat.CSV: "csv",
            ExportFormat.JSON: "json",
            ExportFormat.MARKDOWN: "md",
            ExportFormat.ORGMODE: "org",
        }
        return extensions[self]


_EXPORTERS: dict[ExportFormat, type[Exporter]] = {
    ExportFormat.ASCIIDOC: AsciiDocExporter,
    ExportFormat.CSV: CsvExporter,
    ExportFormat.JSON: JsonExporter,
    ExportFormat.MARKDOWN: MarkdownExporter,
    ExportFormat.ORGMODE: OrgModeExporter,
}


def get_exporter(fmt: ExportFormat) -> Exporter:
    """Return a new exporter for *fmt*."""
    return _EXPORTERS[fmt]()


def export_results(
    results: Sequence[BenchmarkResult],
    fmt: ExportFormat,
    unit: Unit | None = None,
) -> bytes:
    """Serialize *results* in *fmt*.

    Raises:
        ExportError: If *fmt* cannot represent *results*.
    """
    return get_exporter(fmt).serialize(results, unit)
