"""Exporter interface and export errors."""

from __future__ import annotations

from typing import Sequence

from chronomark.results import BenchmarkResult
from chronomark.units import Unit


class ExportError(Exception):
    """An export could not be produced from the given results."""


class RelativeComparisonUnavailable(ExportError):
    """No fastest result exists to compare the others against."""


class Exporter:
    """Serializes a list of results into one output format.

    Exporters hold no state between calls, so one instance may be
    shared across threads.
    """

    name = ""  # human-readable format name used in messages

    def serialize(self, results: Sequence[BenchmarkResult], unit: Unit | None = None) -> bytes:
        """Render *results* as bytes, displaying times in *unit* if given.

        Raises:
            ExportError: If the format cannot represent *results*.
        """
        raise NotImplementedError
