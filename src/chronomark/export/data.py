"""Export raw benchmark numbers as CSV or JSON.

Unlike the markup tables these formats keep every time in seconds and
do not need a relative comparison, so an empty result list is valid.

CSV columns::

    command, mean, stddev, median, user, system, min, max,
    parameter_<name>...   (one per parameter name, sorted)
"""

from __future__ import annotations

import csv
import io
import json
from typing import Sequence

from chronomark.export.base import Exporter
from chronomark.results import BenchmarkResult
from chronomark.units import Unit


class CsvExporter(Exporter):
    """One CSV row per command."""

    name = "CSV"

    def serialize(self, results: Sequence[BenchmarkResult], unit: Unit | None = None) -> bytes:
        param_names = sorted({name for r in results for name in r.parameters})

        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")

        writer.writerow(
            ["command", "mean", "stddev", "median", "user", "system", "min", "max"]
            + [f"parameter_{name}" for name in param_names]
        )
        for r in results:
            writer.writerow(
                [
                    r.command,
                    repr(r.mean),
                    repr(r.stddev) if r.stddev is not None else "",
                    repr(r.median),
                    repr(r.user),
                    repr(r.system),
                    repr(r.min),
                    repr(r.max),
                ]
                + [r.parameters.get(name, "") for name in param_names]
            )

        return output.getvalue().encode("utf-8")


class JsonExporter(Exporter):
    """All result fields under a top-level ``results`` list."""

    name = "JSON"

    def serialize(self, results: Sequence[BenchmarkResult], unit: Unit | None = None) -> bytes:
        doc = {"results": [r.to_dict() for r in results]}
        return (json.dumps(doc, indent=2, ensure_ascii=False) + "\n").encode("utf-8")
