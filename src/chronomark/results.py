"""Benchmark result records handed to the exporters.

One :class:`BenchmarkResult` per benchmarked command.  Records are
immutable: exporters only read them, and the same list can be exported
to several formats concurrently.

Files read::

    results.json — ``{"results": [<BenchmarkResult>, ...]}``
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

log = logging.getLogger("chronomark")


def _sorted_parameters(parameters: Mapping[str, str]) -> Mapping[str, str]:
    """Freeze *parameters* with keys in lexicographic order."""
    return MappingProxyType({k: str(parameters[k]) for k in sorted(parameters)})


@dataclass(frozen=True)
class BenchmarkResult:
    """Summary of all runs of one command.  Times are in seconds."""

    command: str
    mean: float
    stddev: float | None  # None = uncertainty not reported
    median: float
    user: float
    system: float
    min: float
    max: float
    times: tuple[float, ...] | None = None  # raw per-run durations, if kept
    exit_codes: tuple[int | None, ...] = ()
    parameters: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Normalize containers so the record stays immutable.
        if self.times is not None:
            object.__setattr__(self, "times", tuple(self.times))
        object.__setattr__(self, "exit_codes", tuple(self.exit_codes))
        object.__setattr__(self, "parameters", _sorted_parameters(self.parameters))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict.

        ``times`` is left out when no raw samples were retained.
        """
        d: dict[str, Any] = {
            "command": self.command,
            "mean": self.mean,
            "stddev": self.stddev,
            "median": self.median,
            "user": self.user,
            "system": self.system,
            "min": self.min,
            "max": self.max,
        }
        if self.times is not None:
            d["times"] = list(self.times)
        d["exit_codes"] = list(self.exit_codes)
        d["parameters"] = dict(self.parameters)
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BenchmarkResult:
        """Deserialize from a dict, ignoring unknown fields.

        Raises:
            ValueError: If a required field is missing or has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Benchmark result must be a mapping, got {type(data).__name__}")

        missing = [
            name
            for name in ("command", "mean", "median", "user", "system", "min", "max")
            if name not in data
        ]
        if missing:
            raise ValueError(f"Benchmark result is missing fields: {', '.join(missing)}")

        stddev = data.get("stddev")
        times = data.get("times")
        if times is not None and not isinstance(times, list):
            raise ValueError("Benchmark result field 'times' must be a list")
        exit_codes = data.get("exit_codes")
        if exit_codes is None:
            exit_codes = []
        if not isinstance(exit_codes, list):
            raise ValueError("Benchmark result field 'exit_codes' must be a list")
        parameters = data.get("parameters")
        if parameters is None:
            parameters = {}
        if not isinstance(parameters, dict):
            raise ValueError("Benchmark result field 'parameters' must be a mapping")

        return cls(
            command=str(data["command"]),
            mean=_number(data["mean"], "mean"),
            stddev=_number(stddev, "stddev") if stddev is not None else None,
            median=_number(data["median"], "median"),
            user=_number(data["user"], "user"),
            system=_number(data["system"], "system"),
            min=_number(data["min"], "min"),
            max=_number(data["max"], "max"),
            times=tuple(_number(t, "times") for t in times) if times is not None else None,
            # Non-numeric exit codes (e.g. killed by a signal) are unknown.
            exit_codes=tuple(
                code if isinstance(code, int) and not isinstance(code, bool) else None
                for code in exit_codes
            ),
            parameters=parameters,
        )


def _number(value: Any, name: str) -> float:
    """Convert a JSON value to float, rejecting null, booleans and strings."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Benchmark result field '{name}' is not a number: {value!r}")
    return float(value)


def load_results(path: Path) -> list[BenchmarkResult]:
    """Load benchmark results from a JSON document.

    Args:
        path: File containing ``{"results": [...]}``.

    Returns:
        Results in file order.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the document is not valid results JSON.
    """
    if not path.exists():
        raise FileNotFoundError(f"Results file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(data, dict) or not isinstance(data.get("results"), list):
        raise ValueError(f"{path} must contain a 'results' list")

    results = [BenchmarkResult.from_dict(item) for item in data["results"]]
    log.debug("Loaded %d results from %s", len(results), path)
    return results
