"""Relative speed of each benchmarked command against the fastest one.

The ratio ``r = mean / fastest.mean`` is treated as a function of two
independent, normally distributed means, so its uncertainty follows
from adding relative errors in quadrature::

    sigma_r = r * sqrt((stddev / mean)**2 + (fastest.stddev / fastest.mean)**2)

The uncertainty is only reported when both standard deviations are
known; an unknown deviation is never assumed to be zero.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from chronomark.results import BenchmarkResult

log = logging.getLogger("chronomark")


@dataclass(frozen=True)
class RelativeSpeedEntry:
    """One result together with its standing relative to the fastest."""

    result: BenchmarkResult
    relative_mean: float  # >= 1.0, exactly 1.0 for the fastest
    relative_stddev: float | None  # None if either stddev is unknown
    is_fastest: bool = False


def fastest_index(results: Sequence[BenchmarkResult]) -> int | None:
    """Index of the result with the smallest mean; first one wins ties.

    Returns ``None`` for an empty sequence.
    """
    best: int | None = None
    for i, result in enumerate(results):
        if best is None or result.mean < results[best].mean:
            best = i
    return best


def fastest_of(results: Sequence[BenchmarkResult]) -> BenchmarkResult | None:
    """The result with the smallest mean, or ``None`` if there are none."""
    idx = fastest_index(results)
    return results[idx] if idx is not None else None


def ratio_stddev(
    ratio: float,
    mean: float,
    stddev: float | None,
    ref_mean: float,
    ref_stddev: float | None,
) -> float | None:
    """Propagate the uncertainty of ``mean / ref_mean`` by quadrature."""
    if stddev is None or ref_stddev is None:
        return None
    return ratio * math.sqrt((stddev / mean) ** 2 + (ref_stddev / ref_mean) ** 2)


def compute(results: Sequence[BenchmarkResult]) -> list[RelativeSpeedEntry] | None:
    """Compute every result's speed relative to the fastest.

    Entries keep the input order.

    Returns:
        One entry per result, or ``None`` when no comparison is possible:
        the sequence is empty, or the fastest mean is zero so no ratio
        is defined.
    """
    idx = fastest_index(results)
    if idx is None:
        log.debug("No results; relative speed unavailable")
        return None

    fastest = results[idx]
    if fastest.mean == 0:
        log.debug("Fastest command %r has zero mean; relative speed unavailable", fastest.command)
        return None

    log.debug("Fastest command: %r (mean %.6fs)", fastest.command, fastest.mean)

    entries: list[RelativeSpeedEntry] = []
    for i, result in enumerate(results):
        ratio = result.mean / fastest.mean
        entries.append(
            RelativeSpeedEntry(
                result=result,
                relative_mean=ratio,
                relative_stddev=ratio_stddev(
                    ratio, result.mean, result.stddev, fastest.mean, fastest.stddev
                ),
                is_fastest=i == idx,
            )
        )
    return entries
