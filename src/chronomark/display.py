"""Terminal display of relative speed results.

Produces the short plain-text summary printed after a comparison::

    Summary
      'sleep 0.1' ran
        18.97 ± 0.29 times faster than 'sleep 2'
"""

from __future__ import annotations

from typing import Sequence

from chronomark.relative_speed import RelativeSpeedEntry
from chronomark.units import round_half_away


def format_relative_summary(entries: Sequence[RelativeSpeedEntry]) -> str:
    """Format which command was fastest and by how much it beat the others.

    Other commands are listed in input order.
    """
    fastest = next((e for e in entries if e.is_fastest), None)
    if fastest is None:
        return ""

    lines = ["Summary", f"  '{fastest.result.command}' ran"]
    for entry in entries:
        if entry.is_fastest:
            continue
        rel = round_half_away(entry.relative_mean, 2)
        if entry.relative_stddev is not None:
            rel += f" ± {round_half_away(entry.relative_stddev, 2)}"
        lines.append(f"    {rel} times faster than '{entry.result.command}'")

    return "\n".join(lines)
