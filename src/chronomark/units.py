"""Time units used to display benchmark durations.

Every unit carries a fixed row in the table below: how many of it fit
in one second, how many fractional digits it is displayed with, and
the smallest duration (in seconds) for which it is picked automatically.

==============  ==========  =========  ===========  ===============
Unit            Short name  Per second  Precision   Picked when
==============  ==========  =========  ===========  ===============
SECOND          ``s``       1          3 decimals   t >= 1 s
MILLISECOND     ``ms``      1e3        1 decimal    1 ms <= t < 1 s
MICROSECOND     ``µs``      1e6        1 decimal    t < 1 ms
==============  ==========  =========  ===========  ===============
"""

from __future__ import annotations

import enum
from decimal import ROUND_HALF_UP, Decimal


class Unit(enum.Enum):
    """A display magnitude for durations, valued by its short name."""

    SECOND = "s"
    MILLISECOND = "ms"
    MICROSECOND = "µs"

    @property
    def short_name(self) -> str:
        """Name used in table headers, e.g. ``'ms'``."""
        return self.value

    @property
    def factor(self) -> float:
        """Number of this unit in one second."""
        return _UNIT_TABLE[self][0]

    @property
    def precision(self) -> int:
        """Fractional digits used when displaying a value in this unit."""
        return _UNIT_TABLE[self][1]

    @property
    def lower_bound(self) -> float:
        """Smallest duration in seconds for which this unit is auto-selected."""
        return _UNIT_TABLE[self][2]

    def from_seconds(self, seconds: float) -> float:
        """Convert *seconds* into this unit."""
        return seconds * self.factor

    def to_seconds(self, value: float) -> float:
        """Convert *value* expressed in this unit back to seconds."""
        return value / self.factor

    @classmethod
    def for_duration(cls, seconds: float) -> Unit:
        """Largest unit whose lower bound does not exceed *seconds*."""
        for unit in _DESCENDING:
            if seconds >= unit.lower_bound:
                return unit
        return cls.MICROSECOND

    @classmethod
    def parse(cls, name: str) -> Unit:
        """Look up a unit by short or long name (``'ms'``, ``'millisecond'``).

        ``'us'`` is accepted as an ASCII spelling of microseconds.

        Raises:
            ValueError: If *name* does not name a unit.
        """
        key = name.strip().lower()
        unit = _ALIASES.get(key)
        if unit is None:
            valid = ", ".join(sorted(_ALIASES))
            raise ValueError(f"Unknown time unit '{name}'. Valid units: {valid}")
        return unit


# factor, precision, lower bound
_UNIT_TABLE: dict[Unit, tuple[float, int, float]] = {
    Unit.SECOND: (1.0, 3, 1.0),
    Unit.MILLISECOND: (1e3, 1, 1e-3),
    Unit.MICROSECOND: (1e6, 1, 0.0),
}

_DESCENDING = (Unit.SECOND, Unit.MILLISECOND, Unit.MICROSECOND)

_ALIASES: dict[str, Unit] = {
    "s": Unit.SECOND,
    "second": Unit.SECOND,
    "ms": Unit.MILLISECOND,
    "millisecond": Unit.MILLISECOND,
    "µs": Unit.MICROSECOND,
    "us": Unit.MICROSECOND,
    "microsecond": Unit.MICROSECOND,
}


def round_half_away(value: float, places: int) -> str:
    """Render *value* with *places* decimals, rounding halves away from zero.

    The shortest decimal representation of the float is rounded, so
    ``0.125`` gives ``'0.13'`` and ``2.675`` gives ``'2.68'``.
    No locale-dependent separators are used.
    """
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    text = format(rounded, "f")
    if text.startswith("-") and Decimal(text) == 0:
        text = text[1:]
    return text


def format_duration_value(seconds: float, unit: Unit | None = None) -> tuple[str, Unit]:
    """Format a duration in *unit*, choosing one from the value if not given.

    Returns:
        The formatted number (without unit suffix) and the unit used.
    """
    if unit is None:
        unit = Unit.for_duration(seconds)
    return round_half_away(unit.from_seconds(seconds), unit.precision), unit
