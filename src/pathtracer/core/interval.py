"""Numeric interval used to bound ray parameters and clamp values."""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass


@dataclass(frozen=True)
class Interval:
    """A range of real numbers from ``min`` to ``max``.

    ``min <= max`` is expected but not enforced.

    Attributes:
        min: Lower bound.
        max: Upper bound.
    """

    min: float
    max: float

    def contains(self, x: float) -> bool:
        """Check whether x lies in the interval, bounds included."""
        return self.min <= x <= self.max

    def surrounds(self, x: float) -> bool:
        """Check whether x lies strictly inside the interval."""
        return self.min < x < self.max

    def clamp(self, x: float) -> float:
        """Clamp x to the interval bounds."""
        if x < self.min:
            return self.min
        if x > self.max:
            return self.max
        return x

    def size(self) -> float:
        return self.max - self.min

    def with_max(self, new_max: float) -> Interval:
        """Return a copy of this interval with a tighter (or looser) upper bound."""
        return Interval(self.min, new_max)


UNIT = Interval(0.0, 1.0)
EMPTY = Interval(math.inf, -math.inf)
UNIVERSE = Interval(-math.inf, math.inf)


def bounded_int(value, bounds: Interval) -> int | None:
    """Convert an integer-like value to int if it lies within bounds.

    Accepts any type implementing ``__index__`` (int, numpy integers) but
    rejects bool and floats.

    Returns:
        The value as a plain int, or None if it is not an integer in bounds.
    """
    if isinstance(value, bool):
        return None
    try:
        value = operator.index(value)
    except TypeError:
        return None
    return value if bounds.contains(value) else None
