"""Unit tests for the Interval type."""

import math

import pytest


class TestInterval:
    """Tests for interval membership and clamping."""

    def test_contains_includes_bounds(self):
        from pathtracer.core.interval import Interval

        interval = Interval(0.0, 1.0)
        assert interval.contains(0.0)
        assert interval.contains(1.0)
        assert interval.contains(0.5)
        assert not interval.contains(1.0001)

    def test_surrounds_excludes_bounds(self):
        from pathtracer.core.interval import Interval

        interval = Interval(0.001, 10.0)
        assert not interval.surrounds(0.001)
        assert not interval.surrounds(10.0)
        assert interval.surrounds(5.0)

    def test_clamp(self):
        from pathtracer.core.interval import UNIT

        assert UNIT.clamp(-0.5) == 0.0
        assert UNIT.clamp(1.5) == 1.0
        assert UNIT.clamp(0.25) == 0.25

    def test_size_and_with_max(self):
        from pathtracer.core.interval import Interval

        interval = Interval(1.0, 4.0)
        assert interval.size() == 3.0
        narrowed = interval.with_max(2.0)
        assert narrowed == Interval(1.0, 2.0)
        # Source interval is unchanged
        assert interval.max == 4.0

    def test_empty_and_universe(self):
        """Test the predefined empty and universe intervals."""
        from pathtracer.core.interval import EMPTY, UNIVERSE

        assert not EMPTY.contains(0.0)
        assert UNIVERSE.contains(1e300)
        assert UNIVERSE.size() == math.inf


class TestBoundedInt:
    """Tests for integer validation against an interval."""

    def test_accepts_numpy_integers(self):
        import numpy as np

        from pathtracer.core.interval import Interval, bounded_int

        value = bounded_int(np.int64(7), Interval(1, 10))
        assert value == 7
        assert type(value) is int

    @pytest.mark.parametrize("value", [True, False, 2.0, "3", None])
    def test_rejects_non_integers(self, value):
        from pathtracer.core.interval import Interval, bounded_int

        assert bounded_int(value, Interval(0, 10)) is None

    def test_bounds_are_inclusive(self):
        from pathtracer.core.interval import Interval, bounded_int

        assert bounded_int(1, Interval(1, 3)) == 1
        assert bounded_int(3, Interval(1, 3)) == 3
        assert bounded_int(4, Interval(1, 3)) is None
        assert bounded_int(10**9, Interval(1, math.inf)) == 10**9
