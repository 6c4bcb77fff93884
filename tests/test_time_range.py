"""
Tests for half-open time range helpers.
"""

from datetime import datetime, timezone

import pytest

from homebase.services.errors import InvalidRangeError
from homebase.services.time_range import (
    DAY_SECONDS,
    WEEK_SECONDS,
    day_bounds,
    month_bounds,
    overlaps,
    validate_range,
    week_bounds,
)


def utc_ts(year: int, month: int, day: int) -> int:
    return int(datetime(year, month, day, tzinfo=timezone.utc).timestamp())


class TestOverlaps:
    """Test the half-open overlap predicate."""

    def test_partial_overlap(self):
        assert overlaps(10, 20, 15, 25) is True
        assert overlaps(15, 25, 10, 20) is True

    def test_containment(self):
        assert overlaps(10, 30, 15, 20) is True
        assert overlaps(15, 20, 10, 30) is True

    def test_identical_ranges(self):
        assert overlaps(10, 20, 10, 20) is True

    def test_touching_ranges_do_not_overlap(self):
        """Adjacent ranges share an endpoint but no instant."""
        assert overlaps(10, 20, 20, 30) is False
        assert overlaps(20, 30, 10, 20) is False

    def test_disjoint_ranges(self):
        assert overlaps(10, 20, 25, 30) is False


class TestValidateRange:
    """Test range validation."""

    def test_valid_range(self):
        validate_range(10, 11)

    def test_equal_bounds_rejected(self):
        with pytest.raises(InvalidRangeError) as exc_info:
            validate_range(10, 10)
        assert exc_info.value.field == "end_time"

    def test_inverted_bounds_rejected(self):
        with pytest.raises(InvalidRangeError):
            validate_range(20, 10)


class TestBoundaries:
    """Test day, week and month boundaries."""

    def test_day_bounds(self):
        start = utc_ts(2026, 3, 2)
        assert day_bounds(start) == (start, start + DAY_SECONDS)

    def test_week_bounds(self):
        start = utc_ts(2026, 3, 2)
        assert week_bounds(start) == (start, start + WEEK_SECONDS)

    def test_month_bounds_31_day_month(self):
        assert month_bounds(2026, 3) == (utc_ts(2026, 3, 1), utc_ts(2026, 4, 1))

    def test_month_bounds_30_day_month(self):
        start, end = month_bounds(2026, 4)
        assert end - start == 30 * DAY_SECONDS

    def test_month_bounds_leap_february(self):
        """February 2024 has 29 days."""
        assert month_bounds(2024, 2) == (1706745600, 1709251200)

    def test_month_bounds_december_rolls_over(self):
        assert month_bounds(2025, 12) == (utc_ts(2025, 12, 1), utc_ts(2026, 1, 1))

    @pytest.mark.parametrize("month", [0, 13])
    def test_invalid_month(self, month):
        with pytest.raises(InvalidRangeError) as exc_info:
            month_bounds(2026, month)
        assert exc_info.value.field == "month"

    @pytest.mark.parametrize("year", [0, -5, 9999, 10000])
    def test_invalid_year(self, year):
        with pytest.raises(InvalidRangeError) as exc_info:
            month_bounds(year, 1)
        assert exc_info.value.field == "year"

    def test_last_supported_december(self):
        start, end = month_bounds(9998, 12)
        assert end == int(datetime(9999, 1, 1, tzinfo=timezone.utc).timestamp())
        assert start < end
