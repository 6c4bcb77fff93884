"""
Half-open time range helpers.

All timestamps are integer seconds since the Unix epoch and all ranges
are [start, end): touching ranges do not overlap.
"""

from datetime import MAXYEAR, MINYEAR, datetime, timezone

from homebase.services.errors import InvalidRangeError

DAY_SECONDS = 86400
WEEK_SECONDS = 7 * DAY_SECONDS


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """
    Return True if [a_start, a_end) intersects [b_start, b_end).

    Range queries in the services express this same predicate in SQL
    (stored start < range end and stored end > range start).
    """
    return a_start < b_end and a_end > b_start


def validate_range(start_time: int, end_time: int, field: str = "end_time") -> None:
    """Raise InvalidRangeError unless start_time < end_time."""
    if start_time >= end_time:
        raise InvalidRangeError(
            f"start_time ({start_time}) must be before end_time ({end_time})",
            field=field,
        )


def day_bounds(day_start: int) -> tuple[int, int]:
    """Range covering the 24 hours from day_start."""
    return day_start, day_start + DAY_SECONDS


def week_bounds(week_start: int) -> tuple[int, int]:
    """Range covering the 7 days from week_start."""
    return week_start, week_start + WEEK_SECONDS


def month_bounds(year: int, month: int) -> tuple[int, int]:
    """
    UTC boundaries of a calendar month.

    Computed from the calendar rather than a fixed offset so months of
    every length (and leap-year Februaries) come out right.
    """
    if not 1 <= month <= 12:
        raise InvalidRangeError(f"month must be between 1 and 12, got {month}", field="month")
    if not MINYEAR <= year < MAXYEAR:
        raise InvalidRangeError(
            f"year must be between {MINYEAR} and {MAXYEAR - 1}, got {year}", field="year"
        )

    start = datetime(year, month, 1, tzinfo=timezone.utc)
    if month == 12:
        end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        end = datetime(year, month + 1, 1, tzinfo=timezone.utc)
    return int(start.timestamp()), int(end.timestamp())
