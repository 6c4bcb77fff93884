"""
Recurrence expansion for weekly event series.

A series is expanded once, at creation time, into a fixed number of
stored occurrences. There is no open-ended rule and no background
expansion.
"""

from homebase.services.errors import InvalidRecurrenceError
from homebase.services.time_range import WEEK_SECONDS, validate_range

# Total occurrences in a series, head included
RECURRENCE_OCCURRENCES = 12

WEEKLY = "weekly"
SUPPORTED_RULES = (WEEKLY,)


def validate_rule(recurrence_rule: str | None) -> str:
    """Return the rule if supported, otherwise raise InvalidRecurrenceError."""
    if recurrence_rule not in SUPPORTED_RULES:
        raise InvalidRecurrenceError(
            f"Unsupported recurrence rule {recurrence_rule!r}: only 'weekly' is supported",
            field="recurrence_rule",
        )
    return recurrence_rule


def weekly_occurrences(
    start_time: int,
    end_time: int,
    count: int = RECURRENCE_OCCURRENCES,
) -> list[tuple[int, int]]:
    """
    Expand a definition into ``count`` weekly (start, end) pairs.

    Occurrence i starts exactly i weeks after start_time and keeps the
    original duration. The first pair is the definition itself.

    Args:
        start_time: Start of the first occurrence (epoch seconds)
        end_time: End of the first occurrence (epoch seconds)
        count: Number of occurrences including the first

    Returns:
        List of (start, end) tuples in ascending order
    """
    validate_range(start_time, end_time)
    duration = end_time - start_time
    occurrences = []
    for i in range(count):
        occurrence_start = start_time + i * WEEK_SECONDS
        occurrences.append((occurrence_start, occurrence_start + duration))
    return occurrences
