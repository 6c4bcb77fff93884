"""
Calendar service: the event store for household calendars.

Handles creating, reading, patching and deleting events, range views
(day/week/month) and creating weekly recurring series.
"""

import logging
from typing import Any

from sqlalchemy.orm import Session

from homebase.models import CalendarEvent, epoch_now
from homebase.services.errors import EventNotFoundError, MissingFieldError
from homebase.services.recurrence import validate_rule, weekly_occurrences
from homebase.services.time_range import (
    day_bounds,
    month_bounds,
    validate_range,
    week_bounds,
)

logger = logging.getLogger(__name__)

# Fields a partial update may change. household_id and created_by are immutable.
EVENT_UPDATABLE_FIELDS = (
    "title",
    "location",
    "description",
    "start_time",
    "end_time",
    "responsible_user_id",
)


def _validate_title(title: str | None) -> None:
    if title is None or not str(title).strip():
        raise MissingFieldError("Title is required", field="title")


def _validate_times(start_time: int | None, end_time: int | None) -> None:
    if start_time is None:
        raise MissingFieldError("start_time is required", field="start_time")
    if end_time is None:
        raise MissingFieldError("end_time is required", field="end_time")
    validate_range(start_time, end_time)


def validate_event_definition(event_data: dict[str, Any]) -> None:
    """
    Check a full event definition before anything is written.

    Raises:
        MissingFieldError: If title, times or created_by are missing
        InvalidRangeError: If start_time >= end_time
    """
    _validate_title(event_data.get("title"))
    _validate_times(event_data.get("start_time"), event_data.get("end_time"))
    if event_data.get("created_by") is None:
        raise MissingFieldError("created_by is required", field="created_by")


def apply_event_patch(event: CalendarEvent, updates: dict[str, Any]) -> bool:
    """
    Apply a partial update to an event in the session without committing.

    Only keys in EVENT_UPDATABLE_FIELDS are considered; everything else in
    ``updates`` is ignored. The merged result is validated before any
    attribute is assigned.

    Args:
        event: Event to patch
        updates: Field name -> new value (absent keys are left unchanged)

    Returns:
        True if the event was changed, False for an empty patch
    """
    changes = {key: value for key, value in updates.items() if key in EVENT_UPDATABLE_FIELDS}
    if not changes:
        return False

    if "title" in changes:
        _validate_title(changes["title"])
    _validate_times(
        changes.get("start_time", event.start_time),
        changes.get("end_time", event.end_time),
    )

    for key, value in changes.items():
        setattr(event, key, value)
    event.updated_at = epoch_now()
    return True


class CalendarService:
    """
    Event store for household calendar events.

    Every public mutation is one unit of work: the session is committed
    once on success and rolled back on any error.
    """

    def __init__(self, db: Session):
        """Initialize the Calendar service.

        Args:
            db: Database session for reading and writing events
        """
        self.db = db

    # =========================================================================
    # Single events
    # =========================================================================

    def create_event(
        self,
        household_id: int,
        *,
        title: str,
        start_time: int,
        end_time: int,
        created_by: int,
        location: str | None = None,
        description: str | None = None,
        responsible_user_id: int | None = None,
        recurrence_rule: str | None = None,
    ) -> CalendarEvent:
        """
        Create a single calendar event.

        Raises:
            MissingFieldError: If title or created_by is missing
            InvalidRangeError: If start_time >= end_time
            InvalidRecurrenceError: If recurrence_rule is given and not "weekly"
        """
        if recurrence_rule is not None:
            recurrence_rule = validate_rule(recurrence_rule)

        event_data = {
            "title": title,
            "start_time": start_time,
            "end_time": end_time,
            "created_by": created_by,
            "location": location,
            "description": description,
            "responsible_user_id": responsible_user_id,
        }
        validate_event_definition(event_data)

        event = self._build_event(household_id, event_data, recurrence_rule=recurrence_rule)
        try:
            self.db.add(event)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"event_created event_id={event.id} household_id={household_id}")
        return event

    def get_event(self, event_id: int) -> CalendarEvent | None:
        """Get an event by id, or None if it does not exist."""
        return self.db.query(CalendarEvent).filter(CalendarEvent.id == event_id).first()

    def get_event_or_raise(self, event_id: int) -> CalendarEvent:
        """Get an event by id.

        Raises:
            EventNotFoundError: If the event does not exist
        """
        event = self.get_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def update_event(self, event_id: int, updates: dict[str, Any]) -> CalendarEvent:
        """
        Patch an event. Fields absent from ``updates`` keep their value.

        Raises:
            EventNotFoundError: If the event does not exist
            MissingFieldError: If the patch blanks the title
            InvalidRangeError: If the patched range would be inverted
        """
        event = self.get_event_or_raise(event_id)

        try:
            changed = apply_event_patch(event, updates)
            if not changed:
                return event
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"event_updated event_id={event_id}")
        return event

    def delete_event(self, event_id: int) -> None:
        """Delete an event. Deleting a missing id is a no-op.

        Children of a deleted series head are not deleted; the database
        nulls their recurrence_parent_id.
        """
        try:
            deleted = (
                self.db.query(CalendarEvent)
                .filter(CalendarEvent.id == event_id)
                .delete(synchronize_session="fetch")
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        if deleted:
            logger.info(f"event_deleted event_id={event_id}")

    def assign_responsible(self, event_id: int, user_id: int) -> CalendarEvent:
        """Make a member responsible for an event."""
        event = self.update_event(event_id, {"responsible_user_id": user_id})
        logger.info(f"responsible_assigned event_id={event_id} user_id={user_id}")
        return event

    def remove_responsible(self, event_id: int) -> CalendarEvent:
        """Clear the responsible member of an event."""
        event = self.update_event(event_id, {"responsible_user_id": None})
        logger.info(f"responsible_removed event_id={event_id}")
        return event

    # =========================================================================
    # Range views
    # =========================================================================

    def list_by_range(
        self,
        household_id: int,
        range_start: int,
        range_end: int,
        exclude_event_id: int | None = None,
    ) -> list[CalendarEvent]:
        """
        Get events whose [start, end) intersects [range_start, range_end).

        Results are always ordered by start_time ascending (ties by id).

        Args:
            household_id: Household to search
            range_start: Range start (inclusive)
            range_end: Range end (exclusive)
            exclude_event_id: Optional event id to leave out

        Returns:
            List of CalendarEvent objects
        """
        query = self.db.query(CalendarEvent).filter(
            CalendarEvent.household_id == household_id,
            CalendarEvent.start_time < range_end,
            CalendarEvent.end_time > range_start,
        )
        if exclude_event_id is not None:
            query = query.filter(CalendarEvent.id != exclude_event_id)

        return query.order_by(CalendarEvent.start_time.asc(), CalendarEvent.id.asc()).all()

    def get_day_view(self, household_id: int, day_start: int) -> list[CalendarEvent]:
        """Events intersecting the 24 hours starting at day_start."""
        return self.list_by_range(household_id, *day_bounds(day_start))

    def get_week_view(self, household_id: int, week_start: int) -> list[CalendarEvent]:
        """Events intersecting the 7 days starting at week_start."""
        return self.list_by_range(household_id, *week_bounds(week_start))

    def get_month_view(self, household_id: int, year: int, month: int) -> list[CalendarEvent]:
        """Events intersecting the given UTC calendar month."""
        return self.list_by_range(household_id, *month_bounds(year, month))

    # =========================================================================
    # Recurring series
    # =========================================================================

    def create_recurring_series(
        self,
        household_id: int,
        event_data: dict[str, Any],
        recurrence_rule: str,
    ) -> list[CalendarEvent]:
        """
        Create a weekly series: the head plus its generated occurrences.

        The head is inserted first (recurrence_parent_id = NULL), then each
        occurrence is inserted pointing at the head. All rows are committed
        together; nothing is written if validation fails.

        Args:
            household_id: Owning household
            event_data: Event definition (title, start_time, end_time,
                created_by and optional location, description,
                responsible_user_id)
            recurrence_rule: Must be "weekly"

        Returns:
            [head, child_1, ..., child_11] in start order

        Raises:
            InvalidRecurrenceError: If the rule is not "weekly"
            MissingFieldError / InvalidRangeError: If the definition is invalid
        """
        rule = validate_rule(recurrence_rule)
        validate_event_definition(event_data)
        occurrences = weekly_occurrences(event_data["start_time"], event_data["end_time"])

        events = []
        try:
            head = self._build_event(household_id, event_data, recurrence_rule=rule)
            self.db.add(head)
            self.db.flush()  # Get the head id for the children
            events.append(head)

            for start_time, end_time in occurrences[1:]:
                child = self._build_event(
                    household_id,
                    {**event_data, "start_time": start_time, "end_time": end_time},
                    recurrence_rule=rule,
                    recurrence_parent_id=head.id,
                )
                self.db.add(child)
                events.append(child)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"recurring_series_created parent_id={events[0].id} count={len(events)}")
        return events

    def _build_event(
        self,
        household_id: int,
        event_data: dict[str, Any],
        recurrence_rule: str | None = None,
        recurrence_parent_id: int | None = None,
    ) -> CalendarEvent:
        """Build an unsaved CalendarEvent from a validated definition."""
        now = epoch_now()
        return CalendarEvent(
            household_id=household_id,
            title=event_data["title"],
            location=event_data.get("location") or None,
            description=event_data.get("description") or None,
            start_time=event_data["start_time"],
            end_time=event_data["end_time"],
            responsible_user_id=event_data.get("responsible_user_id"),
            created_by=event_data["created_by"],
            recurrence_rule=recurrence_rule,
            recurrence_parent_id=recurrence_parent_id,
            created_at=now,
            updated_at=now,
        )


def get_calendar_service(db: Session) -> CalendarService:
    """Get a Calendar service instance.

    Args:
        db: Database session

    Returns:
        CalendarService instance
    """
    return CalendarService(db)
