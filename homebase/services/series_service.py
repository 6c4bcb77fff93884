"""
Series service: scoped update and delete across recurring event series.

A scope selects which rows of a series an edit applies to:

- this:   the target event only, after detaching it from its series
- future: every event of the series starting at or after the target
- all:    every event of the series, head included
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Union

from sqlalchemy import or_
from sqlalchemy.orm import Session

from homebase.models import CalendarEvent
from homebase.services.calendar_service import CalendarService, apply_event_patch
from homebase.services.errors import InvalidScopeError

logger = logging.getLogger(__name__)


class RecurrenceScope(str, enum.Enum):
    """Which part of a series an edit or delete applies to."""
    this = "this"
    future = "future"
    all = "all"


def parse_scope(scope: "str | RecurrenceScope") -> RecurrenceScope:
    """Convert a scope token to RecurrenceScope.

    Raises:
        InvalidScopeError: If the token is not this, future or all
    """
    try:
        return RecurrenceScope(scope)
    except ValueError:
        raise InvalidScopeError(
            f"Invalid scope {scope!r}: must be this, future, or all",
            field="scope",
        )


# Position of an event relative to its series, built at resolution time.
# The table only stores one nullable recurrence_parent_id.

@dataclass
class Standalone:
    """An event that is not part of any series."""
    event_id: int

    @property
    def series_id(self) -> int:
        return self.event_id


@dataclass
class SeriesHead:
    """The first event of a series, anchoring its children."""
    event_id: int
    child_ids: list[int] = field(default_factory=list)

    @property
    def series_id(self) -> int:
        return self.event_id


@dataclass
class SeriesChild:
    """A generated occurrence pointing at its series head."""
    event_id: int
    parent_id: int

    @property
    def series_id(self) -> int:
        return self.parent_id


SeriesPosition = Union[Standalone, SeriesHead, SeriesChild]


def series_position(db: Session, event: CalendarEvent) -> SeriesPosition:
    """Classify an event as standalone, series head or series child."""
    if event.recurrence_parent_id is not None:
        return SeriesChild(event_id=event.id, parent_id=event.recurrence_parent_id)

    child_ids = [
        row.id
        for row in db.query(CalendarEvent.id)
        .filter(CalendarEvent.recurrence_parent_id == event.id)
        .order_by(CalendarEvent.start_time.asc(), CalendarEvent.id.asc())
        .all()
    ]
    if child_ids:
        return SeriesHead(event_id=event.id, child_ids=child_ids)
    return Standalone(event_id=event.id)


class SeriesService:
    """
    Applies updates and deletes to a recurring series by scope.

    Scope resolution is defined once in resolve_series_members and shared
    by update and delete. Each call is a single unit of work: every
    resolved row changes, or none does.
    """

    def __init__(self, db: Session):
        self.db = db
        self.calendar = CalendarService(db)

    def resolve_series_members(
        self,
        event_id: int,
        scope: "str | RecurrenceScope",
    ) -> list[int]:
        """
        Resolve a target event and scope to the event ids it covers.

        Args:
            event_id: Head, child or standalone event
            scope: this, future or all

        Returns:
            Event ids ordered by start time

        Raises:
            InvalidScopeError: If scope is not this, future or all
            EventNotFoundError: If the event does not exist
        """
        scope = parse_scope(scope)
        event = self.calendar.get_event_or_raise(event_id)
        return self._resolve(event, scope)

    def _resolve(self, event: CalendarEvent, scope: RecurrenceScope) -> list[int]:
        if scope is RecurrenceScope.this:
            return [event.id]

        parent_id = event.series_id

        query = self.db.query(CalendarEvent.id).filter(
            or_(
                CalendarEvent.id == parent_id,
                CalendarEvent.recurrence_parent_id == parent_id,
            )
        )
        if scope is RecurrenceScope.future:
            query = query.filter(CalendarEvent.start_time >= event.start_time)

        rows = query.order_by(CalendarEvent.start_time.asc(), CalendarEvent.id.asc()).all()
        return [row.id for row in rows]

    def update_series_event(
        self,
        event_id: int,
        updates: dict[str, Any],
        scope: "str | RecurrenceScope",
    ) -> list[CalendarEvent]:
        """
        Apply the same partial patch to every event the scope selects.

        With scope "this" the target is first detached from its series
        (recurrence_parent_id set to NULL) so siblings are never touched.

        Returns:
            The updated events, ordered by start time

        Raises:
            InvalidScopeError: If scope is invalid (nothing is mutated)
            EventNotFoundError: If the event does not exist
            MissingFieldError / InvalidRangeError: If the patch is invalid
                for any resolved event (nothing is mutated)
        """
        scope = parse_scope(scope)
        event = self.calendar.get_event_or_raise(event_id)
        member_ids = self._resolve(event, scope)

        try:
            if scope is RecurrenceScope.this:
                event.recurrence_parent_id = None

            updated = []
            for member_id in member_ids:
                member = self.calendar.get_event_or_raise(member_id)
                apply_event_patch(member, updates)
                updated.append(member)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"series_updated event_id={event_id} scope={scope.value} count={len(updated)}"
        )
        return updated

    def delete_series_event(
        self,
        event_id: int,
        scope: "str | RecurrenceScope",
    ) -> list[int]:
        """
        Delete every event the scope selects.

        With scope "this" the target is detached before it is deleted, so
        exactly one row is removed. Deleting a series head this way leaves
        its children standalone: ON DELETE SET NULL clears their
        recurrence_parent_id and the series no longer exists.

        Returns:
            Ids of the deleted events

        Raises:
            InvalidScopeError: If scope is invalid (nothing is deleted)
            EventNotFoundError: If the event does not exist
        """
        scope = parse_scope(scope)
        event = self.calendar.get_event_or_raise(event_id)
        member_ids = self._resolve(event, scope)

        orphaned_ids = []
        if scope is RecurrenceScope.this:
            position = series_position(self.db, event)
            if isinstance(position, SeriesHead):
                orphaned_ids = position.child_ids

        try:
            if scope is RecurrenceScope.this:
                event.recurrence_parent_id = None
                self.db.flush()

            (
                self.db.query(CalendarEvent)
                .filter(CalendarEvent.id.in_(member_ids))
                .delete(synchronize_session="fetch")
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"series_deleted event_id={event_id} scope={scope.value} count={len(member_ids)}"
        )
        if orphaned_ids:
            logger.info(
                f"series_dissolved head_id={event_id} detached_children={len(orphaned_ids)}"
            )
        return member_ids


def get_series_service(db: Session) -> SeriesService:
    """Get a Series service instance."""
    return SeriesService(db)
