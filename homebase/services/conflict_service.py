"""
Conflict service: checks a candidate time range against a household's
events and availability blocks.

Read-only. Safe to call speculatively before committing an edit.
"""

from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from homebase.models import AvailabilityBlock, CalendarEvent
from homebase.services.availability_service import AvailabilityService
from homebase.services.calendar_service import CalendarService
from homebase.services.time_range import validate_range


@dataclass
class UnavailableMember:
    """A member with a block overlapping the candidate range."""
    user_id: int
    display_name: str | None
    block: AvailabilityBlock


@dataclass
class ConflictReport:
    """Result of a conflict check."""
    overlapping_events: list[CalendarEvent] = field(default_factory=list)
    unavailable_members: list[UnavailableMember] = field(default_factory=list)
    no_responsible_person: bool = False

    @property
    def has_conflicts(self) -> bool:
        """True if anything overlaps the candidate range."""
        return bool(self.overlapping_events or self.unavailable_members)


class ConflictService:
    """Composes event and availability queries into conflict reports."""

    def __init__(self, db: Session):
        self.db = db
        self.calendar = CalendarService(db)
        self.availability = AvailabilityService(db)

    def detect_conflicts(
        self,
        household_id: int,
        start_time: int,
        end_time: int,
        exclude_event_id: int | None = None,
    ) -> ConflictReport:
        """
        Report everything overlapping [start_time, end_time) in a household.

        Args:
            household_id: Household to check
            start_time: Candidate start (inclusive)
            end_time: Candidate end (exclusive)
            exclude_event_id: Event to ignore, used when checking an edit
                of that event against itself

        Returns:
            ConflictReport with overlapping events (ascending start), members
            with overlapping blocks, and whether any overlapping event has
            no responsible member

        Raises:
            InvalidRangeError: If start_time >= end_time
        """
        validate_range(start_time, end_time)

        overlapping_events = self.calendar.list_by_range(
            household_id,
            start_time,
            end_time,
            exclude_event_id=exclude_event_id,
        )

        unavailable_members = [
            UnavailableMember(
                user_id=block.user_id,
                display_name=block.display_name,
                block=block,
            )
            for block in self.availability.list_household_blocks(household_id, start_time, end_time)
        ]

        no_responsible_person = any(
            event.responsible_user_id is None for event in overlapping_events
        )

        return ConflictReport(
            overlapping_events=overlapping_events,
            unavailable_members=unavailable_members,
            no_responsible_person=no_responsible_person,
        )

    def is_user_available(
        self,
        user_id: int,
        household_id: int,
        start_time: int,
        end_time: int,
    ) -> bool:
        """True if no block of this member intersects [start_time, end_time).

        Raises:
            InvalidRangeError: If start_time >= end_time
        """
        validate_range(start_time, end_time)

        block = (
            self.db.query(AvailabilityBlock.id)
            .filter(
                AvailabilityBlock.user_id == user_id,
                AvailabilityBlock.household_id == household_id,
                AvailabilityBlock.start_time < end_time,
                AvailabilityBlock.end_time > start_time,
            )
            .first()
        )
        return block is None


def get_conflict_service(db: Session) -> ConflictService:
    """Get a Conflict service instance."""
    return ConflictService(db)
