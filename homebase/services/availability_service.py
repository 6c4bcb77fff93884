"""
Availability service for member unavailability blocks.

Members declare blocks of time when they cannot be responsible for
events. Blocks are matched by their literal [start, end) range only.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.orm import Session, contains_eager

from homebase.models import AvailabilityBlock, User
from homebase.services.errors import (
    BlockNotFoundError,
    InvalidFieldError,
    MissingFieldError,
)
from homebase.services.time_range import validate_range

logger = logging.getLogger(__name__)

BLOCK_UPDATABLE_FIELDS = ("start_time", "end_time", "reason", "recurring_day")


@dataclass
class MemberAvailability:
    """Blocks of one household member within a listing range."""
    user_id: int
    display_name: str | None
    blocks: list[AvailabilityBlock] = field(default_factory=list)


def _validate_recurring_day(recurring_day: int | None) -> None:
    if recurring_day is not None and not 0 <= recurring_day <= 6:
        raise InvalidFieldError(
            f"recurring_day must be between 0 and 6, got {recurring_day}",
            field="recurring_day",
        )


def _validate_block_times(start_time: int | None, end_time: int | None) -> None:
    if start_time is None:
        raise MissingFieldError("start_time is required", field="start_time")
    if end_time is None:
        raise MissingFieldError("end_time is required", field="end_time")
    validate_range(start_time, end_time)


class AvailabilityService:
    """Store for availability blocks."""

    def __init__(self, db: Session):
        self.db = db

    def create_block(
        self,
        user_id: int,
        household_id: int,
        *,
        start_time: int,
        end_time: int,
        reason: str | None = None,
        recurring_day: int | None = None,
    ) -> AvailabilityBlock:
        """
        Create an availability block for a member.

        Raises:
            InvalidRangeError: If start_time >= end_time
            InvalidFieldError: If recurring_day is outside 0-6
        """
        _validate_block_times(start_time, end_time)
        _validate_recurring_day(recurring_day)

        block = AvailabilityBlock(
            user_id=user_id,
            household_id=household_id,
            start_time=start_time,
            end_time=end_time,
            reason=reason or None,
            recurring_day=recurring_day,
        )
        try:
            self.db.add(block)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"block_created block_id={block.id} user_id={user_id}")
        return block

    def get_block(self, block_id: int) -> AvailabilityBlock | None:
        """Get a block by id, or None if it does not exist."""
        return self.db.query(AvailabilityBlock).filter(AvailabilityBlock.id == block_id).first()

    def update_block(self, block_id: int, updates: dict[str, Any]) -> AvailabilityBlock:
        """
        Patch a block. Fields absent from ``updates`` keep their value.

        Raises:
            BlockNotFoundError: If the block does not exist
            InvalidRangeError: If the patched range would be inverted
            InvalidFieldError: If recurring_day is outside 0-6
        """
        block = self.get_block(block_id)
        if block is None:
            raise BlockNotFoundError(block_id)

        changes = {key: value for key, value in updates.items() if key in BLOCK_UPDATABLE_FIELDS}
        if not changes:
            return block

        _validate_block_times(
            changes.get("start_time", block.start_time),
            changes.get("end_time", block.end_time),
        )
        if "recurring_day" in changes:
            _validate_recurring_day(changes["recurring_day"])

        try:
            for key, value in changes.items():
                setattr(block, key, value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"block_updated block_id={block_id}")
        return block

    def delete_block(self, block_id: int) -> None:
        """Delete a block. Deleting a missing id is a no-op."""
        try:
            deleted = (
                self.db.query(AvailabilityBlock)
                .filter(AvailabilityBlock.id == block_id)
                .delete(synchronize_session="fetch")
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        if deleted:
            logger.info(f"block_deleted block_id={block_id}")

    def get_user_availability(
        self,
        user_id: int,
        household_id: int,
        range_start: int,
        range_end: int,
    ) -> list[AvailabilityBlock]:
        """Blocks of one member intersecting the range, ascending by start."""
        return (
            self.db.query(AvailabilityBlock)
            .filter(
                AvailabilityBlock.user_id == user_id,
                AvailabilityBlock.household_id == household_id,
                AvailabilityBlock.start_time < range_end,
                AvailabilityBlock.end_time > range_start,
            )
            .order_by(AvailabilityBlock.start_time.asc(), AvailabilityBlock.id.asc())
            .all()
        )

    def list_household_blocks(
        self,
        household_id: int,
        range_start: int,
        range_end: int,
    ) -> list[AvailabilityBlock]:
        """
        Blocks of every member intersecting the range, ascending by start.

        The owning user is loaded in the same query so display names are
        available without extra round trips.
        """
        return (
            self.db.query(AvailabilityBlock)
            .join(User, User.id == AvailabilityBlock.user_id)
            .options(contains_eager(AvailabilityBlock.user))
            .filter(
                AvailabilityBlock.household_id == household_id,
                AvailabilityBlock.start_time < range_end,
                AvailabilityBlock.end_time > range_start,
            )
            .order_by(AvailabilityBlock.start_time.asc(), AvailabilityBlock.id.asc())
            .all()
        )

    def get_household_availability(
        self,
        household_id: int,
        range_start: int,
        range_end: int,
    ) -> list[MemberAvailability]:
        """
        Household blocks intersecting the range, grouped by member.

        Groups appear in the order their first block appears; blocks keep
        ascending start order inside each group.
        """
        grouped: dict[int, MemberAvailability] = {}
        for block in self.list_household_blocks(household_id, range_start, range_end):
            if block.user_id not in grouped:
                grouped[block.user_id] = MemberAvailability(
                    user_id=block.user_id,
                    display_name=block.display_name,
                )
            grouped[block.user_id].blocks.append(block)

        return list(grouped.values())


def get_availability_service(db: Session) -> AvailabilityService:
    """Get an Availability service instance."""
    return AvailabilityService(db)
