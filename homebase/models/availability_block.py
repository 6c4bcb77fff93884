"""
AvailabilityBlock model for member unavailability windows.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship as orm_relationship

from homebase.models.base import Base, epoch_now

if TYPE_CHECKING:
    from homebase.models.household import User


class AvailabilityBlock(Base):
    """
    A time window during which a member is not available.

    Blocks are matched only by their literal [start_time, end_time) range.
    recurring_day (0-6) is stored with the block but no query expands it
    into weekly occurrences.
    """

    __tablename__ = "availability_blocks"
    __table_args__ = (
        Index("idx_avail_user_time", "user_id", "start_time", "end_time"),
        Index("idx_avail_household_time", "household_id", "start_time", "end_time"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    household_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
    )
    start_time: Mapped[int] = mapped_column(Integer, nullable=False)
    end_time: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[str | None] = mapped_column(
        String(500),
        comment="Free-text reason (e.g. 'Work', 'Travel')",
    )
    recurring_day: Mapped[int | None] = mapped_column(
        Integer,
        comment="Weekday tag 0-6, stored only",
    )
    created_at: Mapped[int] = mapped_column(Integer, default=epoch_now)

    user: Mapped["User"] = orm_relationship("User")

    def __repr__(self) -> str:
        return (
            f"<AvailabilityBlock(id={self.id}, user_id={self.user_id}, "
            f"start={self.start_time}, end={self.end_time})>"
        )

    @property
    def display_name(self) -> str | None:
        """Display name of the member who owns the block."""
        return self.user.display_name if self.user else None
