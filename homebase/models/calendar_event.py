"""
CalendarEvent model for household calendar events and weekly series.
"""

from typing import TYPE_CHECKING

from sqlalchemy import (
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship as orm_relationship

from homebase.models.base import Base, epoch_now

if TYPE_CHECKING:
    from homebase.models.household import User


class CalendarEvent(Base):
    """
    A single calendar event owned by a household.

    Recurring series are stored as one row per occurrence. The first row
    (the series head) has recurrence_parent_id = NULL; every generated
    occurrence points at the head's id. A standalone event also has a NULL
    parent, so "is this row in series X" is always
    ``id == X or recurrence_parent_id == X``.

    Times are integer seconds since the Unix epoch and always satisfy
    start_time < end_time.
    """

    __tablename__ = "calendar_events"
    __table_args__ = (
        Index("idx_events_household_time", "household_id", "start_time", "end_time"),
        Index("idx_events_recurrence_parent", "recurrence_parent_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    household_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Event title",
    )
    location: Mapped[str | None] = mapped_column(
        String(500),
        comment="Event location",
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        comment="Event description",
    )
    start_time: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Event start, seconds since epoch",
    )
    end_time: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Event end (exclusive), seconds since epoch",
    )
    responsible_user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        comment="Member responsible for this event",
    )
    created_by: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        comment="Member who created the event (immutable)",
    )
    recurrence_rule: Mapped[str | None] = mapped_column(
        String(32),
        comment="Recurrence rule of the series (only 'weekly')",
    )
    recurrence_parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("calendar_events.id", ondelete="SET NULL"),
        comment="Series head id for generated occurrences",
    )
    created_at: Mapped[int] = mapped_column(Integer, default=epoch_now)
    updated_at: Mapped[int] = mapped_column(Integer, default=epoch_now)

    # Relationships
    responsible: Mapped["User | None"] = orm_relationship(
        "User",
        foreign_keys=[responsible_user_id],
        lazy="joined",
    )

    def __repr__(self) -> str:
        return f"<CalendarEvent(id={self.id}, title={self.title!r}, start={self.start_time})>"

    @property
    def responsible_name(self) -> str | None:
        """Display name of the responsible member, if one is assigned."""
        if self.responsible is None:
            return None
        return self.responsible.display_name

    @property
    def duration_seconds(self) -> int:
        """Get the duration of the event in seconds."""
        return self.end_time - self.start_time

    @property
    def is_series_child(self) -> bool:
        """Check if this event was generated from a series head."""
        return self.recurrence_parent_id is not None

    @property
    def series_id(self) -> int:
        """Id of the series this event belongs to (its own id when it is not a child)."""
        return self.recurrence_parent_id if self.recurrence_parent_id is not None else self.id
