"""
Pydantic schemas for conflict reports.
"""

from typing import Optional

from pydantic import BaseModel

from homebase.schemas.availability_block import AvailabilityBlockResponse
from homebase.schemas.calendar_event import CalendarEventResponse


class UnavailableMemberResponse(BaseModel):
    """A member whose block overlaps the checked range."""
    user_id: int
    display_name: Optional[str] = None
    block: AvailabilityBlockResponse

    class Config:
        from_attributes = True


class ConflictReportResponse(BaseModel):
    """Schema for a conflict check result."""
    overlapping_events: list[CalendarEventResponse]
    unavailable_members: list[UnavailableMemberResponse]
    no_responsible_person: bool

    class Config:
        from_attributes = True
