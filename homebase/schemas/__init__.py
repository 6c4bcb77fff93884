"""
Pydantic schemas for API request/response validation.
"""

from homebase.schemas.calendar_event import (
    CalendarEventCreate,
    CalendarEventUpdate,
    CalendarEventResponse,
    ResponsibleAssign,
)
from homebase.schemas.availability_block import (
    AvailabilityBlockCreate,
    AvailabilityBlockUpdate,
    AvailabilityBlockResponse,
    MemberAvailabilityResponse,
)
from homebase.schemas.conflict import (
    UnavailableMemberResponse,
    ConflictReportResponse,
)
