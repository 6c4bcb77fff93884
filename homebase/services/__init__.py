"""
Application services for Homebase.
"""

from homebase.services.errors import (
    SchedulingError,
    ValidationError,
    MissingFieldError,
    InvalidFieldError,
    InvalidRangeError,
    InvalidRecurrenceError,
    InvalidScopeError,
    NotFoundError,
    EventNotFoundError,
    BlockNotFoundError,
)
from homebase.services.calendar_service import CalendarService, get_calendar_service
from homebase.services.recurrence import RECURRENCE_OCCURRENCES
from homebase.services.series_service import (
    RecurrenceScope,
    SeriesService,
    get_series_service,
)
from homebase.services.availability_service import (
    AvailabilityService,
    MemberAvailability,
    get_availability_service,
)
from homebase.services.conflict_service import (
    ConflictReport,
    ConflictService,
    UnavailableMember,
    get_conflict_service,
)
from homebase.services.directory_service import DirectoryService, get_directory_service

__all__ = [
    # Errors
    "SchedulingError",
    "ValidationError",
    "MissingFieldError",
    "InvalidFieldError",
    "InvalidRangeError",
    "InvalidRecurrenceError",
    "InvalidScopeError",
    "NotFoundError",
    "EventNotFoundError",
    "BlockNotFoundError",
    # Events
    "CalendarService",
    "get_calendar_service",
    "RECURRENCE_OCCURRENCES",
    "RecurrenceScope",
    "SeriesService",
    "get_series_service",
    # Availability and conflicts
    "AvailabilityService",
    "MemberAvailability",
    "get_availability_service",
    "ConflictReport",
    "ConflictService",
    "UnavailableMember",
    "get_conflict_service",
    # Directory
    "DirectoryService",
    "get_directory_service",
]
