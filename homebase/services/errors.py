"""
Exceptions raised by the scheduling services.

Every error names the field or constraint that failed so callers can
render a specific message. None of them are transient; they are raised
before any row is written and are never retried.
"""


class SchedulingError(Exception):
    """Base exception for scheduling service errors."""

    code = "SCHEDULING_ERROR"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict[str, str | None]:
        """Serializable form used by the HTTP layer."""
        return {"message": self.message, "field": self.field, "code": self.code}


class ValidationError(SchedulingError):
    """Raised when input fails local validation."""
    code = "VALIDATION_ERROR"


class MissingFieldError(ValidationError):
    """Raised when a required field is absent or blank."""
    code = "MISSING_FIELD"


class InvalidFieldError(ValidationError):
    """Raised when a field holds a value outside its allowed domain."""
    code = "INVALID_FIELD"


class InvalidRangeError(ValidationError):
    """Raised when a create/update would leave start_time >= end_time."""
    code = "INVALID_RANGE"


class InvalidRecurrenceError(ValidationError):
    """Raised for a recurrence rule other than 'weekly'."""
    code = "INVALID_RECURRENCE"


class InvalidScopeError(ValidationError):
    """Raised for a series scope outside this/future/all."""
    code = "INVALID_SCOPE"


class NotFoundError(SchedulingError):
    """Raised when the targeted row does not exist."""
    code = "NOT_FOUND"


class EventNotFoundError(NotFoundError):
    """Raised when a calendar event id does not exist."""

    def __init__(self, event_id: int):
        super().__init__(f"Event not found: {event_id}", field="event_id")
        self.event_id = event_id


class BlockNotFoundError(NotFoundError):
    """Raised when an availability block id does not exist."""

    def __init__(self, block_id: int):
        super().__init__(f"Availability block not found: {block_id}", field="block_id")
        self.block_id = block_id
