"""
Calendar router for household events, availability and conflict checks.

Thin JSON layer over the scheduling services. Payloads are wrapped as
{"data": ...}. Caller identity is taken from the X-User-Id header set by
the upstream authentication layer; this router only checks household
membership, not role permissions.
"""

from datetime import datetime, timezone
from typing import NoReturn, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from sqlalchemy.orm import Session

from homebase.config import get_settings
from homebase.database import get_db
from homebase.models import CalendarEvent, epoch_now
from homebase.schemas import (
    AvailabilityBlockCreate,
    AvailabilityBlockResponse,
    AvailabilityBlockUpdate,
    CalendarEventCreate,
    CalendarEventResponse,
    CalendarEventUpdate,
    ConflictReportResponse,
    MemberAvailabilityResponse,
    ResponsibleAssign,
)
from homebase.services import (
    NotFoundError,
    SchedulingError,
    get_availability_service,
    get_calendar_service,
    get_conflict_service,
    get_directory_service,
    get_series_service,
)
from homebase.services.time_range import month_bounds

router = APIRouter(prefix="/api/households/{household_id}", tags=["calendar"])


def get_current_user_id(x_user_id: int = Header(...)) -> int:
    """Id of the authenticated caller, from the X-User-Id header."""
    return x_user_id


def get_household_context(
    household_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> int:
    """Resolve the household from the path and check the caller belongs to it."""
    directory = get_directory_service(db)
    if not directory.household_exists(household_id):
        raise HTTPException(status_code=404, detail="Household not found")
    if not directory.is_member(household_id, user_id):
        raise HTTPException(status_code=403, detail="Not a member of this household")
    return household_id


def raise_service_error(error: SchedulingError) -> NoReturn:
    """Translate a scheduling error into an HTTP error naming the failed field."""
    status_code = 404 if isinstance(error, NotFoundError) else 400
    raise HTTPException(status_code=status_code, detail=error.to_dict())


def get_household_event(db: Session, household_id: int, event_id: int) -> CalendarEvent:
    """Get an event of this household or raise 404."""
    event = get_calendar_service(db).get_event(event_id)
    if event is None or event.household_id != household_id:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


def serialize_events(events: list[CalendarEvent]) -> list[CalendarEventResponse]:
    return [CalendarEventResponse.model_validate(event) for event in events]


# =============================================================================
# EVENTS
# =============================================================================

@router.post("/events", status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: CalendarEventCreate,
    household_id: int = Depends(get_household_context),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Create an event, or a weekly series when recurrence_rule is given.

    A series returns the list of created occurrences, head first.
    """
    calendar_service = get_calendar_service(db)
    event_data = payload.model_dump(exclude={"recurrence_rule"})
    event_data["created_by"] = user_id

    try:
        if payload.recurrence_rule is not None:
            events = calendar_service.create_recurring_series(
                household_id, event_data, payload.recurrence_rule
            )
            return {"data": serialize_events(events)}

        event = calendar_service.create_event(household_id, **event_data)
    except SchedulingError as e:
        raise_service_error(e)

    return {"data": CalendarEventResponse.model_validate(event)}


@router.get("/events")
async def list_events(
    start: Optional[int] = Query(None, description="Range start (epoch seconds)"),
    end: Optional[int] = Query(None, description="Range end (epoch seconds)"),
    household_id: int = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """
    List events intersecting [start, end).

    Without both bounds, returns the current UTC calendar month.
    """
    if start is None or end is None:
        now = datetime.now(timezone.utc)
        start, end = month_bounds(now.year, now.month)

    events = get_calendar_service(db).list_by_range(household_id, start, end)
    return {"data": serialize_events(events)}


@router.get("/events/day/{day_start}")
async def get_day_view(
    day_start: int,
    household_id: int = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """Events intersecting the 24 hours starting at day_start."""
    events = get_calendar_service(db).get_day_view(household_id, day_start)
    return {"data": serialize_events(events)}


@router.get("/events/week/{week_start}")
async def get_week_view(
    week_start: int,
    household_id: int = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """Events intersecting the 7 days starting at week_start."""
    events = get_calendar_service(db).get_week_view(household_id, week_start)
    return {"data": serialize_events(events)}


@router.get("/events/month/{year}/{month}")
async def get_month_view(
    year: int,
    month: int,
    household_id: int = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """Events intersecting a UTC calendar month."""
    try:
        events = get_calendar_service(db).get_month_view(household_id, year, month)
    except SchedulingError as e:
        raise_service_error(e)
    return {"data": serialize_events(events)}


@router.get("/events/conflicts/check")
async def check_conflicts(
    start_time: int = Query(..., description="Candidate start (epoch seconds)"),
    end_time: int = Query(..., description="Candidate end (epoch seconds)"),
    exclude_event_id: Optional[int] = Query(None, description="Event to ignore"),
    household_id: int = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """
    Check a candidate range for overlapping events and unavailable members.
    """
    try:
        report = get_conflict_service(db).detect_conflicts(
            household_id, start_time, end_time, exclude_event_id=exclude_event_id
        )
    except SchedulingError as e:
        raise_service_error(e)
    return {"data": ConflictReportResponse.model_validate(report)}


@router.get("/events/{event_id}")
async def get_event(
    event_id: int,
    household_id: int = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """Get a single event."""
    event = get_household_event(db, household_id, event_id)
    return {"data": CalendarEventResponse.model_validate(event)}


@router.put("/events/{event_id}")
async def update_event(
    event_id: int,
    payload: CalendarEventUpdate,
    scope: Optional[str] = Query(None, description="Series scope: this, future or all"),
    household_id: int = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """
    Patch an event. With a scope, the patch applies across its series and
    the response lists every updated event.
    """
    get_household_event(db, household_id, event_id)
    updates = payload.model_dump(exclude_unset=True)

    try:
        if scope is not None:
            events = get_series_service(db).update_series_event(event_id, updates, scope)
            return {"data": serialize_events(events)}

        event = get_calendar_service(db).update_event(event_id, updates)
    except SchedulingError as e:
        raise_service_error(e)

    return {"data": CalendarEventResponse.model_validate(event)}


@router.delete("/events/{event_id}")
async def delete_event(
    event_id: int,
    scope: Optional[str] = Query(None, description="Series scope: this, future or all"),
    household_id: int = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """Delete an event, or part of its series when a scope is given."""
    get_household_event(db, household_id, event_id)

    try:
        if scope is not None:
            deleted_ids = get_series_service(db).delete_series_event(event_id, scope)
            return {"data": {"message": "Events deleted", "deleted_ids": deleted_ids}}

        get_calendar_service(db).delete_event(event_id)
    except SchedulingError as e:
        raise_service_error(e)

    return {"data": {"message": "Event deleted", "deleted_ids": [event_id]}}


@router.put("/events/{event_id}/responsible")
async def assign_responsible(
    event_id: int,
    payload: ResponsibleAssign,
    household_id: int = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """
    Assign a responsible member.

    Returns 409 if the member has an availability block during the event.
    """
    event = get_household_event(db, household_id, event_id)

    if not get_directory_service(db).is_member(household_id, payload.user_id):
        raise HTTPException(
            status_code=400,
            detail={
                "message": "User is not a member of this household",
                "field": "user_id",
                "code": "INVALID_FIELD",
            },
        )

    conflict_service = get_conflict_service(db)
    if not conflict_service.is_user_available(
        payload.user_id, household_id, event.start_time, event.end_time
    ):
        raise HTTPException(
            status_code=409,
            detail={
                "message": "User is unavailable during this event",
                "field": "user_id",
                "code": "USER_UNAVAILABLE",
            },
        )

    try:
        event = get_calendar_service(db).assign_responsible(event_id, payload.user_id)
    except SchedulingError as e:
        raise_service_error(e)
    return {"data": CalendarEventResponse.model_validate(event)}


@router.delete("/events/{event_id}/responsible")
async def remove_responsible(
    event_id: int,
    household_id: int = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """Clear the responsible member of an event."""
    get_household_event(db, household_id, event_id)
    try:
        event = get_calendar_service(db).remove_responsible(event_id)
    except SchedulingError as e:
        raise_service_error(e)
    return {"data": CalendarEventResponse.model_validate(event)}


# =============================================================================
# AVAILABILITY
# =============================================================================

def default_range(start: Optional[int], end: Optional[int]) -> tuple[int, int]:
    """Fill in a missing listing range: from 0 to the configured look-ahead."""
    settings = get_settings()
    if start is None:
        start = 0
    if end is None:
        end = epoch_now() + settings.availability_window_days * 86400
    return start, end


@router.post("/availability", status_code=status.HTTP_201_CREATED)
async def create_availability_block(
    payload: AvailabilityBlockCreate,
    household_id: int = Depends(get_household_context),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Declare a block of time when the caller is unavailable."""
    try:
        block = get_availability_service(db).create_block(
            user_id, household_id, **payload.model_dump()
        )
    except SchedulingError as e:
        raise_service_error(e)
    return {"data": AvailabilityBlockResponse.model_validate(block)}


@router.get("/availability")
async def get_household_availability(
    start: Optional[int] = Query(None),
    end: Optional[int] = Query(None),
    household_id: int = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """All members' blocks in range, grouped by member."""
    start, end = default_range(start, end)
    groups = get_availability_service(db).get_household_availability(household_id, start, end)
    return {"data": [MemberAvailabilityResponse.model_validate(group) for group in groups]}


@router.get("/availability/me")
async def get_my_availability(
    start: Optional[int] = Query(None),
    end: Optional[int] = Query(None),
    household_id: int = Depends(get_household_context),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """The caller's blocks in range."""
    start, end = default_range(start, end)
    blocks = get_availability_service(db).get_user_availability(user_id, household_id, start, end)
    return {"data": [AvailabilityBlockResponse.model_validate(block) for block in blocks]}


@router.put("/availability/{block_id}")
async def update_availability_block(
    block_id: int,
    payload: AvailabilityBlockUpdate,
    household_id: int = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """Patch an availability block."""
    availability_service = get_availability_service(db)
    block = availability_service.get_block(block_id)
    if block is None or block.household_id != household_id:
        raise HTTPException(status_code=404, detail="Availability block not found")

    try:
        block = availability_service.update_block(block_id, payload.model_dump(exclude_unset=True))
    except SchedulingError as e:
        raise_service_error(e)
    return {"data": AvailabilityBlockResponse.model_validate(block)}


@router.delete("/availability/{block_id}")
async def delete_availability_block(
    block_id: int,
    household_id: int = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """Delete an availability block."""
    availability_service = get_availability_service(db)
    block = availability_service.get_block(block_id)
    if block is not None and block.household_id != household_id:
        raise HTTPException(status_code=404, detail="Availability block not found")

    availability_service.delete_block(block_id)
    return {"data": {"message": "Block deleted"}}
