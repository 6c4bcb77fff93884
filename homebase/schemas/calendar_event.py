"""
Pydantic schemas for CalendarEvent.
"""

from typing import Optional

from pydantic import BaseModel, Field


class CalendarEventBase(BaseModel):
    """Base schema for CalendarEvent."""
    title: str = Field(..., max_length=500, description="Event title")
    start_time: int = Field(..., description="Start, seconds since epoch")
    end_time: int = Field(..., description="End (exclusive), seconds since epoch")
    location: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    responsible_user_id: Optional[int] = Field(None, description="Member responsible for the event")


class CalendarEventCreate(CalendarEventBase):
    """Schema for creating a CalendarEvent or a weekly series."""
    recurrence_rule: Optional[str] = Field(None, description="Only 'weekly' is supported")


class CalendarEventUpdate(BaseModel):
    """Schema for patching a CalendarEvent. Unset fields are left unchanged."""
    title: Optional[str] = Field(None, max_length=500)
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    location: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    responsible_user_id: Optional[int] = None


class ResponsibleAssign(BaseModel):
    """Schema for assigning a responsible member."""
    user_id: int


class CalendarEventResponse(CalendarEventBase):
    """Schema for CalendarEvent response."""
    id: int
    household_id: int
    responsible_name: Optional[str] = None
    created_by: int
    recurrence_rule: Optional[str] = None
    recurrence_parent_id: Optional[int] = None
    created_at: int
    updated_at: int

    class Config:
        from_attributes = True
