"""
Pydantic schemas for AvailabilityBlock and household availability listings.
"""

from typing import Optional

from pydantic import BaseModel, Field


class AvailabilityBlockBase(BaseModel):
    """Base schema for AvailabilityBlock."""
    start_time: int = Field(..., description="Start, seconds since epoch")
    end_time: int = Field(..., description="End (exclusive), seconds since epoch")
    reason: Optional[str] = Field(None, max_length=500)
    recurring_day: Optional[int] = Field(None, description="Weekday tag 0-6 (stored only)")


class AvailabilityBlockCreate(AvailabilityBlockBase):
    """Schema for creating an AvailabilityBlock."""
    pass


class AvailabilityBlockUpdate(BaseModel):
    """Schema for patching an AvailabilityBlock."""
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    reason: Optional[str] = Field(None, max_length=500)
    recurring_day: Optional[int] = None


class AvailabilityBlockResponse(AvailabilityBlockBase):
    """Schema for AvailabilityBlock response."""
    id: int
    user_id: int
    household_id: int
    created_at: int

    class Config:
        from_attributes = True


class MemberAvailabilityResponse(BaseModel):
    """One member's blocks in a household listing."""
    user_id: int
    display_name: Optional[str] = None
    blocks: list[AvailabilityBlockResponse]

    class Config:
        from_attributes = True
