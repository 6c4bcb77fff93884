"""
SQLAlchemy models for Homebase.

All models are imported here for easy access and to ensure
they are registered with the declarative base.
"""

from homebase.models.base import Base, epoch_now
from homebase.models.household import User, Household, HouseholdMember, MemberRole
from homebase.models.calendar_event import CalendarEvent
from homebase.models.availability_block import AvailabilityBlock
