"""
SQLAlchemy declarative base and common model utilities.
"""

import time

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def epoch_now() -> int:
    """Current time as integer seconds since the Unix epoch."""
    return int(time.time())
