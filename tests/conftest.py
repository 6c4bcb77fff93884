"""
Pytest configuration and fixtures for Homebase tests.
"""

import os

# Keep the application engine off PostgreSQL during tests; every test
# gets its own in-memory database through the fixtures below.
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")

from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from homebase.database import enable_sqlite_foreign_keys
from homebase.models import Base, Household, HouseholdMember, MemberRole, User

HOUR = 3600

# Monday 2026-03-02 00:00 UTC
DAY_START = int(datetime(2026, 3, 2, tzinfo=timezone.utc).timestamp())


def at(hour: int, day_offset: int = 0) -> int:
    """Timestamp for an hour of the test day (optionally days later)."""
    return DAY_START + day_offset * 86400 + hour * HOUR


@pytest.fixture(scope="function")
def engine():
    """Create an in-memory SQLite engine with the full schema.

    A fresh database per test keeps tests isolated even though the
    services commit their own units of work.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine) -> Session:
    """Provide a database session for tests."""
    session_factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = session_factory()

    yield session

    session.close()


@pytest.fixture
def alice(db_session):
    """Create a sample user (household owner)."""
    user = User(email="alice@example.com", display_name="Alice")
    db_session.add(user)
    db_session.flush()
    return user


@pytest.fixture
def bob(db_session):
    """Create a second sample user."""
    user = User(email="bob@example.com", display_name="Bob")
    db_session.add(user)
    db_session.flush()
    return user


@pytest.fixture
def outsider(db_session):
    """Create a user who belongs to no household."""
    user = User(email="outsider@example.com", display_name="Outsider")
    db_session.add(user)
    db_session.flush()
    return user


@pytest.fixture
def household(db_session, alice, bob):
    """Create a household with alice (parent) and bob (teen) as members."""
    household = Household(name="Test Household", owner_id=alice.id)
    db_session.add(household)
    db_session.flush()

    db_session.add_all([
        HouseholdMember(household_id=household.id, user_id=alice.id, role=MemberRole.parent),
        HouseholdMember(household_id=household.id, user_id=bob.id, role=MemberRole.teen),
    ])
    db_session.commit()
    return household


@pytest.fixture
def other_household(db_session, outsider):
    """Create a second, unrelated household."""
    household = Household(name="Other Household", owner_id=outsider.id)
    db_session.add(household)
    db_session.flush()
    db_session.add(
        HouseholdMember(household_id=household.id, user_id=outsider.id, role=MemberRole.parent)
    )
    db_session.commit()
    return household
