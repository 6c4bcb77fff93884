"""
Tests for Conflict service.
"""

import pytest

from conftest import at
from homebase.services.availability_service import AvailabilityService
from homebase.services.calendar_service import CalendarService
from homebase.services.conflict_service import (
    ConflictReport,
    ConflictService,
    UnavailableMember,
    get_conflict_service,
)
from homebase.services.errors import InvalidRangeError
from homebase.services.time_range import overlaps


@pytest.fixture
def conflict_service(db_session):
    return ConflictService(db_session)


@pytest.fixture
def calendar_service(db_session):
    return CalendarService(db_session)


@pytest.fixture
def availability_service(db_session):
    return AvailabilityService(db_session)


@pytest.fixture
def make_event(calendar_service, household, alice):
    def _make(start_time, end_time, title="Event", **kwargs):
        return calendar_service.create_event(
            household.id,
            title=title,
            start_time=start_time,
            end_time=end_time,
            created_by=alice.id,
            **kwargs,
        )
    return _make


class TestDetectConflicts:
    """Test conflict reports."""

    def test_unassigned_overlapping_event(self, conflict_service, make_event, household):
        """Event 10:00-12:00 with nobody responsible vs a 11:00-13:00 check."""
        event = make_event(at(10), at(12), title="A")

        report = conflict_service.detect_conflicts(household.id, at(11), at(13))

        assert isinstance(report, ConflictReport)
        assert [e.id for e in report.overlapping_events] == [event.id]
        assert report.no_responsible_person is True
        assert report.unavailable_members == []
        assert report.has_conflicts is True

    def test_assigned_event_has_responsible(self, conflict_service, make_event, household, bob):
        make_event(at(10), at(12), responsible_user_id=bob.id)

        report = conflict_service.detect_conflicts(household.id, at(11), at(13))

        assert report.no_responsible_person is False

    def test_any_unassigned_event_flags_gap(self, conflict_service, make_event, household, bob):
        make_event(at(10), at(12), responsible_user_id=bob.id)
        make_event(at(11), at(12))

        report = conflict_service.detect_conflicts(household.id, at(11), at(13))

        assert len(report.overlapping_events) == 2
        assert report.no_responsible_person is True

    def test_touching_events_not_reported(self, conflict_service, make_event, household):
        make_event(at(9), at(11), title="Ends at start")
        make_event(at(13), at(14), title="Starts at end")

        report = conflict_service.detect_conflicts(household.id, at(11), at(13))

        assert report.overlapping_events == []
        assert report.no_responsible_person is False
        assert report.has_conflicts is False

    def test_overlapping_events_ordered_by_start(self, conflict_service, make_event, household):
        later = make_event(at(12), at(14))
        earlier = make_event(at(10), at(12))

        report = conflict_service.detect_conflicts(household.id, at(11), at(13))

        assert [e.id for e in report.overlapping_events] == [earlier.id, later.id]

    def test_exclude_event_id(self, conflict_service, make_event, household):
        event = make_event(at(10), at(12))

        report = conflict_service.detect_conflicts(
            household.id, at(10), at(12), exclude_event_id=event.id
        )

        assert report.overlapping_events == []

    def test_other_households_ignored(
        self, conflict_service, calendar_service, household, other_household, outsider
    ):
        calendar_service.create_event(
            other_household.id,
            title="Elsewhere",
            start_time=at(10),
            end_time=at(12),
            created_by=outsider.id,
        )

        report = conflict_service.detect_conflicts(household.id, at(10), at(12))

        assert report.overlapping_events == []

    def test_unavailable_members_reported(
        self, conflict_service, availability_service, household, alice, bob
    ):
        block = availability_service.create_block(
            bob.id, household.id, start_time=at(9), end_time=at(17), reason="School"
        )
        availability_service.create_block(
            alice.id, household.id, start_time=at(17), end_time=at(18)
        )

        report = conflict_service.detect_conflicts(household.id, at(10), at(11))

        assert len(report.unavailable_members) == 1
        member = report.unavailable_members[0]
        assert isinstance(member, UnavailableMember)
        assert member.user_id == bob.id
        assert member.display_name == "Bob"
        assert member.block.id == block.id
        assert report.has_conflicts is True

    def test_inverted_range_rejected(self, conflict_service, household):
        with pytest.raises(InvalidRangeError):
            conflict_service.detect_conflicts(household.id, at(13), at(11))

    def test_does_not_mutate(self, conflict_service, make_event, household, db_session):
        event = make_event(at(10), at(12))
        before = (event.title, event.start_time, event.end_time, event.updated_at)

        conflict_service.detect_conflicts(household.id, at(11), at(13))

        db_session.expire_all()
        assert (event.title, event.start_time, event.end_time, event.updated_at) == before

    def test_get_conflict_service(self, db_session):
        assert isinstance(get_conflict_service(db_session), ConflictService)


class TestIsUserAvailable:
    """Test the single-member availability check."""

    def test_blocked_on_same_day(self, conflict_service, availability_service, household, bob):
        availability_service.create_block(bob.id, household.id, start_time=at(9), end_time=at(17))

        assert conflict_service.is_user_available(bob.id, household.id, at(10), at(11)) is False

    def test_available_next_day(self, conflict_service, availability_service, household, bob):
        availability_service.create_block(bob.id, household.id, start_time=at(9), end_time=at(17))

        assert conflict_service.is_user_available(
            bob.id, household.id, at(10, day_offset=1), at(11, day_offset=1)
        ) is True

    def test_touching_block_is_available(
        self, conflict_service, availability_service, household, bob
    ):
        availability_service.create_block(bob.id, household.id, start_time=at(9), end_time=at(17))

        assert conflict_service.is_user_available(bob.id, household.id, at(17), at(18)) is True
        assert conflict_service.is_user_available(bob.id, household.id, at(8), at(9)) is True

    def test_other_members_blocks_ignored(
        self, conflict_service, availability_service, household, alice, bob
    ):
        availability_service.create_block(alice.id, household.id, start_time=at(9), end_time=at(17))

        assert conflict_service.is_user_available(bob.id, household.id, at(10), at(11)) is True

    def test_inverted_range_rejected(self, conflict_service, household, bob):
        with pytest.raises(InvalidRangeError):
            conflict_service.is_user_available(bob.id, household.id, at(13), at(11))

    @pytest.mark.parametrize("start,end", [
        (at(7), at(9)),
        (at(8), at(10)),
        (at(10), at(11)),
        (at(16), at(18)),
        (at(17), at(18)),
        (at(8), at(18)),
    ])
    def test_queries_agree_with_overlaps(
        self, conflict_service, availability_service, make_event, household, bob, start, end
    ):
        block = availability_service.create_block(
            bob.id, household.id, start_time=at(9), end_time=at(17)
        )
        make_event(at(9), at(17))
        expected = overlaps(start, end, block.start_time, block.end_time)

        report = conflict_service.detect_conflicts(household.id, start, end)

        assert conflict_service.is_user_available(bob.id, household.id, start, end) is not expected
        assert bool(report.overlapping_events) is expected
        assert bool(report.unavailable_members) is expected
