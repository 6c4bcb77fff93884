"""
Tests for Availability service.
"""

import pytest

from conftest import at
from homebase.models import AvailabilityBlock
from homebase.services.availability_service import (
    AvailabilityService,
    MemberAvailability,
)
from homebase.services.errors import (
    BlockNotFoundError,
    InvalidFieldError,
    InvalidRangeError,
)


@pytest.fixture
def availability_service(db_session):
    """Create an availability service instance."""
    return AvailabilityService(db_session)


class TestCreateBlock:
    """Test block creation."""

    def test_create_block(self, availability_service, household, alice):
        block = availability_service.create_block(
            alice.id, household.id,
            start_time=at(9), end_time=at(17),
            reason="Work", recurring_day=0,
        )

        assert block.id is not None
        assert block.user_id == alice.id
        assert block.household_id == household.id
        assert (block.start_time, block.end_time) == (at(9), at(17))
        assert block.reason == "Work"
        assert block.recurring_day == 0
        assert block.display_name == "Alice"

    def test_inverted_range_rejected(self, availability_service, db_session, household, alice):
        with pytest.raises(InvalidRangeError):
            availability_service.create_block(
                alice.id, household.id, start_time=at(17), end_time=at(9)
            )
        assert db_session.query(AvailabilityBlock).count() == 0

    @pytest.mark.parametrize("day", [-1, 7])
    def test_recurring_day_out_of_range(self, availability_service, household, alice, day):
        with pytest.raises(InvalidFieldError) as exc_info:
            availability_service.create_block(
                alice.id, household.id,
                start_time=at(9), end_time=at(17), recurring_day=day,
            )
        assert exc_info.value.field == "recurring_day"


class TestUpdateBlock:
    """Test partial block updates."""

    def test_partial_update(self, availability_service, household, alice):
        block = availability_service.create_block(
            alice.id, household.id, start_time=at(9), end_time=at(17), reason="Work"
        )

        updated = availability_service.update_block(block.id, {"reason": "Travel"})

        assert updated.reason == "Travel"
        assert (updated.start_time, updated.end_time) == (at(9), at(17))

    def test_update_missing_block(self, availability_service):
        with pytest.raises(BlockNotFoundError):
            availability_service.update_block(999, {"reason": "x"})

    def test_update_inverted_range(self, availability_service, household, alice):
        block = availability_service.create_block(
            alice.id, household.id, start_time=at(9), end_time=at(17)
        )

        with pytest.raises(InvalidRangeError):
            availability_service.update_block(block.id, {"start_time": at(18)})

        assert availability_service.get_block(block.id).start_time == at(9)

    def test_update_recurring_day(self, availability_service, household, alice):
        block = availability_service.create_block(
            alice.id, household.id, start_time=at(9), end_time=at(17)
        )
        assert availability_service.update_block(block.id, {"recurring_day": 3}).recurring_day == 3

        with pytest.raises(InvalidFieldError):
            availability_service.update_block(block.id, {"recurring_day": 9})


class TestDeleteBlock:
    """Test block deletion."""

    def test_delete_block(self, availability_service, household, alice):
        block = availability_service.create_block(
            alice.id, household.id, start_time=at(9), end_time=at(17)
        )
        block_id = block.id

        availability_service.delete_block(block_id)

        assert availability_service.get_block(block_id) is None

    def test_delete_is_idempotent(self, availability_service):
        availability_service.delete_block(999)


class TestListings:
    """Test member and household listings."""

    def test_user_availability_in_range(self, availability_service, household, alice, bob):
        first = availability_service.create_block(
            alice.id, household.id, start_time=at(13), end_time=at(14)
        )
        second = availability_service.create_block(
            alice.id, household.id, start_time=at(8), end_time=at(9)
        )
        availability_service.create_block(
            alice.id, household.id, start_time=at(8, day_offset=2), end_time=at(9, day_offset=2)
        )
        availability_service.create_block(bob.id, household.id, start_time=at(8), end_time=at(9))

        blocks = availability_service.get_user_availability(alice.id, household.id, at(0), at(24))

        assert [b.id for b in blocks] == [second.id, first.id]

    def test_user_availability_boundary_exclusive(self, availability_service, household, alice):
        availability_service.create_block(alice.id, household.id, start_time=at(8), end_time=at(9))
        assert availability_service.get_user_availability(alice.id, household.id, at(9), at(10)) == []

    def test_household_availability_grouped(self, availability_service, household, alice, bob):
        bob_early = availability_service.create_block(
            bob.id, household.id, start_time=at(7), end_time=at(8)
        )
        alice_mid = availability_service.create_block(
            alice.id, household.id, start_time=at(9), end_time=at(10)
        )
        bob_late = availability_service.create_block(
            bob.id, household.id, start_time=at(15), end_time=at(16)
        )
        alice_early = availability_service.create_block(
            alice.id, household.id, start_time=at(8), end_time=at(9)
        )

        groups = availability_service.get_household_availability(household.id, at(0), at(24))

        assert all(isinstance(group, MemberAvailability) for group in groups)
        assert [(g.user_id, g.display_name) for g in groups] == [
            (bob.id, "Bob"),
            (alice.id, "Alice"),
        ]
        assert [b.id for b in groups[0].blocks] == [bob_early.id, bob_late.id]
        assert [b.id for b in groups[1].blocks] == [alice_early.id, alice_mid.id]

    def test_household_availability_excludes_other_households(
        self, availability_service, household, other_household, outsider
    ):
        availability_service.create_block(
            outsider.id, other_household.id, start_time=at(9), end_time=at(10)
        )
        assert availability_service.get_household_availability(household.id, at(0), at(24)) == []

    def test_recurring_day_is_not_expanded(self, availability_service, household, alice):
        """A block tagged with a weekday only covers its stored dates."""
        availability_service.create_block(
            alice.id, household.id, start_time=at(9), end_time=at(17), recurring_day=0
        )

        next_week = availability_service.get_user_availability(
            alice.id, household.id, at(0, day_offset=7), at(24, day_offset=7)
        )

        assert next_week == []
