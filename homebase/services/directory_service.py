"""
Read-only lookups against the household directory.
"""

from sqlalchemy.orm import Session

from homebase.models import Household, HouseholdMember, MemberRole, User


class DirectoryService:
    """Household and member lookups used by the HTTP layer and listings."""

    def __init__(self, db: Session):
        self.db = db

    def household_exists(self, household_id: int) -> bool:
        """Check if a household exists."""
        return (
            self.db.query(Household.id).filter(Household.id == household_id).first()
            is not None
        )

    def get_member_role(self, household_id: int, user_id: int) -> MemberRole | None:
        """Role of a user in a household, or None if not a member."""
        membership = (
            self.db.query(HouseholdMember)
            .filter_by(household_id=household_id, user_id=user_id)
            .first()
        )
        return membership.role if membership else None

    def is_member(self, household_id: int, user_id: int) -> bool:
        """Check if a user belongs to a household."""
        return self.get_member_role(household_id, user_id) is not None

    def get_display_name(self, user_id: int) -> str | None:
        """Display name of a user, or None if unknown."""
        user = self.db.query(User).filter(User.id == user_id).first()
        return user.display_name if user else None


def get_directory_service(db: Session) -> DirectoryService:
    """Get a Directory service instance."""
    return DirectoryService(db)
