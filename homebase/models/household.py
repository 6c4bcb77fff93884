"""
Directory models: users, households and household membership.

These tables are owned by the household directory. The scheduling
services only read them (membership checks and display names).
"""

import enum

from sqlalchemy import (
    Enum,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship as orm_relationship

from homebase.models.base import Base, epoch_now


class MemberRole(str, enum.Enum):
    """Role of a user inside a household."""
    parent = "parent"
    guardian = "guardian"
    teen = "teen"
    kid = "kid"
    caregiver = "caregiver"


class User(Base):
    """A person who can belong to one or more households."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    display_name: Mapped[str | None] = mapped_column(String(255))
    created_at: Mapped[int] = mapped_column(Integer, default=epoch_now)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, display_name={self.display_name!r})>"


class Household(Base):
    """A shared household: the tenant every event and block belongs to."""

    __tablename__ = "households"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )
    created_at: Mapped[int] = mapped_column(Integer, default=epoch_now)

    members: Mapped[list["HouseholdMember"]] = orm_relationship(
        "HouseholdMember",
        back_populates="household",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Household(id={self.id}, name={self.name!r})>"


class HouseholdMember(Base):
    """Membership of a user in a household, with their role."""

    __tablename__ = "household_members"
    __table_args__ = (
        UniqueConstraint("household_id", "user_id", name="uq_household_members_household_user"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    household_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    role: Mapped[MemberRole] = mapped_column(
        Enum(MemberRole, name="member_role", native_enum=False),
        nullable=False,
    )
    joined_at: Mapped[int] = mapped_column(Integer, default=epoch_now)

    household: Mapped["Household"] = orm_relationship("Household", back_populates="members")
    user: Mapped["User"] = orm_relationship("User")

    def __repr__(self) -> str:
        return f"<HouseholdMember(household_id={self.household_id}, user_id={self.user_id}, role={self.role})>"
