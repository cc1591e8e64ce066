"""Role profiles: donor and beneficiary records wrapping exactly one user."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship

from donamatch.core.extensions import db

from .base import PKMixin, ReprMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from .donation import Donation
    from .user import User


class RoleKind(str, Enum):
    """The two kinds of role profile a user can hold."""

    DONOR = "donor"
    BENEFICIARY = "beneficiary"


class RoleProfileMixin(PKMixin, ReprMixin, TimestampMixin, SoftDeleteMixin):
    """
    Shared shape of every role profile.

    Each concrete profile lives in its own table and references its user
    through a unique ``user_id``, giving a 1:1 relation whose key is
    independent from the user's id.
    """

    role: ClassVar[RoleKind]

    @declared_attr
    def user_id(cls) -> Mapped[int]:
        return mapped_column(
            ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
        )

    @declared_attr
    def user(cls) -> Mapped[User]:
        return relationship("User", back_populates=cls.role.value, lazy="joined")


class Donor(RoleProfileMixin, db.Model):
    """Profile allowed to publish donations."""

    __tablename__ = "donors"
    role = RoleKind.DONOR

    donations: Mapped[list[Donation]] = relationship(
        "Donation", back_populates="donor", passive_deletes=True
    )


class Beneficiary(RoleProfileMixin, db.Model):
    """Profile that browses and requests donations."""

    __tablename__ = "beneficiaries"
    role = RoleKind.BENEFICIARY


ROLE_MODELS: dict[RoleKind, type[Donor] | type[Beneficiary]] = {
    RoleKind.DONOR: Donor,
    RoleKind.BENEFICIARY: Beneficiary,
}
