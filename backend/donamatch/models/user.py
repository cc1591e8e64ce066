"""User model: the identity shared by donor and beneficiary profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, String, UniqueConstraint, false
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from donamatch.core.extensions import db

from .base import PKMixin, ReprMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from .role_profile import Beneficiary, Donor


def normalize_email(value: str) -> str:
    """Return the canonical (trimmed, lowercased) form of an e-mail address."""
    return value.strip().lower()


class User(PKMixin, ReprMixin, TimestampMixin, SoftDeleteMixin, db.Model):
    """
    Authentication identity.

    A user owns at most one :class:`~donamatch.models.role_profile.Donor` and
    at most one :class:`~donamatch.models.role_profile.Beneficiary` profile.

    Fields
    ------
    name : str
        Given name.
    last_name_1 : str
        First surname.
    last_name_2 : str | None
        Optional second surname.
    email : str
        Login email. Stored normalized (lowercase, trimmed) and unique.
    password_hash : str | None
        Salted password hash; ``None`` for profiles created without a
        password. Never serialized.
    verified : bool
        Whether the e-mail address has been confirmed.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name_1: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name_2: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    donor: Mapped[Donor | None] = relationship(
        "Donor", back_populates="user", uselist=False, passive_deletes=True
    )
    beneficiary: Mapped[Beneficiary | None] = relationship(
        "Beneficiary", back_populates="user", uselist=False, passive_deletes=True
    )

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and sanity-check the e-mail address.

        :param key: Field name (``email``).
        :type key: str
        :param value: Email to normalize.
        :type value: str
        :returns: Normalized email (lowercased/trimmed).
        :rtype: str
        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = normalize_email(value)
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("name", "last_name_1")
    def _require_text(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{key} is required.")
        return value.strip()
