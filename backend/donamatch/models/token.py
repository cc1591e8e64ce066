"""Persisted refresh tokens and their reference token types."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Index, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from donamatch.core.extensions import db

from .base import KeyedLookupMixin, PKMixin, ReprMixin, SoftDeleteMixin, TimestampMixin


class TokenTypeKey(str, Enum):
    """Seeded keys of the ``token_types`` reference table."""

    REFRESH = "refresh"
    RECOVER = "recover"
    VERIFY = "verify"


class TokenType(PKMixin, ReprMixin, TimestampMixin, KeyedLookupMixin, db.Model):
    """Reference row naming what a stored token is used for. Immutable after seeding."""

    __tablename__ = "token_types"


class Token(PKMixin, ReprMixin, TimestampMixin, SoftDeleteMixin, db.Model):
    """
    A server-side record of an issued token.

    For refresh tokens a row with ``deleted_at IS NULL`` is the single source
    of truth for "still valid": revocation stamps ``deleted_at`` and the row can
    never pass a liveness lookup again.

    Fields
    ------
    token : str
        The raw encoded token string (unique).
    user_id : int
        Owner of the token.
    token_type_id : int
        Reference to :class:`TokenType`.
    expires_at : datetime | None
        Expected expiry, used only to purge stale rows.
    """

    __tablename__ = "tokens"

    token: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    token_type_id: Mapped[int] = mapped_column(ForeignKey("token_types.id"), nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("token", name="uq_tokens_token"),
        Index("ix_tokens_user_id", "user_id"),
    )

    token_type: Mapped[TokenType] = relationship("TokenType", lazy="joined")
