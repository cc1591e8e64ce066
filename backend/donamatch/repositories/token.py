"""Repositories for persisted tokens and their reference types."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import delete, or_, select, update

from donamatch.models.token import Token, TokenType
from donamatch.repositories.base import BaseRepository


class TokenRepository(BaseRepository[Token]):
    """Persistence-only access to the ``tokens`` table.

    A token is *live* while ``deleted_at IS NULL``. Revocation is a
    conditional ``UPDATE`` so that two concurrent revocations of the same
    value cannot both succeed.
    """

    model = Token

    def _soft_delete(self, instance: Token) -> bool:
        instance.soft_delete()
        return True

    def get_live_by_value(self, value: str) -> Token | None:
        """Return the live row storing ``value`` or ``None``.

        :param value: Raw encoded token string.
        :type value: str
        :rtype: Token | None
        """
        stmt = select(Token).where(Token.token == value, Token.deleted_at.is_(None))
        return cast(Token | None, self.session.execute(stmt).unique().scalars().first())

    def revoke_by_value(
        self,
        value: str,
        *,
        revoked_at: datetime,
        user_id: int | None = None,
    ) -> int:
        """Soft-delete the live row storing ``value``.

        :param value: Raw encoded token string.
        :type value: str
        :param revoked_at: Instant written to ``deleted_at``.
        :type revoked_at: datetime
        :param user_id: When given, only a row owned by this user is revoked.
        :type user_id: int | None
        :returns: Number of rows revoked (``0`` or ``1``).
        :rtype: int
        """
        stmt = (
            update(Token)
            .where(Token.token == value, Token.deleted_at.is_(None))
            .values(deleted_at=revoked_at)
            .execution_options(synchronize_session=False)
        )
        if user_id is not None:
            stmt = stmt.where(Token.user_id == user_id)
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)

    def purge_stale(self, now: datetime) -> int:
        """Hard-delete revoked rows and rows whose expiry has passed.

        :returns: Number of deleted rows.
        :rtype: int
        """
        stmt = (
            delete(Token)
            .where(
                or_(
                    Token.deleted_at.is_not(None),
                    Token.expires_at < now,
                )
            )
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)


class TokenTypeRepository(BaseRepository[TokenType]):
    """Read access to the seeded ``token_types`` table."""

    model = TokenType

    def get_id_by_key(self, key: str) -> int | None:
        """Return the id of the token type named ``key``, if seeded."""
        stmt = select(TokenType.id).where(TokenType.key == key)
        return cast(int | None, self.session.execute(stmt).scalar_one_or_none())
