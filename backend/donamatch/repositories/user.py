"""User repository: e-mail lookups used by credential checks and sign-up."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from donamatch.models.user import User, normalize_email
from donamatch.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never issues tokens or checks passwords; it only reads and writes rows.
    """

    model = User

    def _sortable_fields(self):
        return {
            "id": User.id,
            "email": User.email,
            "created_at": User.created_at,
        }

    def _filterable_fields(self):
        return {"email": User.email, "verified": User.verified}

    def _soft_delete(self, instance: User) -> bool:
        instance.soft_delete()
        return True

    def get_by_email(self, email: str) -> User | None:
        """Fetch a live (not soft-deleted) user by e-mail.

        :param email: Address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(
            User.email == normalize_email(email),
            User.deleted_at.is_(None),
        )
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when any row (deleted or not) holds ``email``.

        Soft-deleted users still occupy the unique index, so sign-up must
        treat them as taken.
        """
        stmt = select(User.id).where(User.email == normalize_email(email))
        return self.session.execute(stmt).first() is not None
