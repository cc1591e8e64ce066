"""Repositories for role profiles (donors and beneficiaries).

Both profile kinds share the same shape, so a single generic repository is
parameterised by the mapped class and specialised only by ``model``.
"""

from __future__ import annotations

from typing import Generic, TypeVar, cast

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from donamatch.models.role_profile import Beneficiary, Donor
from donamatch.models.user import User, normalize_email
from donamatch.repositories.base import BaseRepository

P = TypeVar("P", Donor, Beneficiary)


class RoleProfileRepository(BaseRepository[P], Generic[P]):
    """Lookup helpers shared by every role profile table."""

    def _default_eagerload(self, stmt):
        return stmt.options(joinedload(self.model.user))

    def _sortable_fields(self):
        return {"id": self.model.id, "created_at": self.model.created_at}

    def _soft_delete(self, instance: P) -> bool:
        instance.soft_delete()
        return True

    def get_by_email(self, email: str) -> P | None:
        """Return the live profile whose live user owns ``email``.

        :param email: Address to normalise and search.
        :type email: str
        :returns: Profile with its ``user`` loaded, or ``None``.
        :rtype: P | None
        """
        stmt = (
            select(self.model)
            .join(User, self.model.user_id == User.id)
            .where(
                User.email == normalize_email(email),
                User.deleted_at.is_(None),
                self.model.deleted_at.is_(None),
            )
        )
        stmt = self._default_eagerload(stmt)
        return cast(P | None, self.session.execute(stmt).unique().scalars().first())

    def get_by_user_id(self, user_id: int) -> P | None:
        """Return the live profile linked to ``user_id``."""
        stmt = select(self.model).where(
            self.model.user_id == user_id,
            self.model.deleted_at.is_(None),
        )
        stmt = self._default_eagerload(stmt)
        return cast(P | None, self.session.execute(stmt).unique().scalars().first())

    def add_for_user(self, user: User) -> P:
        """Create and flush a profile owned by ``user``."""
        profile = self.model(user=user)
        return self.add(profile)


class DonorRepository(RoleProfileRepository[Donor]):
    model = Donor


class BeneficiaryRepository(RoleProfileRepository[Beneficiary]):
    model = Beneficiary
