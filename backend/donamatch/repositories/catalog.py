"""Repositories for seeded reference tables (categories, statuses, centres)."""

from __future__ import annotations

from typing import Generic, TypeVar, cast

from sqlalchemy import select

from donamatch.models.catalog import Category, CollectionCenter, DonationStatus, RequestStatus
from donamatch.repositories.base import BaseRepository

K = TypeVar("K", Category, CollectionCenter, DonationStatus, RequestStatus)


class KeyedLookupRepository(BaseRepository[K], Generic[K]):
    """Lookups by the symbolic ``key`` column every reference table carries."""

    def _sortable_fields(self):
        return {"id": self.model.id, "key": self.model.key}

    def _filterable_fields(self):
        return {"key": self.model.key}

    def get_by_key(self, key: str) -> K | None:
        stmt = select(self.model).where(self.model.key == key)
        return cast(K | None, self.session.execute(stmt).scalars().first())

    def get_id_by_key(self, key: str) -> int | None:
        stmt = select(self.model.id).where(self.model.key == key)
        return cast(int | None, self.session.execute(stmt).scalar_one_or_none())

    def list_all(self) -> list[K]:
        """Return every row ordered by ``key``."""
        return self.list(sort=["key"])


class CategoryRepository(KeyedLookupRepository[Category]):
    model = Category


class DonationStatusRepository(KeyedLookupRepository[DonationStatus]):
    model = DonationStatus


class RequestStatusRepository(KeyedLookupRepository[RequestStatus]):
    model = RequestStatus


class CollectionCenterRepository(KeyedLookupRepository[CollectionCenter]):
    model = CollectionCenter
