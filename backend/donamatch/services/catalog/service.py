# comments in English; strict reST docstrings
from __future__ import annotations

from donamatch.models.catalog import Category, CollectionCenter
from donamatch.services._shared.base import BaseService
from donamatch.services.catalog.dto import CategoryOut, CollectionCenterOut


class CatalogService(BaseService):
    """
    Read-only access to the seeded reference data clients need to build
    donation forms.
    """

    def list_categories(self) -> list[CategoryOut]:
        """
        Return every donation category ordered by key.

        :rtype: list[:class:`CategoryOut`]
        """
        with self.ro_uow() as uow:
            return [self.to_category_out(row) for row in uow.categories.list_all()]

    def list_collection_centers(self) -> list[CollectionCenterOut]:
        """
        Return every collection centre ordered by key.

        :rtype: list[:class:`CollectionCenterOut`]
        """
        with self.ro_uow() as uow:
            return [self.to_center_out(row) for row in uow.collection_centers.list_all()]

    @staticmethod
    def to_category_out(row: Category) -> CategoryOut:
        return CategoryOut(id=row.id, key=row.key)

    @staticmethod
    def to_center_out(row: CollectionCenter) -> CollectionCenterOut:
        return CollectionCenterOut(
            id=row.id,
            key=row.key,
            latitude=row.latitude,
            longitude=row.longitude,
            observation=row.observation,
        )
