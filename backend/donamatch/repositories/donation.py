"""Donation repository: filtered, paginated listings for the public catalogue."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from donamatch.models.donation import Donation
from donamatch.models.role_profile import Donor
from donamatch.repositories.base import BaseRepository, Page, Pagination


class DonationRepository(BaseRepository[Donation]):
    """Persistence-only repository for :class:`Donation`."""

    model = Donation

    def _default_eagerload(self, stmt):
        return stmt.options(
            joinedload(Donation.category),
            joinedload(Donation.collection_center),
            joinedload(Donation.status),
            joinedload(Donation.donor).joinedload(Donor.user),
        )

    def _sortable_fields(self):
        return {
            "id": Donation.id,
            "name": Donation.name,
            "created_at": Donation.created_at,
        }

    def _filterable_fields(self):
        return {
            "donor_id": Donation.donor_id,
            "category_id": Donation.category_id,
            "collection_center_id": Donation.collection_center_id,
            "donation_status_id": Donation.donation_status_id,
        }

    def search(
        self,
        pagination: Pagination,
        *,
        donation_status_id: int | None = None,
        name: str | None = None,
        category_id: int | None = None,
        collection_center_id: int | None = None,
        donor_id: int | None = None,
    ) -> Page[Donation]:
        """Return one page of donations matching every given filter.

        :param pagination: Page, limit and sort tokens. Newest first when no
            sort is given.
        :type pagination: Pagination
        :param donation_status_id: Exact status filter.
        :param name: Case-insensitive substring match on the donation name.
            ``%`` and ``_`` are matched literally.
        :param category_id: Exact category filter.
        :param collection_center_id: Exact collection centre filter.
        :param donor_id: Exact publishing donor filter.
        :returns: Page of donations with their lookups eagerly loaded.
        :rtype: Page[Donation]
        """
        filters = {
            "donation_status_id": donation_status_id,
            "category_id": category_id,
            "collection_center_id": collection_center_id,
            "donor_id": donor_id,
        }
        stmt = self._apply_equality_filters(
            select(Donation), {k: v for k, v in filters.items() if v is not None}
        )
        if name and name.strip():
            stmt = stmt.where(Donation.name.icontains(name.strip(), autoescape=True))
        if not pagination.sort:
            pagination = Pagination(page=pagination.page, limit=pagination.limit, sort=["-created_at"])
        return self.paginate_stmt(stmt, pagination)
