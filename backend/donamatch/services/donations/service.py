# comments in English; strict reST docstrings
from __future__ import annotations

import logging

from donamatch.models.catalog import DonationStatusKey
from donamatch.models.donation import Donation
from donamatch.services._shared.base import BaseService
from donamatch.services._shared.dto import PageMeta
from donamatch.services._shared.errors import (
    BadRequestError,
    ForbiddenError,
    InternalServiceError,
    NotFoundError,
)
from donamatch.services.catalog.service import CatalogService
from donamatch.services.donations.dto import (
    DonationCreateIn,
    DonationListIn,
    DonationListOut,
    DonationOut,
    DonorSummaryOut,
)

log = logging.getLogger(__name__)


class DonationService(BaseService):
    """
    Application service for donation listings.

    Responsibilities
    ----------------
    - List available (``pendiente``) donations with filters and pagination.
    - Fetch a single donation.
    - Let donors publish new donations.

    Notes
    -----
    Role checks on the caller's token happen at the API layer; this service
    additionally requires that the caller owns a live donor profile.
    """

    # ------------------------------------------------------------------ #
    # Read
    # ------------------------------------------------------------------ #

    def list_donations(self, dto: DonationListIn) -> DonationListOut:
        """
        List donations that are still available, newest first.

        :param dto: Filters and pagination.
        :type dto: :class:`DonationListIn`
        :returns: Page of donations.
        :rtype: :class:`DonationListOut`
        :raises InternalServiceError: If the ``pendiente`` status is not seeded.
        """
        pagination = self.ensure_pagination(page=dto.page, limit=dto.limit)
        with self.ro_uow() as uow:
            status_id = uow.donation_statuses.get_id_by_key(DonationStatusKey.PENDING.value)
            if status_id is None:
                raise InternalServiceError("Donation status 'pendiente' is not seeded")
            page = uow.donations.search(
                pagination,
                donation_status_id=status_id,
                name=dto.name,
                category_id=dto.category_id,
                collection_center_id=dto.collection_center_id,
            )
            items = [self._to_out(row) for row in page.items]
        meta = PageMeta.build(page=page.page, limit=page.limit, total=page.total)
        return DonationListOut(items=items, meta=meta)

    def get_donation(self, donation_id: int) -> DonationOut:
        """
        Retrieve one donation by id.

        :raises NotFoundError: When the donation does not exist.
        """
        with self.ro_uow() as uow:
            row = uow.donations.get(donation_id)
            if row is None:
                raise NotFoundError("Donation", donation_id)
            return self._to_out(row)

    # ------------------------------------------------------------------ #
    # Create
    # ------------------------------------------------------------------ #

    def create_donation(self, dto: DonationCreateIn) -> DonationOut:
        """
        Publish a donation on behalf of the caller's donor profile.

        :param dto: Creation DTO.
        :type dto: :class:`DonationCreateIn`
        :returns: The persisted donation.
        :rtype: :class:`DonationOut`
        :raises ForbiddenError: If the caller has no donor profile.
        :raises NotFoundError: If the category or collection centre is unknown.
        :raises InternalServiceError: If the ``pendiente`` status is not seeded.
        """
        with self.rw_uow() as uow:
            donor = uow.donors.get_by_user_id(dto.user_id)
            if donor is None:
                log.info("donation rejected", extra={"reason": "not_donor", "user_id": dto.user_id})
                raise ForbiddenError("Only donors can publish donations")
            category = uow.categories.get(dto.category_id)
            if category is None:
                raise NotFoundError("Category", dto.category_id)
            center = uow.collection_centers.get(dto.collection_center_id)
            if center is None:
                raise NotFoundError("CollectionCenter", dto.collection_center_id)
            status = uow.donation_statuses.get_by_key(DonationStatusKey.PENDING.value)
            if status is None:
                raise InternalServiceError("Donation status 'pendiente' is not seeded")

            try:
                row = Donation(
                    donor=donor,
                    category=category,
                    collection_center=center,
                    status=status,
                    name=dto.name,
                    description=dto.description,
                    image_url=dto.image_url,
                )
            except ValueError as exc:
                raise BadRequestError(str(exc)) from None
            uow.donations.add(row)
            out = self._to_out(row)

        log.info("donation created", extra={"user_id": dto.user_id, "entity": "Donation"})
        return out

    # ------------------------------------------------------------------ #
    # Mapping
    # ------------------------------------------------------------------ #

    @staticmethod
    def _to_out(row: Donation) -> DonationOut:
        return DonationOut(
            id=row.id,
            name=row.name,
            description=row.description,
            image_url=row.image_url,
            status=row.status.key,
            category=CatalogService.to_category_out(row.category),
            collection_center=CatalogService.to_center_out(row.collection_center),
            donor=DonorSummaryOut(id=row.donor.id, name=row.donor.user.name),
            created_at=row.created_at,
        )
