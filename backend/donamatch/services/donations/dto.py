# comments in English; strict reST docstrings
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from donamatch.services._shared.dto import PageMeta
from donamatch.services.catalog.dto import CategoryOut, CollectionCenterOut

# ------------------------------ Input DTOs ------------------------------- #


@dataclass(frozen=True, slots=True)
class DonationListIn:
    """
    Listing filters for available donations.

    :param page: 1-based page number.
    :type page: int
    :param limit: Page size.
    :type limit: int
    :param name: Case-insensitive substring of the donation name.
    :type name: str | None
    :param category_id: Restrict to one category.
    :type category_id: int | None
    :param collection_center_id: Restrict to one collection centre.
    :type collection_center_id: int | None
    """

    page: int = 1
    limit: int = 10
    name: str | None = None
    category_id: int | None = None
    collection_center_id: int | None = None


@dataclass(frozen=True, slots=True)
class DonationCreateIn:
    """
    Input DTO to publish a donation.

    :param user_id: Authenticated user; must own a donor profile.
    :type user_id: int
    :param category_id: Existing category id.
    :type category_id: int
    :param collection_center_id: Existing collection centre id.
    :type collection_center_id: int
    :param name: Short title.
    :type name: str
    :param description: Free-text description.
    :type description: str
    :param image_url: Public URL of the item picture.
    :type image_url: str
    """

    user_id: int
    category_id: int
    collection_center_id: int
    name: str
    description: str
    image_url: str


# ------------------------------ Output DTOs ------------------------------ #


@dataclass(frozen=True, slots=True)
class DonorSummaryOut:
    """Publishing donor: profile id and display name only."""

    id: int
    name: str


@dataclass(frozen=True, slots=True)
class DonationOut:
    """
    Public projection of a donation.

    :param id: Primary key.
    :type id: int
    :param name: Short title.
    :type name: str
    :param description: Free-text description.
    :type description: str
    :param image_url: Picture URL.
    :type image_url: str
    :param status: Status key, e.g. ``"pendiente"``.
    :type status: str
    :param category: Category of the item.
    :type category: CategoryOut
    :param collection_center: Drop-off point.
    :type collection_center: CollectionCenterOut
    :param donor: Publishing donor.
    :type donor: DonorSummaryOut
    :param created_at: Publication timestamp.
    :type created_at: datetime | None
    """

    id: int
    name: str
    description: str
    image_url: str
    status: str
    category: CategoryOut
    collection_center: CollectionCenterOut
    donor: DonorSummaryOut
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class DonationListOut:
    """One page of donations and its navigation metadata."""

    items: list[DonationOut] = field(default_factory=list)
    meta: PageMeta | None = None
