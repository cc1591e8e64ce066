"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from donamatch.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    apply_sorting,
    paginate_select,
)
from donamatch.repositories.catalog import (
    CategoryRepository,
    CollectionCenterRepository,
    DonationStatusRepository,
    KeyedLookupRepository,
    RequestStatusRepository,
)
from donamatch.repositories.donation import DonationRepository
from donamatch.repositories.role_profile import (
    BeneficiaryRepository,
    DonorRepository,
    RoleProfileRepository,
)
from donamatch.repositories.token import TokenRepository, TokenTypeRepository
from donamatch.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "Pagination",
    "apply_sorting",
    "paginate_select",
    # Domain
    "BeneficiaryRepository",
    "CategoryRepository",
    "CollectionCenterRepository",
    "DonationRepository",
    "DonationStatusRepository",
    "DonorRepository",
    "KeyedLookupRepository",
    "RequestStatusRepository",
    "RoleProfileRepository",
    "TokenRepository",
    "TokenTypeRepository",
    "UserRepository",
]
