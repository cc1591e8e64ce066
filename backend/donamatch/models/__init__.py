from donamatch.models.catalog import (
    Category,
    CategoryKey,
    CollectionCenter,
    DonationStatus,
    DonationStatusKey,
    RequestStatus,
    RequestStatusKey,
)
from donamatch.models.donation import Donation
from donamatch.models.role_profile import ROLE_MODELS, Beneficiary, Donor, RoleKind
from donamatch.models.token import Token, TokenType, TokenTypeKey
from donamatch.models.user import User

__all__ = [
    "Beneficiary",
    "Category",
    "CategoryKey",
    "CollectionCenter",
    "Donation",
    "DonationStatus",
    "DonationStatusKey",
    "Donor",
    "RequestStatus",
    "RequestStatusKey",
    "ROLE_MODELS",
    "RoleKind",
    "Token",
    "TokenType",
    "TokenTypeKey",
    "User",
]
