"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`donamatch.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``donamatch.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Shared DTOs (from ``donamatch.services._shared.dto``)
    * :class:`PageMeta`

- Session service (from ``donamatch.services.auth``)
    * :class:`AuthService`, :class:`RefreshRotationPolicy`
    * DTOs: :class:`SignInIn`, :class:`SignUpIn`, :class:`SignOutIn`,
      :class:`RefreshIn`, :class:`SessionOut`, :class:`RefreshOut`,
      :class:`ProfileOut`, :class:`UserOut`, :class:`AuthTokenConfig`

- Donation service (from ``donamatch.services.donations``)
    * :class:`DonationService`
    * DTOs: :class:`DonationListIn`, :class:`DonationCreateIn`,
      :class:`DonationOut`, :class:`DonationListOut`

- Catalogue service (from ``donamatch.services.catalog``)
    * :class:`CatalogService`
    * DTOs: :class:`CategoryOut`, :class:`CollectionCenterOut`
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService, ServiceContext

# Shared DTOs
from ._shared.dto import PageMeta

# Session service + DTOs
from .auth.dto import (
    AuthTokenConfig,
    ProfileOut,
    RefreshIn,
    RefreshOut,
    SessionOut,
    SignInIn,
    SignOutIn,
    SignUpIn,
    UserOut,
)
from .auth.rotation import RefreshRotationPolicy
from .auth.service import AuthService

# Catalogue service + DTOs
from .catalog.dto import CategoryOut, CollectionCenterOut
from .catalog.service import CatalogService

# Donation service + DTOs
from .donations.dto import DonationCreateIn, DonationListIn, DonationListOut, DonationOut
from .donations.service import DonationService

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    "PageMeta",
    # Sessions
    "AuthService",
    "AuthTokenConfig",
    "RefreshRotationPolicy",
    "SignInIn",
    "SignUpIn",
    "SignOutIn",
    "RefreshIn",
    "SessionOut",
    "RefreshOut",
    "ProfileOut",
    "UserOut",
    # Catalogue
    "CatalogService",
    "CategoryOut",
    "CollectionCenterOut",
    # Donations
    "DonationService",
    "DonationListIn",
    "DonationCreateIn",
    "DonationOut",
    "DonationListOut",
]
