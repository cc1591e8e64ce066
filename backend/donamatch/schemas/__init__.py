"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    ProfileSchema,
    RefreshResponseSchema,
    RefreshTokenSchema,
    SessionSchema,
    SignInSchema,
    SignUpSchema,
    UserSchema,
)
from .catalog import CategorySchema, CollectionCenterSchema
from .common import MetaSchema, PaginationQuerySchema
from .donation import DonationCreateSchema, DonationFilterSchema, DonationSchema

__all__ = [
    "SignInSchema",
    "SignUpSchema",
    "RefreshTokenSchema",
    "UserSchema",
    "ProfileSchema",
    "SessionSchema",
    "RefreshResponseSchema",
    "CategorySchema",
    "CollectionCenterSchema",
    "PaginationQuerySchema",
    "MetaSchema",
    "DonationFilterSchema",
    "DonationCreateSchema",
    "DonationSchema",
]
