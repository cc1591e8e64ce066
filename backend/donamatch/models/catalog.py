"""Reference data used by donations: categories, statuses and collection centres."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import Float, Text
from sqlalchemy.orm import Mapped, mapped_column

from donamatch.core.extensions import db

from .base import KeyedLookupMixin, PKMixin, ReprMixin, TimestampMixin


class DonationStatusKey(str, Enum):
    """Lifecycle of a donation listing."""

    PENDING = "pendiente"
    ACCEPTED = "aceptada"
    DELIVERED = "entregada"
    CANCELLED = "cancelada"


class RequestStatusKey(str, Enum):
    """Lifecycle of a beneficiary request."""

    REQUESTED = "solicitada"
    FULFILLED = "cumplida"
    PENDING = "pendiente"
    CANCELLED = "cancelada"


class CategoryKey(str, Enum):
    """Seeded donation categories."""

    CLOTHES = "ropa"
    ELECTRONICS = "electrónica"
    BOOKS = "libros"
    SPORTS = "deportes"
    TOYS = "juguetes"
    HOME = "hogar"
    FOOD = "alimentos"


class Category(PKMixin, ReprMixin, TimestampMixin, KeyedLookupMixin, db.Model):
    __tablename__ = "categories"


class DonationStatus(PKMixin, ReprMixin, TimestampMixin, KeyedLookupMixin, db.Model):
    __tablename__ = "donation_statuses"


class RequestStatus(PKMixin, ReprMixin, TimestampMixin, KeyedLookupMixin, db.Model):
    __tablename__ = "request_statuses"


class CollectionCenter(PKMixin, ReprMixin, TimestampMixin, KeyedLookupMixin, db.Model):
    """Physical drop-off point where donations are handed over."""

    __tablename__ = "collection_centers"

    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    observation: Mapped[str | None] = mapped_column(Text, nullable=True)
