"""Donation listings published by donors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from donamatch.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .catalog import Category, CollectionCenter, DonationStatus
    from .role_profile import Donor


class Donation(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    An item offered by a donor at a collection centre.

    Fields
    ------
    donor_id : int
        Publishing donor profile.
    category_id : int
        Item category.
    collection_center_id : int
        Where the item can be handed over.
    donation_status_id : int
        Current lifecycle status; new listings start as ``pendiente``.
    name : str
        Short title.
    description : str
        Free-text description.
    image_url : str
        Public URL of the item picture.
    """

    __tablename__ = "donations"

    donor_id: Mapped[int] = mapped_column(
        ForeignKey("donors.id", ondelete="CASCADE"), nullable=False
    )
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), nullable=False)
    collection_center_id: Mapped[int] = mapped_column(
        ForeignKey("collection_centers.id"), nullable=False
    )
    donation_status_id: Mapped[int] = mapped_column(
        ForeignKey("donation_statuses.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(String(512), nullable=False)

    __table_args__ = (
        Index("ix_donations_donation_status_id", "donation_status_id"),
        Index("ix_donations_created_at", "created_at"),
    )

    donor: Mapped[Donor] = relationship("Donor", back_populates="donations")
    category: Mapped[Category] = relationship("Category")
    collection_center: Mapped[CollectionCenter] = relationship("CollectionCenter")
    status: Mapped[DonationStatus] = relationship("DonationStatus")

    @validates("name")
    def _strip_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Donation name is required.")
        return value.strip()
