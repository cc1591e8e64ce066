"""Donation endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from donamatch.api.deps import (
    current_user_id,
    json_response,
    parse_pagination,
    require_auth,
    require_role,
    timing,
)
from donamatch.models.role_profile import RoleKind
from donamatch.schemas import (
    DonationCreateSchema,
    DonationFilterSchema,
    DonationSchema,
    MetaSchema,
)
from donamatch.services.donations.dto import DonationCreateIn, DonationListIn
from donamatch.services.donations.service import DonationService

bp = Blueprint("donations", __name__, url_prefix="/donations")

donation_schema = DonationSchema()
donation_list_schema = DonationSchema(many=True)
donation_create_schema = DonationCreateSchema()
donation_filter_schema = DonationFilterSchema()
meta_schema = MetaSchema()


@bp.get("")
@require_auth
@timing
def list_donations():
    """Return paginated donations that are still available."""

    filters = donation_filter_schema.load(request.args)
    pagination = parse_pagination()
    result = DonationService().list_donations(
        DonationListIn(page=pagination.page, limit=pagination.limit, **filters)
    )
    return json_response(
        {"data": donation_list_schema.dump(result.items), "meta": meta_schema.dump(result.meta)}
    )


@bp.get("/<int:donation_id>")
@require_auth
@timing
def get_donation(donation_id: int):
    """Return a single donation."""

    donation = DonationService().get_donation(donation_id)
    return json_response({"data": donation_schema.dump(donation)})


@bp.post("")
@require_role(RoleKind.DONOR)
@timing
def create_donation():
    """Publish a donation for the authenticated donor."""

    payload = donation_create_schema.load(request.get_json(silent=True) or {})
    donation = DonationService().create_donation(
        DonationCreateIn(user_id=current_user_id(), **payload)
    )
    return json_response({"data": donation_schema.dump(donation)}, status=201)
