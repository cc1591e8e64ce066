"""Reference data endpoints used to build donation forms."""

from __future__ import annotations

from flask import Blueprint

from donamatch.api.deps import json_response, timing
from donamatch.schemas import CategorySchema, CollectionCenterSchema
from donamatch.services.catalog.service import CatalogService

bp = Blueprint("catalog", __name__, url_prefix="/catalog")

category_list_schema = CategorySchema(many=True)
center_list_schema = CollectionCenterSchema(many=True)


@bp.get("/categories")
@timing
def list_categories():
    return json_response({"data": category_list_schema.dump(CatalogService().list_categories())})


@bp.get("/collection-centers")
@timing
def list_collection_centers():
    """Return every collection centre with its coordinates."""

    return json_response(
        {"data": center_list_schema.dump(CatalogService().list_collection_centers())}
    )
