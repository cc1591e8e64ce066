"""Donation Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .catalog import CategorySchema, CollectionCenterSchema


class DonationFilterSchema(Schema):
    """Query-string filters for listing donations."""

    class Meta:
        unknown = EXCLUDE

    name = fields.String(load_default=None, validate=validate.Length(max=255))
    category_id = fields.Integer(load_default=None, validate=validate.Range(min=1))
    collection_center_id = fields.Integer(load_default=None, validate=validate.Range(min=1))


class DonationCreateSchema(Schema):
    """Input payload for publishing a donation."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=255))
    description = fields.String(required=True, validate=validate.Length(min=1))
    image_url = fields.URL(required=True, validate=validate.Length(max=512))
    category_id = fields.Integer(required=True, validate=validate.Range(min=1))
    collection_center_id = fields.Integer(required=True, validate=validate.Range(min=1))


class DonorSummarySchema(Schema):
    id = fields.Integer(required=True)
    name = fields.String(required=True)


class DonationSchema(Schema):
    """Public donation representation."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    description = fields.String(required=True)
    image_url = fields.String(required=True)
    status = fields.String(required=True)
    category = fields.Nested(CategorySchema, required=True)
    collection_center = fields.Nested(CollectionCenterSchema, required=True)
    donor = fields.Nested(DonorSummarySchema, required=True)
    created_at = fields.DateTime(allow_none=True)
