"""Reference data schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class CategorySchema(Schema):
    id = fields.Integer(required=True)
    key = fields.String(required=True)


class CollectionCenterSchema(Schema):
    """A collection centre with its coordinates."""

    id = fields.Integer(required=True)
    key = fields.String(required=True)
    latitude = fields.Float(required=True)
    longitude = fields.Float(required=True)
    observation = fields.String(allow_none=True)
