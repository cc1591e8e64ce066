"""Session-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from donamatch.models.role_profile import RoleKind


class SignInSchema(Schema):
    """Input payload for signing in as a donor or beneficiary."""

    email = fields.Email(required=True, validate=validate.Length(max=100))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class SignUpSchema(Schema):
    """Input payload for creating a user together with a role profile."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=50))
    last_name_1 = fields.String(required=True, validate=validate.Length(min=1, max=50))
    last_name_2 = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=50))
    email = fields.Email(required=True, validate=validate.Length(max=100))
    password = fields.String(load_default=None, allow_none=True, validate=validate.Length(min=8, max=128))


class RefreshTokenSchema(Schema):
    """Optional body carrying a refresh token; the cookie is used otherwise."""

    refresh_token = fields.String(load_default=None, allow_none=True)


class UserSchema(Schema):
    """Public user representation; the password hash is never exposed."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    last_name_1 = fields.String(required=True)
    last_name_2 = fields.String(allow_none=True)
    email = fields.Email(required=True)
    verified = fields.Boolean(required=True)


class ProfileSchema(Schema):
    """Role profile with its embedded user."""

    id = fields.Integer(required=True)
    role = fields.Enum(RoleKind, by_value=True, required=True)
    user = fields.Nested(UserSchema, required=True)


class SessionSchema(Schema):
    """Response payload of sign-in and sign-up."""

    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)
    token_type = fields.Constant("bearer")
    profile = fields.Nested(ProfileSchema, required=True)


class RefreshResponseSchema(Schema):
    """Response payload of a refresh; ``refresh_token`` is set only on rotation."""

    access_token = fields.String(required=True)
    refresh_token = fields.String(allow_none=True)
    token_type = fields.Constant("bearer")
    user_id = fields.Integer(required=True)
