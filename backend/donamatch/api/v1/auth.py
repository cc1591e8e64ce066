"""Session endpoints: sign-in, sign-up, sign-out and refresh."""

from __future__ import annotations

from flask import Blueprint, Response, request

from donamatch.api.deps import (
    clear_refresh_cookie,
    extract_refresh_token,
    get_auth_service,
    json_response,
    set_refresh_cookie,
    timing,
)
from donamatch.core.errors import NotFound
from donamatch.models.role_profile import RoleKind
from donamatch.schemas import (
    RefreshResponseSchema,
    RefreshTokenSchema,
    SessionSchema,
    SignInSchema,
    SignUpSchema,
)
from donamatch.services.auth.dto import RefreshIn, SignInIn, SignOutIn, SignUpIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

sign_in_schema = SignInSchema()
sign_up_schema = SignUpSchema()
refresh_token_schema = RefreshTokenSchema()
session_schema = SessionSchema()
refresh_response_schema = RefreshResponseSchema()


def _parse_role(raw: str) -> RoleKind:
    try:
        return RoleKind(raw)
    except ValueError:
        raise NotFound(f"Unknown role '{raw}'") from None


@bp.post("/sign-in/<role>")
@timing
def sign_in(role: str):
    """Authenticate as ``role`` and open a session."""

    kind = _parse_role(role)
    data = sign_in_schema.load(request.get_json(silent=True) or {})
    session = get_auth_service().sign_in(
        SignInIn(role=kind, email=data["email"], password=data["password"])
    )
    response = json_response({"data": session_schema.dump(session)})
    set_refresh_cookie(response, session.refresh_token)
    return response


@bp.post("/sign-up/<role>")
@timing
def sign_up(role: str):
    """Register a user with a ``role`` profile and open a session."""

    kind = _parse_role(role)
    data = sign_up_schema.load(request.get_json(silent=True) or {})
    session = get_auth_service().sign_up(SignUpIn(role=kind, **data))
    response = json_response({"data": session_schema.dump(session)}, status=201)
    set_refresh_cookie(response, session.refresh_token)
    return response


@bp.post("/sign-out")
@timing
def sign_out():
    """Revoke the presented refresh token and clear the cookie."""

    data = refresh_token_schema.load(request.get_json(silent=True) or {})
    token = extract_refresh_token(data["refresh_token"])
    get_auth_service().sign_out(SignOutIn(refresh_token=token))
    response = Response(status=204)
    clear_refresh_cookie(response)
    return response


@bp.post("/refresh")
@timing
def refresh():
    """Exchange a refresh token for a new access token, rotating it when due."""

    data = refresh_token_schema.load(request.get_json(silent=True) or {})
    token = extract_refresh_token(data["refresh_token"])
    result = get_auth_service().refresh(RefreshIn(refresh_token=token))
    response = json_response({"data": refresh_response_schema.dump(result)})
    if result.refresh_token:
        set_refresh_cookie(response, result.refresh_token)
    return response
