"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from donamatch.core.errors import Forbidden, Unauthorized
from donamatch.infra.db.token_store import SQLAlchemyTokenStore
from donamatch.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from donamatch.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher
from donamatch.models.role_profile import RoleKind
from donamatch.repositories.base import Pagination
from donamatch.schemas.common import PaginationQuerySchema
from donamatch.services.auth.dto import AuthTokenConfig
from donamatch.services.auth.service import ROLE_CLAIM, AuthService

F = TypeVar("F", bound=Callable[..., Any])


def parse_pagination() -> Pagination:
    """Parse ``page``/``limit`` from ``request.args`` using the configured bounds."""

    schema = PaginationQuerySchema(
        default_limit=int(current_app.config.get("PAGINATION_LIMIT_DEFAULT", 10)),
        max_limit=int(current_app.config.get("PAGINATION_LIMIT_MAX", 100)),
    )
    data = schema.load(request.args)
    return Pagination(page=data["page"], limit=data["limit"])


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# ------------------------------ Authentication -------------------------------


def require_auth(func: F) -> F:
    """Ensure the request carries a valid JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_role(role: RoleKind) -> Callable[[F], F]:
    """Ensure the verified access token was issued for ``role``."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            verify_jwt_in_request(optional=False)
            claims = get_jwt() or {}
            if claims.get(ROLE_CLAIM) != role.value:
                raise Forbidden(f"Requires the {role.value} role")
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def current_user_id() -> int:
    """Return the authenticated user id from the verified access token."""

    identity = get_jwt_identity()
    try:
        return int(identity)
    except (TypeError, ValueError):
        raise Unauthorized("Invalid token subject") from None


# ------------------------------ Service wiring -------------------------------


def get_auth_service() -> AuthService:
    """Build an :class:`AuthService` wired to the current app configuration."""

    cfg = current_app.config
    token_cfg = AuthTokenConfig(
        access_expires=cfg["JWT_ACCESS_TOKEN_EXPIRES"],
        refresh_expires=cfg["JWT_REFRESH_TOKEN_EXPIRES"],
        rotation_threshold=float(cfg.get("REFRESH_ROTATION_THRESHOLD", 0.25)),
    )
    return AuthService(
        token_provider=JWTTokenProvider(
            access_expires=token_cfg.access_expires,
            refresh_expires=token_cfg.refresh_expires,
        ),
        token_store=SQLAlchemyTokenStore(),
        password_hasher=WerkzeugPasswordHasher(method=cfg.get("PASSWORD_HASH_METHOD", "scrypt")),
        token_cfg=token_cfg,
    )


# ------------------------------ Refresh cookie -------------------------------


def _refresh_cookie_path() -> str:
    return f"{current_app.config.get('API_BASE_PREFIX', '/api').rstrip('/')}/v1/auth"


def extract_refresh_token(body_value: str | None) -> str:
    """Return the refresh token from the JSON body, falling back to the cookie."""

    token = body_value or request.cookies.get(
        current_app.config.get("REFRESH_COOKIE_NAME", "refresh_token")
    )
    if not token:
        raise Unauthorized("Missing refresh token")
    return token


def set_refresh_cookie(response: Response, token: str) -> None:
    """Attach ``token`` as an http-only cookie scoped to the auth endpoints."""

    cfg = current_app.config
    response.set_cookie(
        cfg.get("REFRESH_COOKIE_NAME", "refresh_token"),
        token,
        max_age=int(cfg["JWT_REFRESH_TOKEN_EXPIRES"].total_seconds()),
        secure=bool(cfg.get("REFRESH_COOKIE_SECURE", True)),
        httponly=True,
        samesite="Strict",
        path=_refresh_cookie_path(),
    )


def clear_refresh_cookie(response: Response) -> None:
    response.delete_cookie(
        current_app.config.get("REFRESH_COOKIE_NAME", "refresh_token"),
        path=_refresh_cookie_path(),
        httponly=True,
        samesite="Strict",
    )
