# donamatch/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from donamatch.services._shared.ports import TokenClaims, TokenKind

log = logging.getLogger(__name__)

# Claims managed by the library; anything else in the payload is "extra".
_REGISTERED_CLAIMS = frozenset({"sub", "iat", "nbf", "exp", "jti", "type", "fresh", "csrf"})


@dataclass(slots=True)
class JWTTokenProvider:
    """
    Adapter for Flask-JWT-Extended.

    Tokens are HS256-signed with ``JWT_SECRET_KEY``. The library stamps every
    token with a random ``jti``, so two tokens issued within the same second
    still differ.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    access_expires: timedelta
    refresh_expires: timedelta

    def issue(
        self,
        subject: int | str,
        kind: TokenKind,
        claims: dict[str, Any] | None = None,
    ) -> str:
        extra = dict(claims or {})
        if kind is TokenKind.ACCESS:
            return cast(
                str,
                create_access_token(
                    identity=str(subject),
                    additional_claims=extra,
                    expires_delta=self.access_expires,
                ),
            )
        return cast(
            str,
            create_refresh_token(
                identity=str(subject),
                additional_claims=extra,
                expires_delta=self.refresh_expires,
            ),
        )

    def verify(self, token: str, kind: TokenKind) -> TokenClaims | None:
        try:
            payload = cast(dict[str, Any], decode_token(token))
        except (PyJWTError, JWTExtendedException) as exc:
            log.info("token rejected", extra={"reason": type(exc).__name__})
            return None

        if payload.get("type") != kind.value:
            log.info("token rejected", extra={"reason": "wrong_kind"})
            return None

        subject = payload.get("sub")
        jti = payload.get("jti")
        iat = payload.get("iat")
        if not isinstance(subject, str | int) or not jti or iat is None:
            log.info("token rejected", extra={"reason": "malformed_payload"})
            return None

        exp = payload.get("exp")
        return TokenClaims(
            subject=str(subject),
            kind=kind,
            issued_at=datetime.fromtimestamp(int(iat), tz=UTC),
            expires_at=datetime.fromtimestamp(int(exp), tz=UTC) if exp is not None else None,
            jti=str(jti),
            extra={k: v for k, v in payload.items() if k not in _REGISTERED_CLAIMS},
        )
