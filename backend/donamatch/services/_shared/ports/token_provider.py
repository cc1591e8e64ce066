from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any, Protocol


class TokenKind(str, Enum):
    """The two kinds of signed session token."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Verified content of a signed token.

    :ivar subject: Identity the token was issued for (user id as text).
    :ivar kind: Whether this is an access or a refresh token.
    :ivar issued_at: Issue instant (UTC).
    :ivar expires_at: Expiry instant (UTC); ``None`` if the payload has no ``exp``.
    :ivar jti: Unique token identifier.
    :ivar extra: Custom claims such as ``role``.
    """

    subject: str
    kind: TokenKind
    issued_at: datetime
    expires_at: datetime | None
    jti: str
    extra: dict[str, Any] = field(default_factory=dict)


class TokenProvider(Protocol):
    """Port for issuing and verifying signed session tokens."""

    def issue(
        self,
        subject: int | str,
        kind: TokenKind,
        claims: dict[str, Any] | None = None,
    ) -> str:
        """Return a signed token of ``kind`` for ``subject`` with the configured lifetime."""
        ...

    def verify(self, token: str, kind: TokenKind) -> TokenClaims | None:
        """
        Return the claims of ``token`` or ``None``.

        ``None`` covers a bad signature, an expired token, a malformed payload
        and a token of the other kind. Implementations never raise.
        """
        ...


class StubTokenProvider:
    """Deterministic, unsigned token provider used in unit tests.

    Tokens are opaque strings mapped to their claims; ``clock`` lets tests
    move time forward to exercise expiry and rotation.
    """

    def __init__(
        self,
        *,
        access_expires: timedelta = timedelta(minutes=15),
        refresh_expires: timedelta = timedelta(days=15),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.access_expires = access_expires
        self.refresh_expires = refresh_expires
        self.clock = clock or (lambda: datetime.now(tz=UTC))
        self._seq = 0
        self._issued: dict[str, TokenClaims] = {}

    def issue(
        self,
        subject: int | str,
        kind: TokenKind,
        claims: dict[str, Any] | None = None,
    ) -> str:
        self._seq += 1
        now = self.clock()
        lifetime = self.access_expires if kind is TokenKind.ACCESS else self.refresh_expires
        jti = f"jti-{self._seq}"
        token = f"{kind.value}.{subject}.{jti}"
        self._issued[token] = TokenClaims(
            subject=str(subject),
            kind=kind,
            issued_at=now,
            expires_at=now + lifetime,
            jti=jti,
            extra=dict(claims or {}),
        )
        return token

    def verify(self, token: str, kind: TokenKind) -> TokenClaims | None:
        claims = self._issued.get(token)
        if claims is None or claims.kind is not kind:
            return None
        if claims.expires_at is not None and claims.expires_at <= self.clock():
            return None
        return claims
