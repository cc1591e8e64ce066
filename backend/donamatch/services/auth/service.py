# donamatch/services/auth/service.py
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy.exc import IntegrityError

from donamatch.models.role_profile import Beneficiary, Donor, RoleKind
from donamatch.models.token import TokenTypeKey
from donamatch.models.user import User
from donamatch.services._shared.base import BaseService
from donamatch.services._shared.errors import (
    BadRequestError,
    ConflictError,
    InternalServiceError,
    NotFoundError,
    UnauthorizedError,
    violates,
)
from donamatch.services._shared.ports import (
    PasswordHasher,
    TokenKind,
    TokenProvider,
    TokenRecordIn,
    TokenStore,
)
from donamatch.services.auth.dto import (
    AuthTokenConfig,
    ProfileOut,
    RefreshIn,
    RefreshOut,
    SessionOut,
    SignInIn,
    SignOutIn,
    SignUpIn,
    UserOut,
)
from donamatch.services.auth.rotation import RefreshRotationPolicy

log = logging.getLogger(__name__)

ROLE_CLAIM = "role"

# Compared against when no stored hash exists, so every sign-in pays for one
# password check.
_DUMMY_PASSWORD = "donamatch-no-such-account"
_dummy_hashes: dict[str, str] = {}


def _dummy_hash(hasher: PasswordHasher) -> str:
    """Return a hash of a throwaway password, computed once per hashing method."""
    key = str(getattr(hasher, "method", type(hasher).__qualname__))
    cached = _dummy_hashes.get(key)
    if cached is None:
        cached = _dummy_hashes[key] = hasher.hash(_DUMMY_PASSWORD)
    return cached


class AuthService(BaseService):
    """
    Session lifecycle service (sign-in / sign-up / sign-out / refresh).

    Access tokens are stateless. Every refresh token is persisted in the
    :class:`TokenStore` before it is returned, and a refresh token is only
    honoured while its stored row is live, which is what makes sign-out and
    rotation effective before the JWT itself expires.

    All authentication failures surface as the same
    :class:`UnauthorizedError`; the precise reason is only logged.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        token_store: TokenStore,
        password_hasher: PasswordHasher,
        token_cfg: AuthTokenConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_provider: Adapter issuing and verifying JWTs.
        :param token_store: Server-side registry of refresh tokens.
        :param password_hasher: Password hashing primitive.
        :param token_cfg: Lifetimes and rotation threshold.
        :param clock: Returns the current UTC instant; injectable for tests.
        """
        super().__init__()
        self.tokens = token_provider
        self.store = token_store
        self.hasher = password_hasher
        self.cfg = token_cfg or AuthTokenConfig(
            access_expires=timedelta(minutes=15),
            refresh_expires=timedelta(days=15),
        )
        self.rotation = RefreshRotationPolicy(
            lifetime=self.cfg.refresh_expires,
            threshold=self.cfg.rotation_threshold,
        )
        self.clock = clock or (lambda: datetime.now(UTC))

    # ------------------------------------------------------------------ #
    # Sign-in
    # ------------------------------------------------------------------ #

    def sign_in(self, dto: SignInIn) -> SessionOut:
        """
        Authenticate credentials for a role and open a session.

        :param dto: Sign-in input.
        :returns: Access/refresh tokens and the signed-in profile.
        :raises UnauthorizedError: If the e-mail is unknown for ``role`` or the
            password does not match. Both cases are indistinguishable.
        """
        role = RoleKind(dto.role)
        with self.ro_uow() as uow:
            profile = uow.role_profiles(role).get_by_email(dto.email)
            if profile is None:
                password_hash = None
                profile_out = None
            else:
                password_hash = profile.user.password_hash
                profile_out = self._to_profile_out(profile, role)

        if profile_out is None or not password_hash:
            self.hasher.verify(dto.password, _dummy_hash(self.hasher))
            reason = "unknown_email" if profile_out is None else "no_password"
            log.info("sign-in rejected", extra={"reason": reason, "role": role.value})
            raise UnauthorizedError()
        if not self.hasher.verify(dto.password, password_hash):
            log.info("sign-in rejected", extra={"reason": "bad_password", "role": role.value})
            raise UnauthorizedError()

        session = self._open_session(profile_out)
        log.info(
            "sign-in succeeded",
            extra={"user_id": profile_out.user.id, "role": role.value},
        )
        return session

    # ------------------------------------------------------------------ #
    # Sign-up
    # ------------------------------------------------------------------ #

    def sign_up(self, dto: SignUpIn) -> SessionOut:
        """
        Create a user with a role profile and open a session for it.

        The pre-check on the e-mail is best-effort; the unique constraint on
        ``users.email`` is what settles concurrent sign-ups. User and profile
        are inserted in one transaction, so a failure leaves neither behind.

        :param dto: Sign-up input.
        :returns: Access/refresh tokens and the new profile.
        :raises BadRequestError: If the password is missing or a field is invalid.
        :raises ConflictError: If the e-mail is already registered.
        """
        if not dto.password:
            raise BadRequestError("password is required")
        role = RoleKind(dto.role)

        # Slow hash outside the transaction to keep it short.
        password_hash = self.hasher.hash(dto.password)

        try:
            with self.rw_uow() as uow:
                if uow.users.exists_by_email(dto.email):
                    raise ConflictError("User", "email already registered")
                try:
                    user = User(
                        name=dto.name,
                        last_name_1=dto.last_name_1,
                        last_name_2=dto.last_name_2,
                        email=dto.email,
                        password_hash=password_hash,
                        verified=False,
                    )
                except ValueError as exc:
                    raise BadRequestError(str(exc)) from None
                uow.users.add(user)
                profile = uow.role_profiles(role).add_for_user(user)
                profile_out = self._to_profile_out(profile, role)
        except IntegrityError as exc:
            if violates(exc, "uq_users_email", "users.email"):
                log.info("sign-up rejected", extra={"reason": "email_taken", "role": role.value})
                raise ConflictError("User", "email already registered") from None
            raise

        session = self._open_session(profile_out)
        log.info("sign-up succeeded", extra={"user_id": profile_out.user.id, "role": role.value})
        return session

    # ------------------------------------------------------------------ #
    # Sign-out
    # ------------------------------------------------------------------ #

    def sign_out(self, dto: SignOutIn) -> None:
        """
        Revoke exactly the presented refresh token.

        Other sessions of the same user stay valid.

        :raises UnauthorizedError: If the token is invalid, expired, unknown
            or already revoked.
        """
        claims = self.tokens.verify(dto.refresh_token, TokenKind.REFRESH)
        if claims is None:
            log.info("sign-out rejected", extra={"reason": "invalid_token"})
            raise UnauthorizedError("Invalid refresh token")
        user_id = self._coerce_user_id(claims.subject)

        try:
            self.store.revoke_by_value(dto.refresh_token, user_id=user_id)
        except NotFoundError:
            log.info("sign-out rejected", extra={"reason": "not_live", "user_id": user_id})
            raise UnauthorizedError("Invalid refresh token") from None
        log.info("sign-out succeeded", extra={"user_id": user_id})

    # ------------------------------------------------------------------ #
    # Refresh with threshold rotation
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> RefreshOut:
        """
        Exchange a live refresh token for a new access token.

        When less than the rotation threshold of the refresh lifetime remains,
        the presented token is revoked and a replacement is issued and
        persisted. Of two concurrent rotations of the same token only one wins;
        the other fails because the conditional revoke finds nothing live.

        :raises UnauthorizedError: If the token is invalid, not live, owned by
            someone else, or lost a rotation race.
        """
        token = dto.refresh_token
        claims = self.tokens.verify(token, TokenKind.REFRESH)
        if claims is None:
            log.info("refresh rejected", extra={"reason": "invalid_token"})
            raise UnauthorizedError("Invalid refresh token")
        user_id = self._coerce_user_id(claims.subject)

        try:
            record = self.store.get_by_value(token)
        except NotFoundError:
            log.info("refresh rejected", extra={"reason": "not_live", "user_id": user_id})
            raise UnauthorizedError("Invalid refresh token") from None
        if record.user_id != user_id:
            log.warning("refresh rejected", extra={"reason": "owner_mismatch", "user_id": user_id})
            raise UnauthorizedError("Invalid refresh token")

        extra = self._session_claims(claims.extra.get(ROLE_CLAIM))
        new_refresh: str | None = None
        if self.rotation.should_rotate(claims.expires_at, self.clock()):
            # Resolved before revoking so a missing seed leaves the session intact.
            type_id = self._refresh_type_id()
            try:
                self.store.revoke_by_value(token, user_id=user_id)
            except NotFoundError:
                log.info("refresh rejected", extra={"reason": "lost_race", "user_id": user_id})
                raise UnauthorizedError("Invalid refresh token") from None
            new_refresh = self._issue_refresh(user_id, extra, type_id)

        access = self.tokens.issue(user_id, TokenKind.ACCESS, extra)
        log.info(
            "refresh succeeded",
            extra={"user_id": user_id, "reason": "rotated" if new_refresh else "reused"},
        )
        return RefreshOut(access_token=access, user_id=user_id, refresh_token=new_refresh)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _open_session(self, profile: ProfileOut) -> SessionOut:
        extra = self._session_claims(profile.role.value)
        access = self.tokens.issue(profile.user.id, TokenKind.ACCESS, extra)
        refresh = self._issue_refresh(profile.user.id, extra, self._refresh_type_id())
        return SessionOut(access_token=access, refresh_token=refresh, profile=profile)

    def _issue_refresh(self, user_id: int, extra: dict[str, Any], type_id: int) -> str:
        """Issue a refresh token and persist it before handing it out."""
        token = self.tokens.issue(user_id, TokenKind.REFRESH, extra)
        self.store.save(
            TokenRecordIn(
                token=token,
                user_id=user_id,
                token_type_id=type_id,
                expires_at=self.clock() + self.cfg.refresh_expires,
            )
        )
        return token

    def _refresh_type_id(self) -> int:
        try:
            return self.store.get_type_id_by_key(TokenTypeKey.REFRESH.value)
        except NotFoundError:
            log.error("token type seed missing", extra={"entity": "TokenType"})
            raise InternalServiceError("Token type 'refresh' is not seeded") from None

    @staticmethod
    def _session_claims(role: str | None) -> dict[str, Any]:
        return {ROLE_CLAIM: role} if role else {}

    @staticmethod
    def _to_profile_out(profile: Donor | Beneficiary, role: RoleKind) -> ProfileOut:
        user = profile.user
        return ProfileOut(
            id=profile.id,
            role=role,
            user=UserOut(
                id=user.id,
                name=user.name,
                last_name_1=user.last_name_1,
                last_name_2=user.last_name_2,
                email=user.email,
                verified=bool(user.verified),
            ),
        )

    @staticmethod
    def _coerce_user_id(subject: int | str) -> int:
        """Ensure the JWT subject can be treated as an integer user id."""
        if isinstance(subject, int):
            return subject
        if isinstance(subject, str) and subject.isdigit():
            return int(subject)
        log.warning("token rejected", extra={"reason": "bad_subject"})
        raise UnauthorizedError("Invalid token subject")
