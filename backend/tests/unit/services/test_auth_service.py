"""Unit tests for AuthService wired to in-memory doubles."""

from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from donamatch.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher
from donamatch.models.role_profile import Beneficiary, Donor, RoleKind
from donamatch.models.user import User
from donamatch.repositories.role_profile import RoleProfileRepository
from donamatch.repositories.user import UserRepository
from donamatch.services._shared.errors import (
    BadRequestError,
    ConflictError,
    InternalServiceError,
    NotFoundError,
    UnauthorizedError,
)
from donamatch.services._shared.ports import (
    InMemoryTokenStore,
    StubTokenProvider,
    TokenKind,
)
from donamatch.services.auth.dto import (
    AuthTokenConfig,
    RefreshIn,
    SessionOut,
    SignInIn,
    SignOutIn,
    SignUpIn,
)
from donamatch.services.auth.service import AuthService
from tests.factories.user import (
    DEFAULT_PASSWORD,
    FAST_HASH_METHOD,
    BeneficiaryFactory,
    DonorFactory,
    UserFactory,
)
from tests.helpers.utils import FakeClock

REFRESH_LIFETIME = timedelta(days=16)


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest.fixture()
def service(clock, store) -> AuthService:
    """Build an AuthService wired to a stub provider, in-memory store and fake clock."""
    return AuthService(
        token_provider=StubTokenProvider(
            access_expires=timedelta(minutes=15),
            refresh_expires=REFRESH_LIFETIME,
            clock=clock,
        ),
        token_store=store,
        password_hasher=WerkzeugPasswordHasher(method=FAST_HASH_METHOD),
        token_cfg=AuthTokenConfig(
            access_expires=timedelta(minutes=15),
            refresh_expires=REFRESH_LIFETIME,
        ),
        clock=clock,
    )


@pytest.fixture()
def donor(session) -> Donor:
    profile = DonorFactory(user=UserFactory(email="donor@example.com"))
    session.commit()
    return profile


def _sign_in(service, role=RoleKind.DONOR, email="donor@example.com", password=DEFAULT_PASSWORD):
    return service.sign_in(SignInIn(role=role, email=email, password=password))


# ------------------------------ Sign-in ----------------------------------- #
class TestSignIn:
    def test_issues_tokens_and_persists_refresh(self, service, store, donor):
        out = _sign_in(service)

        assert isinstance(out, SessionOut)
        assert out.access_token.startswith("access.")
        assert out.refresh_token.startswith("refresh.")
        record = store.get_by_value(out.refresh_token)
        assert record.user_id == donor.user_id
        assert record.token_type_id == store.get_type_id_by_key("refresh")

    def test_returns_profile_and_role_claim(self, service, donor):
        out = _sign_in(service, email="  DONOR@example.com ")

        assert out.profile.id == donor.id
        assert out.profile.role is RoleKind.DONOR
        assert out.profile.user.email == "donor@example.com"
        claims = service.tokens.verify(out.access_token, TokenKind.ACCESS)
        assert claims.subject == str(donor.user_id)
        assert claims.extra == {"role": "donor"}

    def test_unknown_email_and_bad_password_look_identical(self, service, donor):
        with pytest.raises(UnauthorizedError) as unknown:
            _sign_in(service, email="nobody@example.com")
        with pytest.raises(UnauthorizedError) as wrong:
            _sign_in(service, password="not-the-password")

        assert str(unknown.value) == str(wrong.value) == "Invalid credentials"

    def test_every_rejection_pays_for_a_password_check(self, service, session, donor):
        BeneficiaryFactory(user=UserFactory(email="nopass@example.com", password_hash=None))
        session.commit()
        real = service.hasher
        checked: list[str | None] = []

        class CountingHasher:
            def hash(self, plain):
                return real.hash(plain)

            def verify(self, plain, stored_hash):
                checked.append(stored_hash)
                return real.verify(plain, stored_hash)

        service.hasher = CountingHasher()

        with pytest.raises(UnauthorizedError):
            _sign_in(service, password="not-the-password")
        with pytest.raises(UnauthorizedError):
            _sign_in(service, email="nobody@example.com")
        with pytest.raises(UnauthorizedError):
            _sign_in(service, role=RoleKind.BENEFICIARY, email="nopass@example.com")

        assert len(checked) == 3
        assert all(checked)

    def test_wrong_role_is_rejected(self, service, donor):
        with pytest.raises(UnauthorizedError):
            _sign_in(service, role=RoleKind.BENEFICIARY)

    def test_user_without_password_cannot_sign_in(self, service, session):
        BeneficiaryFactory(user=UserFactory(email="nopass@example.com", password_hash=None))

        with pytest.raises(UnauthorizedError):
            _sign_in(service, role=RoleKind.BENEFICIARY, email="nopass@example.com")

    def test_each_sign_in_opens_a_distinct_session(self, service, store, donor):
        first = _sign_in(service)
        second = _sign_in(service)

        assert first.refresh_token != second.refresh_token
        assert store.is_live(first.refresh_token) and store.is_live(second.refresh_token)


# ------------------------------ Sign-up ----------------------------------- #
class TestSignUp:
    def _dto(self, **overrides) -> SignUpIn:
        data = {
            "role": RoleKind.BENEFICIARY,
            "name": "Lucía",
            "last_name_1": "Martín",
            "email": "lucia@example.com",
            "password": "s3cret-pass",
        }
        data.update(overrides)
        return SignUpIn(**data)

    def test_creates_user_profile_and_session(self, service, store, session):
        out = service.sign_up(self._dto())

        assert out.profile.role is RoleKind.BENEFICIARY
        assert out.profile.user.verified is False
        assert store.is_live(out.refresh_token)

        user = UserRepository().get_by_email("lucia@example.com")
        assert user.password_hash != "s3cret-pass"
        assert session.get(Beneficiary, out.profile.id).user_id == user.id

    def test_can_sign_in_after_sign_up(self, service, session):
        service.sign_up(self._dto(role=RoleKind.DONOR))

        out = _sign_in(service, email="lucia@example.com", password="s3cret-pass")
        assert out.profile.role is RoleKind.DONOR

    def test_missing_password_is_bad_request(self, service):
        with pytest.raises(BadRequestError, match="password is required"):
            service.sign_up(self._dto(password=None))

    def test_duplicate_email_conflicts_across_roles(self, service, donor):
        with pytest.raises(ConflictError):
            service.sign_up(self._dto(email="Donor@Example.com"))

    def test_soft_deleted_user_still_holds_email(self, service, session):
        user = UserFactory(email="gone@example.com")
        user.soft_delete()
        session.commit()

        with pytest.raises(ConflictError):
            service.sign_up(self._dto(email="gone@example.com"))

    def test_failed_profile_insert_leaves_no_user(self, service, session, monkeypatch):
        def _fail(repo, user):
            repo.session.flush()
            raise IntegrityError("INSERT INTO beneficiaries", {}, Exception("profile insert failed"))

        monkeypatch.setattr(RoleProfileRepository, "add_for_user", _fail)

        with pytest.raises(IntegrityError):
            service.sign_up(self._dto(email="orphan@example.com"))

        assert session.query(User).filter_by(email="orphan@example.com").count() == 0
        assert session.query(Beneficiary).count() == 0

    def test_unique_index_race_maps_to_conflict(self, service, donor, session, monkeypatch):
        monkeypatch.setattr(UserRepository, "exists_by_email", lambda self, email: False)

        with pytest.raises(ConflictError):
            service.sign_up(self._dto(email="donor@example.com"))

        assert session.query(User).filter_by(email="donor@example.com").count() == 1
        assert session.query(Beneficiary).count() == 0

    def test_invalid_field_is_bad_request(self, service):
        with pytest.raises(BadRequestError):
            service.sign_up(self._dto(name="   "))


# ------------------------------ Sign-out ---------------------------------- #
class TestSignOut:
    def test_revokes_only_the_presented_token(self, service, store, donor):
        first = _sign_in(service)
        second = _sign_in(service)

        service.sign_out(SignOutIn(refresh_token=first.refresh_token))

        assert not store.is_live(first.refresh_token)
        assert store.is_live(second.refresh_token)

    def test_second_sign_out_is_unauthorized(self, service, donor):
        out = _sign_in(service)
        service.sign_out(SignOutIn(refresh_token=out.refresh_token))

        with pytest.raises(UnauthorizedError):
            service.sign_out(SignOutIn(refresh_token=out.refresh_token))

    def test_access_token_is_not_accepted(self, service, donor):
        out = _sign_in(service)

        with pytest.raises(UnauthorizedError):
            service.sign_out(SignOutIn(refresh_token=out.access_token))

    def test_revoked_token_cannot_refresh(self, service, donor):
        out = _sign_in(service)
        service.sign_out(SignOutIn(refresh_token=out.refresh_token))

        with pytest.raises(UnauthorizedError):
            service.refresh(RefreshIn(refresh_token=out.refresh_token))


# ------------------------------ Refresh ----------------------------------- #
class TestRefresh:
    def test_keeps_refresh_token_early_in_its_life(self, service, store, clock, donor):
        out = _sign_in(service)
        clock.advance(days=1)

        result = service.refresh(RefreshIn(refresh_token=out.refresh_token))

        assert result.refresh_token is None
        assert result.user_id == donor.user_id
        assert result.access_token != out.access_token
        assert store.is_live(out.refresh_token)

        again = service.refresh(RefreshIn(refresh_token=out.refresh_token))
        assert again.refresh_token is None

    def test_rotates_once_below_threshold(self, service, store, clock, donor):
        out = _sign_in(service)
        # 16 day lifetime: rotation starts once fewer than 4 days remain.
        clock.advance(days=12, seconds=1)

        result = service.refresh(RefreshIn(refresh_token=out.refresh_token))

        assert result.refresh_token is not None
        assert result.refresh_token != out.refresh_token
        assert not store.is_live(out.refresh_token)
        assert store.is_live(result.refresh_token)
        claims = service.tokens.verify(result.access_token, TokenKind.ACCESS)
        assert claims.extra == {"role": "donor"}

    def test_exact_threshold_does_not_rotate(self, service, clock, donor):
        out = _sign_in(service)
        clock.advance(days=12)

        result = service.refresh(RefreshIn(refresh_token=out.refresh_token))
        assert result.refresh_token is None

    def test_rotated_token_cannot_be_reused(self, service, clock, donor):
        out = _sign_in(service)
        clock.advance(days=13)
        rotated = service.refresh(RefreshIn(refresh_token=out.refresh_token))

        with pytest.raises(UnauthorizedError):
            service.refresh(RefreshIn(refresh_token=out.refresh_token))
        assert service.refresh(RefreshIn(refresh_token=rotated.refresh_token)).user_id

    def test_expired_refresh_token_is_rejected(self, service, clock, donor):
        out = _sign_in(service)
        clock.advance(days=16)

        with pytest.raises(UnauthorizedError):
            service.refresh(RefreshIn(refresh_token=out.refresh_token))

    def test_unknown_token_is_rejected(self, service):
        with pytest.raises(UnauthorizedError):
            service.refresh(RefreshIn(refresh_token="refresh.1.forged"))

    def test_signed_but_unstored_token_is_rejected(self, service, donor):
        forged = service.tokens.issue(donor.user_id, TokenKind.REFRESH)

        with pytest.raises(UnauthorizedError):
            service.refresh(RefreshIn(refresh_token=forged))

    def test_losing_a_rotation_race_is_unauthorized(self, service, store, clock, donor, monkeypatch):
        out = _sign_in(service)
        clock.advance(days=13)
        original = store.get_by_value

        def _read_then_lose(token):
            record = original(token)
            store.revoke_by_value(token)  # the concurrent winner
            return record

        monkeypatch.setattr(store, "get_by_value", _read_then_lose)

        with pytest.raises(UnauthorizedError):
            service.refresh(RefreshIn(refresh_token=out.refresh_token))

    def test_missing_seed_during_rotation_keeps_the_session(
        self, service, store, clock, donor, monkeypatch
    ):
        out = _sign_in(service)
        clock.advance(days=14)

        def _unseeded(key):
            raise NotFoundError("TokenType", key)

        monkeypatch.setattr(store, "get_type_id_by_key", _unseeded)

        with pytest.raises(InternalServiceError):
            service.refresh(RefreshIn(refresh_token=out.refresh_token))
        assert store.is_live(out.refresh_token)

    def test_custom_threshold(self, clock, store, donor):
        service = AuthService(
            token_provider=StubTokenProvider(refresh_expires=REFRESH_LIFETIME, clock=clock),
            token_store=store,
            password_hasher=WerkzeugPasswordHasher(method=FAST_HASH_METHOD),
            token_cfg=AuthTokenConfig(
                access_expires=timedelta(minutes=5),
                refresh_expires=REFRESH_LIFETIME,
                rotation_threshold=0.5,
            ),
            clock=clock,
        )
        out = _sign_in(service)
        clock.advance(days=9)

        assert service.refresh(RefreshIn(refresh_token=out.refresh_token)).refresh_token


# ---------------------------- Seeding errors ------------------------------ #
def test_missing_refresh_token_type_is_internal_error(clock, donor):
    service = AuthService(
        token_provider=StubTokenProvider(clock=clock),
        token_store=InMemoryTokenStore(type_ids={}),
        password_hasher=WerkzeugPasswordHasher(method=FAST_HASH_METHOD),
        clock=clock,
    )

    with pytest.raises(InternalServiceError):
        _sign_in(service)


def test_token_config_validation():
    with pytest.raises(ValueError):
        AuthTokenConfig(access_expires=timedelta(0), refresh_expires=REFRESH_LIFETIME)
    with pytest.raises(ValueError):
        AuthTokenConfig(
            access_expires=timedelta(minutes=1),
            refresh_expires=REFRESH_LIFETIME,
            rotation_threshold=1.5,
        )
