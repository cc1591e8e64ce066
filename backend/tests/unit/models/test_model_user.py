"""Unit tests for the User model and role profiles."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from donamatch.models.role_profile import ROLE_MODELS, Beneficiary, Donor, RoleKind
from donamatch.models.user import User, normalize_email
from tests.factories.user import BeneficiaryFactory, DonorFactory, UserFactory


class TestUserModel:
    def test_email_is_normalized(self, session):
        user = UserFactory(email="  Ana.Garcia@Example.COM ")
        assert user.email == "ana.garcia@example.com"

    def test_invalid_email_rejected(self):
        with pytest.raises(ValueError, match="invalid"):
            User(name="Ana", last_name_1="García", email="not-an-email")

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError, match="name is required"):
            User(name="   ", last_name_1="García", email="ana@example.com")

    def test_names_are_trimmed(self, session):
        user = UserFactory(name="  Ana ", last_name_1=" García  ")
        assert (user.name, user.last_name_1) == ("Ana", "García")

    def test_verified_defaults_to_false(self, session):
        user = User(name="Ana", last_name_1="García", email="ana@example.com")
        session.add(user)
        session.flush()
        session.refresh(user)
        assert user.verified is False

    def test_email_unique(self, session):
        UserFactory(email="dup@example.com")
        with pytest.raises(IntegrityError):
            UserFactory(email="DUP@example.com")

    def test_soft_delete_stamps_once(self, session):
        user = UserFactory()
        assert user.is_deleted is False
        user.soft_delete()
        first = user.deleted_at
        user.soft_delete()
        assert user.is_deleted is True
        assert user.deleted_at == first

    def test_normalize_email_helper(self):
        assert normalize_email(" X@Y.Z ") == "x@y.z"


class TestRoleProfiles:
    def test_profiles_link_back_to_user(self, session):
        donor = DonorFactory()
        beneficiary = BeneficiaryFactory(user=donor.user)
        session.refresh(donor.user)

        assert donor.user.donor is donor
        assert donor.user.beneficiary is beneficiary
        assert beneficiary.user_id == donor.user_id

    def test_one_profile_per_role_and_user(self, session):
        donor = DonorFactory()
        with pytest.raises(IntegrityError):
            DonorFactory(user=donor.user)

    def test_role_models_registry(self):
        assert ROLE_MODELS[RoleKind.DONOR] is Donor
        assert ROLE_MODELS[RoleKind.BENEFICIARY] is Beneficiary
        assert Donor.role is RoleKind.DONOR
