"""Factory Boy definitions for users and their role profiles."""

from __future__ import annotations

import factory
from werkzeug.security import generate_password_hash

from donamatch.models.role_profile import Beneficiary, Donor
from donamatch.models.user import User
from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"
FAST_HASH_METHOD = "pbkdf2:sha256:1000"


class UserFactory(BaseFactory):
    """
    Build persisted :class:`donamatch.models.user.User` instances.

    Pass ``password="..."`` to choose the raw password; only its hash is
    stored.
    """

    class Meta:
        model = User

    class Params:
        password = DEFAULT_PASSWORD

    id = None  # let autoincrement handle it
    name = factory.Faker("first_name")
    last_name_1 = factory.Faker("last_name")
    last_name_2 = None
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    verified = False
    password_hash = factory.LazyAttribute(
        lambda o: generate_password_hash(o.password, method=FAST_HASH_METHOD)
    )


class DonorFactory(BaseFactory):
    """Build persisted :class:`donamatch.models.role_profile.Donor` profiles."""

    class Meta:
        model = Donor

    id = None
    user = factory.SubFactory(UserFactory)


class BeneficiaryFactory(BaseFactory):
    """Build persisted :class:`donamatch.models.role_profile.Beneficiary` profiles."""

    class Meta:
        model = Beneficiary

    id = None
    user = factory.SubFactory(UserFactory)
