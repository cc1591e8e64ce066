"""Unit tests for WerkzeugPasswordHasher."""

from __future__ import annotations

import pytest

from donamatch.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher


@pytest.fixture()
def hasher():
    return WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")


def test_hash_is_salted_and_verifiable(hasher):
    first = hasher.hash("s3cret")
    second = hasher.hash("s3cret")

    assert first != "s3cret"
    assert first != second
    assert hasher.verify("s3cret", first)
    assert not hasher.verify("wrong", first)


@pytest.mark.parametrize(("plain", "stored"), [("", "x"), ("s3cret", None), ("s3cret", "garbage")])
def test_unusable_inputs_fail_closed(hasher, plain, stored):
    assert hasher.verify(plain, stored) is False
