"""Unit tests for service-to-HTTP error translation."""

from __future__ import annotations

import pytest

from donamatch.core import errors as api_errors
from donamatch.services._shared.base import BaseService
from donamatch.services._shared.errors import (
    BadRequestError,
    ConflictError,
    DuplicateError,
    ForbiddenError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
)


@pytest.mark.parametrize(
    ("exc", "expected", "status"),
    [
        (NotFoundError("Donation", 3), api_errors.NotFound, 404),
        (ConflictError("User", "email already registered"), api_errors.Conflict, 409),
        (UnauthorizedError(), api_errors.Unauthorized, 401),
        (ForbiddenError("nope"), api_errors.Forbidden, 403),
        (DuplicateError("dup"), api_errors.InternalServerError, 500),
        (BadRequestError("bad"), api_errors.BadRequest, 400),
        (ServiceError("other"), api_errors.BadRequest, 400),
    ],
)
def test_translate_exceptions(exc, expected, status):
    translated = BaseService.translate_exceptions(exc)
    assert isinstance(translated, expected)
    assert translated.status_code == status


def test_non_service_errors_pass_through():
    exc = KeyError("x")
    assert BaseService.translate_exceptions(exc) is exc


def test_internal_error_hides_its_message(app):
    with app.test_request_context("/api/v1/donations"):
        problem = api_errors.InternalServerError("Token type 'refresh' is not seeded").to_problem()

    assert problem["detail"] == "Unexpected error"
    assert problem["instance"] == "/api/v1/donations"
    assert problem["request_id"]


def test_service_error_messages():
    assert str(NotFoundError("Token", "***")) == "Token not found: ***"
    assert str(UnauthorizedError()) == "Invalid credentials"
