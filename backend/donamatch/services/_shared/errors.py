"""
Domain-level exceptions used within the service layer.

These exceptions never depend on Flask or HTTP. They are the stable contract
between repositories, ports and application services.

The translation to HTTP responses (RFC 7807) is handled by
``donamatch/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str, *aliases: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name; SQLite only reports the columns
    (``UNIQUE constraint failed: users.email``), which callers pass as aliases.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').
    *aliases : str
        Additional fragments that identify the same constraint.

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return any(name.lower() in message for name in (constraint_name, *aliases))


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - Subclasses not listed in ``BaseService.translate_exceptions`` are
      rendered as 400.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class BadRequestError(ServiceError):
    """Raised for malformed or incomplete input that passed schema checks."""


class UnauthorizedError(ServiceError):
    """
    Raised when authentication fails.

    The message is deliberately generic; the precise reason is logged only.
    """

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class ForbiddenError(ServiceError):
    """Raised when an authenticated caller lacks the required role."""


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class InternalServiceError(ServiceError):
    """Raised when an internal invariant is broken (missing seed data, bad token)."""


class DuplicateError(InternalServiceError):
    """Raised when a value that must be unique is persisted twice."""
