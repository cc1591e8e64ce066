# donamatch/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from donamatch.models.role_profile import RoleKind

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SignInIn:
    """
    Input DTO for sign-in.

    :param role: Profile kind the caller signs in as.
    :type role: RoleKind
    :param email: Login e-mail (normalized downstream).
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    role: RoleKind
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class SignUpIn:
    """
    Input DTO for sign-up.

    :param role: Profile kind to create alongside the user.
    :type role: RoleKind
    :param name: Given name.
    :type name: str
    :param last_name_1: First surname.
    :type last_name_1: str
    :param email: Login e-mail.
    :type email: str
    :param password: Raw password; required for sign-up.
    :type password: str | None
    :param last_name_2: Optional second surname.
    :type last_name_2: str | None
    """

    role: RoleKind
    name: str
    last_name_1: str
    email: str
    password: str | None
    last_name_2: str | None = None


@dataclass(frozen=True, slots=True)
class SignOutIn:
    """
    Input DTO for sign-out.

    :param refresh_token: Encoded refresh JWT to revoke.
    :type refresh_token: str
    """

    refresh_token: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    refresh_token: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserOut:
    """Public projection of a user; never carries the password hash."""

    id: int
    name: str
    last_name_1: str
    last_name_2: str | None
    email: str
    verified: bool


@dataclass(frozen=True, slots=True)
class ProfileOut:
    """
    Role profile with its embedded user.

    :param id: Profile id (independent from the user id).
    :type id: int
    :param role: Profile kind.
    :type role: RoleKind
    :param user: Owning user.
    :type user: UserOut
    """

    id: int
    role: RoleKind
    user: UserOut


@dataclass(frozen=True, slots=True)
class SessionOut:
    """
    Output DTO of sign-in and sign-up.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT (already persisted).
    :type refresh_token: str
    :param profile: Profile the session was opened for.
    :type profile: ProfileOut
    """

    access_token: str
    refresh_token: str
    profile: ProfileOut


@dataclass(frozen=True, slots=True)
class RefreshOut:
    """
    Output DTO of a refresh.

    :param access_token: Newly issued access JWT.
    :type access_token: str
    :param user_id: Token subject.
    :type user_id: int
    :param refresh_token: Replacement refresh JWT when rotation happened.
    :type refresh_token: str | None
    """

    access_token: str
    user_id: int
    refresh_token: str | None = None


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    :param rotation_threshold: Fraction of ``refresh_expires`` below which the
        remaining lifetime triggers rotation.
    :type rotation_threshold: float
    :raises ValueError: If a lifetime is not positive or the threshold is
        outside ``(0, 1]``.
    """

    access_expires: timedelta
    refresh_expires: timedelta
    rotation_threshold: float = 0.25

    def __post_init__(self) -> None:
        if self.access_expires <= timedelta(0) or self.refresh_expires <= timedelta(0):
            raise ValueError("Token lifetimes must be positive.")
        if not 0 < self.rotation_threshold <= 1:
            raise ValueError("rotation_threshold must be in (0, 1].")
