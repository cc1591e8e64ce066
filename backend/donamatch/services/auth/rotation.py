"""Decides when a refresh token is close enough to expiry to be replaced."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from donamatch.services._shared.errors import InternalServiceError


@dataclass(frozen=True, slots=True)
class RefreshRotationPolicy:
    """
    Rotate a refresh token once less than ``threshold`` of its lifetime remains.

    With the default ``threshold`` of ``0.25`` and a 15 day lifetime, refreshes
    during the first 11.25 days keep the presented token, later ones replace it.

    :param lifetime: Configured refresh token lifetime.
    :type lifetime: timedelta
    :param threshold: Fraction of ``lifetime`` in ``(0, 1]``.
    :type threshold: float
    """

    lifetime: timedelta
    threshold: float = 0.25

    def __post_init__(self) -> None:
        if not 0 < self.threshold <= 1:
            raise ValueError("threshold must be in (0, 1].")

    @property
    def window(self) -> timedelta:
        """Remaining lifetime below which rotation kicks in."""
        return self.lifetime * self.threshold

    def should_rotate(self, expires_at: datetime | None, now: datetime) -> bool:
        """
        Return ``True`` when ``expires_at - now`` is below the rotation window.

        :raises InternalServiceError: If the token carries no expiry.
        """
        if expires_at is None:
            raise InternalServiceError("Refresh token has no expiry")
        return expires_at - now < self.window
