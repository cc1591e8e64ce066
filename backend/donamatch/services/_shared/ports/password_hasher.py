from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for salted, slow password hashing."""

    def hash(self, plain: str) -> str:
        """Return a salted hash of ``plain`` suitable for storage."""
        ...

    def verify(self, plain: str, stored_hash: str | None) -> bool:
        """Return ``True`` only if ``plain`` matches ``stored_hash``; never raises."""
        ...
