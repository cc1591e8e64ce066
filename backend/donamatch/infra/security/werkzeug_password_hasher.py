# donamatch/infra/security/werkzeug_password_hasher.py
from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash


@dataclass(slots=True)
class WerkzeugPasswordHasher:
    """
    Password hasher backed by :mod:`werkzeug.security`.

    :ivar method: Werkzeug method string, e.g. ``"scrypt"`` or
        ``"pbkdf2:sha256:600000"``.
    """

    method: str = "scrypt"

    def hash(self, plain: str) -> str:
        return generate_password_hash(plain, method=self.method)

    def verify(self, plain: str, stored_hash: str | None) -> bool:
        if not plain or not stored_hash:
            return False
        try:
            return check_password_hash(stored_hash, plain)
        except ValueError:
            # Unknown or malformed hash format.
            return False
