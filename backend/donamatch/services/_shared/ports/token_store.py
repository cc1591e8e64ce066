from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from donamatch.services._shared.errors import DuplicateError, NotFoundError

TOKEN_ENTITY = "Token"
TOKEN_TYPE_ENTITY = "TokenType"
# Token values are secrets; error keys and logs only ever carry this mask.
MASKED_TOKEN = "***"


@dataclass(frozen=True, slots=True)
class TokenRecordIn:
    """
    Write-model for a token about to be persisted.

    :ivar token: Raw encoded token string.
    :ivar user_id: Owner user id.
    :ivar token_type_id: Id of the seeded token type (e.g. ``refresh``).
    :ivar expires_at: Expected expiry, used for purging.
    """

    token: str
    user_id: int
    token_type_id: int
    expires_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class TokenRecord:
    """Read-model of a live stored token."""

    id: int
    token: str
    user_id: int
    token_type_id: int
    created_at: datetime | None
    expires_at: datetime | None


class TokenStore(Protocol):
    """
    Server-side registry of refresh tokens.

    A stored value is *live* until revoked; only live values may be used to
    refresh a session. Revocation MUST be atomic: of two concurrent revokes of
    the same value exactly one succeeds.
    """

    def save(self, record: TokenRecordIn) -> TokenRecord:
        """Persist ``record``. :raises DuplicateError: if the value already exists."""
        ...

    def get_by_value(self, token: str) -> TokenRecord:
        """Return the live record. :raises NotFoundError: if none is live."""
        ...

    def revoke_by_value(self, token: str, *, user_id: int | None = None) -> None:
        """
        Revoke the live record storing ``token``.

        :param user_id: Restrict revocation to a record owned by this user.
        :raises NotFoundError: if nothing was revoked.
        """
        ...

    def get_type_id_by_key(self, key: str) -> int:
        """Return the id of a seeded token type. :raises NotFoundError: if missing."""
        ...

    def purge_stale(self, now: datetime) -> int:
        """Hard-delete revoked and expired records; return how many were removed."""
        ...


class InMemoryTokenStore:
    """
    Dictionary-backed token store for unit tests.

    .. note::
       A threading lock makes ``revoke_by_value`` atomic like the SQL
       conditional update it stands in for.
    """

    DEFAULT_TYPES = {"refresh": 1, "recover": 2, "verify": 3}

    def __init__(self, type_ids: dict[str, int] | None = None) -> None:
        self._types = dict(self.DEFAULT_TYPES if type_ids is None else type_ids)
        self._rows: dict[str, dict] = {}
        self._seq = 0
        self._lock = threading.Lock()

    def save(self, record: TokenRecordIn) -> TokenRecord:
        with self._lock:
            if record.token in self._rows:
                raise DuplicateError("Token value already stored")
            self._seq += 1
            row = {
                "id": self._seq,
                "token": record.token,
                "user_id": record.user_id,
                "token_type_id": record.token_type_id,
                "created_at": datetime.now(UTC),
                "expires_at": record.expires_at,
                "deleted_at": None,
            }
            self._rows[record.token] = row
            return self._to_record(row)

    def get_by_value(self, token: str) -> TokenRecord:
        row = self._rows.get(token)
        if row is None or row["deleted_at"] is not None:
            raise NotFoundError(TOKEN_ENTITY, MASKED_TOKEN)
        return self._to_record(row)

    def revoke_by_value(self, token: str, *, user_id: int | None = None) -> None:
        with self._lock:
            row = self._rows.get(token)
            if (
                row is None
                or row["deleted_at"] is not None
                or (user_id is not None and row["user_id"] != user_id)
            ):
                raise NotFoundError(TOKEN_ENTITY, MASKED_TOKEN)
            row["deleted_at"] = datetime.now(UTC)

    def get_type_id_by_key(self, key: str) -> int:
        try:
            return self._types[key]
        except KeyError:
            raise NotFoundError(TOKEN_TYPE_ENTITY, key) from None

    def purge_stale(self, now: datetime) -> int:
        with self._lock:
            stale = [
                value
                for value, row in self._rows.items()
                if row["deleted_at"] is not None
                or (row["expires_at"] is not None and row["expires_at"] < now)
            ]
            for value in stale:
                del self._rows[value]
            return len(stale)

    def is_live(self, token: str) -> bool:
        row = self._rows.get(token)
        return row is not None and row["deleted_at"] is None

    @staticmethod
    def _to_record(row: dict) -> TokenRecord:
        return TokenRecord(
            id=row["id"],
            token=row["token"],
            user_id=row["user_id"],
            token_type_id=row["token_type_id"],
            created_at=row["created_at"],
            expires_at=row["expires_at"],
        )
