# donamatch/infra/db/token_store.py
from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError

from donamatch.models.token import Token
from donamatch.services._shared.errors import DuplicateError, NotFoundError, violates
from donamatch.services._shared.ports.token_store import (
    MASKED_TOKEN,
    TOKEN_ENTITY,
    TOKEN_TYPE_ENTITY,
    TokenRecord,
    TokenRecordIn,
)
from donamatch.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


class SQLAlchemyTokenStore:
    """
    Relational token store over the ``tokens`` table.

    Every call runs in its own unit of work so a stored token is committed
    before it is handed to a client. Token type ids are memoized because the
    ``token_types`` table never changes after seeding.
    """

    def __init__(
        self,
        *,
        rw_uow: Callable[[], SQLAlchemyUnitOfWork] = SQLAlchemyUnitOfWork,
        ro_uow: Callable[[], SQLAlchemyReadOnlyUnitOfWork] = SQLAlchemyReadOnlyUnitOfWork,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._rw_uow = rw_uow
        self._ro_uow = ro_uow
        self._clock = clock or (lambda: datetime.now(UTC))
        self._type_ids: dict[str, int] = {}

    def save(self, record: TokenRecordIn) -> TokenRecord:
        try:
            with self._rw_uow() as uow:
                row = uow.tokens.add(
                    Token(
                        token=record.token,
                        user_id=record.user_id,
                        token_type_id=record.token_type_id,
                        expires_at=record.expires_at,
                    )
                )
                saved = self._to_record(row)
        except IntegrityError as exc:
            if violates(exc, "uq_tokens_token", "tokens.token"):
                raise DuplicateError("Token value already stored") from None
            raise
        return saved

    def get_by_value(self, token: str) -> TokenRecord:
        with self._ro_uow() as uow:
            row = uow.tokens.get_live_by_value(token)
            if row is None:
                raise NotFoundError(TOKEN_ENTITY, MASKED_TOKEN)
            return self._to_record(row)

    def revoke_by_value(self, token: str, *, user_id: int | None = None) -> None:
        with self._rw_uow() as uow:
            revoked = uow.tokens.revoke_by_value(
                token, revoked_at=self._clock(), user_id=user_id
            )
            if revoked == 0:
                raise NotFoundError(TOKEN_ENTITY, MASKED_TOKEN)

    def get_type_id_by_key(self, key: str) -> int:
        cached = self._type_ids.get(key)
        if cached is not None:
            return cached
        with self._ro_uow() as uow:
            type_id = uow.token_types.get_id_by_key(key)
        if type_id is None:
            raise NotFoundError(TOKEN_TYPE_ENTITY, key)
        self._type_ids[key] = type_id
        return type_id

    def purge_stale(self, now: datetime) -> int:
        with self._rw_uow() as uow:
            return uow.tokens.purge_stale(now)

    @staticmethod
    def _to_record(row: Token) -> TokenRecord:
        return TokenRecord(
            id=row.id,
            token=row.token,
            user_id=row.user_id,
            token_type_id=row.token_type_id,
            created_at=row.created_at,
            expires_at=row.expires_at,
        )
