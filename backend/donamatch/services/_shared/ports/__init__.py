"""
donamatch.services._shared.ports
================================

*Ports* (hexagonal interfaces) that keep the session use cases independent
from concrete cryptography and storage.

Modules
-------
- :mod:`token_provider`:
    :class:`~.TokenProvider` issues and verifies signed access/refresh tokens.
- :mod:`token_store`:
    :class:`~.TokenStore` is the server-side registry of live refresh tokens.
- :mod:`password_hasher`:
    :class:`~.PasswordHasher` hashes and checks passwords.

Concrete adapters live under ``donamatch.infra``; in-memory and stub
implementations here serve unit tests.
"""

from __future__ import annotations

from .password_hasher import PasswordHasher
from .token_provider import StubTokenProvider, TokenClaims, TokenKind, TokenProvider
from .token_store import InMemoryTokenStore, TokenRecord, TokenRecordIn, TokenStore

__all__ = [
    "InMemoryTokenStore",
    "PasswordHasher",
    "StubTokenProvider",
    "TokenClaims",
    "TokenKind",
    "TokenProvider",
    "TokenRecord",
    "TokenRecordIn",
    "TokenStore",
]
