"""Server-side credential stores.

The primary request flow is stateless (the browser holds its tokens). These
stores back the optional persistence variant and are injected through the
app lifespan, never used as module globals.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import timezone
from typing import Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from radio_api.domain.token import StoredCredential
from radio_api.repositories.credential import CredentialRepository
from radio_api.schemas.auth import Credential

logger = logging.getLogger(__name__)


class TokenStore(Protocol):
    async def get(self, user_id: str) -> Optional[Credential]: ...

    async def set(self, user_id: str, credential: Credential) -> None: ...

    async def remove(self, user_id: str) -> None: ...


class InMemoryTokenStore:
    """Process-local map guarded by a single asyncio lock."""

    def __init__(self) -> None:
        self._tokens: dict[str, Credential] = {}
        self._lock = asyncio.Lock()

    async def get(self, user_id: str) -> Optional[Credential]:
        async with self._lock:
            return self._tokens.get(user_id)

    async def set(self, user_id: str, credential: Credential) -> None:
        async with self._lock:
            self._tokens[user_id] = credential

    async def remove(self, user_id: str) -> None:
        async with self._lock:
            self._tokens.pop(user_id, None)


def _to_credential(row: StoredCredential) -> Credential:
    expires_at = row.expires_at
    # SQLite drops tzinfo on read
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return Credential(
        access_token=row.access_token,
        refresh_token=row.refresh_token,
        expires_at=expires_at,
        token_type=row.token_type,
    )


class DatabaseTokenStore:
    """Credentials persisted in the ``stored_credentials`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get(self, user_id: str) -> Optional[Credential]:
        async with self._session_factory() as session:
            row = await CredentialRepository(session).get_by_id(user_id)
            return _to_credential(row) if row is not None else None

    async def set(self, user_id: str, credential: Credential) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                await CredentialRepository(session).upsert(
                    user_id,
                    access_token=credential.access_token,
                    refresh_token=credential.refresh_token,
                    token_type=credential.token_type,
                    expires_at=credential.expires_at,
                )
        logger.debug("Stored credential for %s", user_id)

    async def remove(self, user_id: str) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                await CredentialRepository(session).delete_by_id(user_id)
