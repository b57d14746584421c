"""Repository for server-side stored credentials."""

from __future__ import annotations

from datetime import datetime

from radio_api.domain.token import StoredCredential
from radio_api.repositories.base import BaseRepository


class CredentialRepository(BaseRepository[StoredCredential]):
    model = StoredCredential

    async def upsert(
        self,
        user_id: str,
        *,
        access_token: str,
        refresh_token: str,
        token_type: str,
        expires_at: datetime,
    ) -> StoredCredential:
        fields = {
            "access_token": access_token,
            "refresh_token": refresh_token,
            "token_type": token_type,
            "expires_at": expires_at,
        }
        existing = await self.get_by_id(user_id)
        if existing is None:
            return await self.create(user_id=user_id, **fields)
        return await self.update(existing, **fields)
