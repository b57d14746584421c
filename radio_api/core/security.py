"""Bearer-token carrier: turns an inbound Authorization header into a Credential."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Header

from radio_api.core.exceptions import UnauthorizedError
from radio_api.schemas.auth import Credential

_BEARER_PREFIX = "bearer "

# The browser keeps the real expiry; carried tokens get a long placeholder window.
CARRIED_TOKEN_LIFETIME = timedelta(days=365)


def credential_from_authorization(header: Optional[str]) -> Optional[Credential]:
    """Return a request-scoped Credential, or None when no usable bearer token is present."""
    if not header or not header.strip():
        return None
    if not header.lower().startswith(_BEARER_PREFIX):
        return None
    token = header[len(_BEARER_PREFIX):].strip()
    if not token:
        return None
    return Credential(
        access_token=token,
        refresh_token="",
        expires_at=datetime.now(timezone.utc) + CARRIED_TOKEN_LIFETIME,
    )


async def require_credential(
    authorization: Optional[str] = Header(default=None),
) -> Credential:
    """FastAPI dependency — 401 when the request carries no bearer token."""
    credential = credential_from_authorization(authorization)
    if credential is None:
        raise UnauthorizedError("Access token required")
    return credential
