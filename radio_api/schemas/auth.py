"""Authentication schemas: inbound requests, vendor token payloads, Credential."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import ConfigDict, Field

from radio_api.schemas.common import CamelModel

# Credentials are considered stale this long before the vendor expiry.
EXPIRY_SKEW = timedelta(minutes=5)


class LoginRequest(CamelModel):
    email: str
    password: str


class RefreshTokenRequest(CamelModel):
    refresh_token: str


class LoginResponse(CamelModel):
    """Token grant returned by the vendor login and refresh endpoints."""

    access_token: str
    refresh_token: str = ""
    expires_in: int = 0
    token_type: str = "Bearer"


class Credential(CamelModel):
    """Bearer credential used to authorize outbound vendor calls.

    Frozen: a refresh produces a new Credential rather than mutating this one.
    """

    access_token: str
    refresh_token: str = ""
    expires_at: datetime
    token_type: str = "Bearer"

    model_config = ConfigDict(frozen=True)

    @property
    def is_expired(self) -> bool:
        return datetime.now(timezone.utc) >= self.expires_at - EXPIRY_SKEW


class TokenResponse(CamelModel):
    """Body returned by /api/auth/login and /api/auth/refresh."""

    access_token: str
    refresh_token: str
    expires_at: datetime
    token_type: str


class LogoutResponse(CamelModel):
    message: str = "Logged out successfully"


class UserInfo(CamelModel):
    id: str
    email: str
    name: str = Field(default="")
