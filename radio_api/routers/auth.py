"""Authentication endpoints: exchange portal credentials for vendor tokens."""

import logging

from fastapi import APIRouter, Depends

from radio_api.core.config import settings
from radio_api.core.exceptions import BadRequestError, unwrap
from radio_api.core.security import require_credential
from radio_api.dependencies import get_aruba_service, get_token_store
from radio_api.schemas.auth import (
    Credential,
    LoginRequest,
    LogoutResponse,
    RefreshTokenRequest,
    TokenResponse,
    UserInfo,
)
from radio_api.services.aruba_service import ArubaService
from radio_api.services.token_store import TokenStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _token_response(credential: Credential) -> TokenResponse:
    return TokenResponse(
        access_token=credential.access_token,
        refresh_token=credential.refresh_token,
        expires_at=credential.expires_at,
        token_type=credential.token_type,
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    service: ArubaService = Depends(get_aruba_service),
    store: TokenStore = Depends(get_token_store),
):
    """Authenticate against the Instant On portal."""
    if not body.email.strip() or not body.password.strip():
        raise BadRequestError("Email and password are required")

    logger.info("Login attempt for user: %s", body.email)
    result = await service.authenticate(body.email, body.password)
    if not result.success:
        logger.warning("Login failed for user: %s", body.email)
    credential = unwrap(result, "AUTH_FAILED", "Authentication failed")

    if settings.persist_tokens:
        await store.set(body.email, credential)

    logger.info("Login successful for user: %s", body.email)
    return _token_response(credential)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    body: RefreshTokenRequest,
    service: ArubaService = Depends(get_aruba_service),
):
    """Exchange a refresh token for a new credential. No retry: on failure the UI must log in again."""
    if not body.refresh_token.strip():
        raise BadRequestError("Refresh token is required")

    result = await service.refresh_authentication(body.refresh_token)
    credential = unwrap(result, "REFRESH_FAILED", "Token refresh failed")
    return _token_response(credential)


@router.post("/logout", response_model=LogoutResponse)
async def logout():
    return LogoutResponse()


@router.get("/me", response_model=UserInfo)
async def me(
    credential: Credential = Depends(require_credential),
    service: ArubaService = Depends(get_aruba_service),
):
    result = await service.get_user_info(credential)
    return unwrap(result, "FETCH_FAILED", "Failed to get user info")
