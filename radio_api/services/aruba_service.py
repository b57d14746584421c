"""Aggregation service: composes vendor client calls into the BFF's intents.

Failure policy: only the primary resource's failure is surfaced. Secondary
enrichment (devices under a site, radios under a device) degrades to an
empty list, so callers cannot tell "no radios" from "radio fetch failed".

Rule: No FastAPI here. Every method returns an ApiResult.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from radio_api.core.response import ApiResult
from radio_api.schemas.auth import Credential, LoginRequest, LoginResponse, UserInfo
from radio_api.schemas.site import (
    Device,
    Radio,
    RadioControlRequest,
    RadioControlResponse,
    Site,
)
from radio_api.services.aruba_client import VendorClient

logger = logging.getLogger(__name__)


def _credential_from_grant(grant: LoginResponse) -> Credential:
    return Credential(
        access_token=grant.access_token,
        refresh_token=grant.refresh_token,
        expires_at=datetime.now(timezone.utc) + timedelta(seconds=grant.expires_in),
        token_type=grant.token_type,
    )


class ArubaService:
    def __init__(self, client: VendorClient):
        self._client = client

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def authenticate(self, email: str, password: str) -> ApiResult[Credential]:
        result = await self._client.login(LoginRequest(email=email, password=password))
        if not result.success or result.data is None:
            return ApiResult.fail(result.error or "Authentication failed", result.status_code)
        return ApiResult[Credential].ok(_credential_from_grant(result.data))

    async def refresh_authentication(self, refresh_token: str) -> ApiResult[Credential]:
        result = await self._client.refresh_token(refresh_token)
        if not result.success or result.data is None:
            return ApiResult.fail(result.error or "Token refresh failed", result.status_code)
        return ApiResult[Credential].ok(_credential_from_grant(result.data))

    async def get_user_info(self, credential: Credential) -> ApiResult[UserInfo]:
        return await self._client.get_user_info(credential.access_token)

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------

    async def get_sites(self, credential: Credential) -> ApiResult[list[Site]]:
        return await self._client.get_sites(credential.access_token)

    async def get_devices(self, credential: Credential, site_id: str) -> ApiResult[list[Device]]:
        return await self._client.get_devices(credential.access_token, site_id)

    async def get_site_with_devices(self, credential: Credential, site_id: str) -> ApiResult[Site]:
        site_result = await self._client.get_site(credential.access_token, site_id)
        if not site_result.success or site_result.data is None:
            return site_result

        devices_result = await self._client.get_devices(credential.access_token, site_id)
        if not devices_result.success:
            logger.warning(
                "Devices for site %s unavailable (%s); returning site without enrichment",
                site_id, devices_result.status_code,
            )
            return site_result

        devices = devices_result.data or []
        enriched = await asyncio.gather(
            *(self._with_radios(credential, site_id, device) for device in devices),
            return_exceptions=True,
        )
        merged: list[Device] = []
        for device, outcome in zip(devices, enriched):
            if isinstance(outcome, BaseException):
                logger.warning("Radio enrichment for device %s raised: %s", device.id, outcome)
                outcome = device.model_copy(update={"radios": []})
            merged.append(outcome)
        return ApiResult[Site].ok(site_result.data.model_copy(update={"devices": merged}))

    async def get_device_with_radios(
        self, credential: Credential, site_id: str, device_id: str
    ) -> ApiResult[Device]:
        device_result = await self._client.get_device(credential.access_token, site_id, device_id)
        if not device_result.success or device_result.data is None:
            return device_result
        device = await self._with_radios(credential, site_id, device_result.data)
        return ApiResult[Device].ok(device)

    async def _with_radios(self, credential: Credential, site_id: str, device: Device) -> Device:
        result = await self._client.get_radios(credential.access_token, site_id, device.id)
        radios: list[Radio] = []
        if result.success:
            radios = result.data or []
        else:
            logger.warning(
                "Radios for device %s unavailable (%s): %s",
                device.id, result.status_code, result.error,
            )
        return device.model_copy(update={"radios": radios})

    # ------------------------------------------------------------------
    # Radio control
    # ------------------------------------------------------------------

    async def toggle_radio(
        self, credential: Credential, site_id: str, device_id: str, radio_id: str, enabled: bool
    ) -> ApiResult[RadioControlResponse]:
        request = RadioControlRequest(device_id=device_id, radio_id=radio_id, enabled=enabled)
        return await self._client.control_radio(credential.access_token, site_id, request)

    async def update_radio(
        self, credential: Credential, site_id: str, request: RadioControlRequest
    ) -> ApiResult[RadioControlResponse]:
        return await self._client.control_radio(credential.access_token, site_id, request)
