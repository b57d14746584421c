"""Stub vendor client for local development: canned topology, no network.

Enabled with ``USE_MOCK_ARUBA_CLIENT=true``. Accepts only the fake
credentials below; every data call requires the mock access token.
"""

from __future__ import annotations

import asyncio
import logging

from radio_api.core.response import ApiResult
from radio_api.schemas.auth import LoginRequest, LoginResponse, UserInfo
from radio_api.schemas.site import (
    Device,
    DeviceStatus,
    Radio,
    RadioControlRequest,
    RadioControlResponse,
    RadioStatus,
    Site,
)

logger = logging.getLogger(__name__)

FAKE_EMAIL = "test@example.com"
FAKE_PASSWORD = "password"
FAKE_ACCESS_TOKEN = "mock-access-token-12345"
FAKE_REFRESH_TOKEN = "mock-refresh-token-67890"


def _mock_radios() -> list[Radio]:
    return [
        Radio(
            id="mock-radio-1", band="2.4GHz", channel=6, channel_width=20,
            transmit_power=17, enabled=True, status=RadioStatus.ACTIVE,
        ),
        Radio(
            id="mock-radio-2", band="5GHz", channel=36, channel_width=40,
            transmit_power=23, enabled=True, status=RadioStatus.ACTIVE,
        ),
    ]


def _mock_device(device_id: str, name: str, radios: list[Radio] | None = None) -> Device:
    return Device(
        id=device_id,
        name=name,
        mac_address="00:11:22:33:44:55",
        model="AP22",
        serial_number="MOCK12345",
        status=DeviceStatus.ONLINE,
        radios=radios or [],
    )


class MockArubaApiClient:
    """Drop-in replacement for :class:`ArubaApiClient`."""

    def __init__(self, latency: float = 0.0):
        self._latency = latency

    async def _delay(self, factor: float = 1.0) -> None:
        if self._latency > 0:
            await asyncio.sleep(self._latency * factor)

    @staticmethod
    def _authorized(access_token: str) -> bool:
        return access_token.startswith(FAKE_ACCESS_TOKEN)

    async def login(self, request: LoginRequest) -> ApiResult[LoginResponse]:
        logger.info("Mock login attempt for: %s", request.email)
        await self._delay()
        if request.email == FAKE_EMAIL and request.password == FAKE_PASSWORD:
            logger.info("Mock login successful")
            return ApiResult[LoginResponse].ok(
                LoginResponse(
                    access_token=FAKE_ACCESS_TOKEN,
                    refresh_token=FAKE_REFRESH_TOKEN,
                    expires_in=3600,
                    token_type="Bearer",
                )
            )
        logger.warning("Mock login failed - invalid credentials")
        return ApiResult.fail("Invalid credentials", 401)

    async def refresh_token(self, refresh_token: str) -> ApiResult[LoginResponse]:
        logger.info("Mock token refresh")
        await self._delay(0.6)
        if refresh_token == FAKE_REFRESH_TOKEN:
            return ApiResult[LoginResponse].ok(
                LoginResponse(
                    access_token=f"{FAKE_ACCESS_TOKEN}-refreshed",
                    refresh_token=FAKE_REFRESH_TOKEN,
                    expires_in=3600,
                    token_type="Bearer",
                )
            )
        logger.warning("Mock token refresh failed")
        return ApiResult.fail("Invalid refresh token", 401)

    async def get_user_info(self, access_token: str) -> ApiResult[UserInfo]:
        if not self._authorized(access_token):
            return ApiResult.fail("Invalid token", 401)
        return ApiResult[UserInfo].ok(
            UserInfo(id="mock-user-id", email=FAKE_EMAIL, name="Mock User")
        )

    async def get_sites(self, access_token: str) -> ApiResult[list[Site]]:
        logger.debug("Mock get sites")
        if not self._authorized(access_token):
            return ApiResult.fail("Invalid token", 401)
        site = Site(
            id="mock-site-1",
            name="Mock Site 1",
            description="Test site for development",
            timezone="UTC",
            devices=[_mock_device("mock-device-1", "Mock AP 1", _mock_radios())],
        )
        return ApiResult[list[Site]].ok([site])

    async def get_site(self, access_token: str, site_id: str) -> ApiResult[Site]:
        logger.debug("Mock get site: %s", site_id)
        if not self._authorized(access_token):
            return ApiResult.fail("Invalid token", 401)
        return ApiResult[Site].ok(
            Site(
                id=site_id,
                name=f"Mock Site {site_id}",
                description="Test site for development",
                timezone="UTC",
            )
        )

    async def get_devices(self, access_token: str, site_id: str) -> ApiResult[list[Device]]:
        logger.debug("Mock get devices for site: %s", site_id)
        if not self._authorized(access_token):
            return ApiResult.fail("Invalid token", 401)
        return ApiResult[list[Device]].ok([_mock_device("mock-device-1", "Mock AP 1")])

    async def get_device(
        self, access_token: str, site_id: str, device_id: str
    ) -> ApiResult[Device]:
        logger.debug("Mock get device: %s", device_id)
        if not self._authorized(access_token):
            return ApiResult.fail("Invalid token", 401)
        return ApiResult[Device].ok(_mock_device(device_id, f"Mock AP {device_id}"))

    async def get_radios(
        self, access_token: str, site_id: str, device_id: str
    ) -> ApiResult[list[Radio]]:
        logger.debug("Mock get radios for device: %s", device_id)
        if not self._authorized(access_token):
            return ApiResult.fail("Invalid token", 401)
        return ApiResult[list[Radio]].ok(_mock_radios())

    async def control_radio(
        self, access_token: str, site_id: str, request: RadioControlRequest
    ) -> ApiResult[RadioControlResponse]:
        logger.info("Mock control radio: %s, enabled: %s", request.radio_id, request.enabled)
        if not self._authorized(access_token):
            return ApiResult.fail("Invalid token", 401)
        await self._delay(2.0)
        radio = Radio(
            id=request.radio_id,
            band="2.4GHz",
            channel=request.channel if request.channel is not None else 6,
            channel_width=20,
            transmit_power=request.transmit_power if request.transmit_power is not None else 17,
            enabled=request.enabled if request.enabled is not None else True,
            status=RadioStatus.ACTIVE if request.enabled is True else RadioStatus.INACTIVE,
        )
        return ApiResult[RadioControlResponse].ok(
            RadioControlResponse(success=True, message="Radio updated successfully", radio=radio)
        )
