"""Shared fixtures: a MockTransport-backed vendor client and a fake VendorClient."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from radio_api.core.response import ApiResult
from radio_api.schemas.auth import LoginRequest, LoginResponse, UserInfo
from radio_api.schemas.site import Device, Radio, RadioControlRequest, RadioControlResponse, Site
from radio_api.services.aruba_client import ArubaApiClient

BASE_URL = "https://portal.test/api"
AUTH_URL = "https://sso.test"


class RecordingTransport:
    """Routes requests to a handler and remembers what was sent."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
async def vendor():
    """Factory: ``client, transport = vendor(handler)``."""
    clients: list[httpx.AsyncClient] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]):
        transport = RecordingTransport(handler)
        http = httpx.AsyncClient(transport=httpx.MockTransport(transport))
        clients.append(http)
        return ArubaApiClient(http, BASE_URL, AUTH_URL), transport

    yield _make
    for http in clients:
        await http.aclose()


class FakeVendorClient:
    """In-memory VendorClient double; set attributes to control each call's result."""

    def __init__(self):
        self.login_result: ApiResult = ApiResult.fail("not configured", 500)
        self.refresh_result: ApiResult = ApiResult.fail("not configured", 500)
        self.user_info_result: ApiResult = ApiResult.fail("not configured", 500)
        self.sites_result: ApiResult = ApiResult.ok([])
        self.site_result: ApiResult = ApiResult.fail("not configured", 500)
        self.devices_result: ApiResult = ApiResult.ok([])
        self.device_result: ApiResult = ApiResult.fail("not configured", 500)
        self.radios_by_device: dict[str, ApiResult] = {}
        self.control_result: ApiResult = ApiResult.fail("not configured", 500)
        self.calls: list[tuple] = []

    async def login(self, request: LoginRequest) -> ApiResult[LoginResponse]:
        self.calls.append(("login", request.email, request.password))
        return self.login_result

    async def refresh_token(self, refresh_token: str) -> ApiResult[LoginResponse]:
        self.calls.append(("refresh_token", refresh_token))
        return self.refresh_result

    async def get_user_info(self, access_token: str) -> ApiResult[UserInfo]:
        self.calls.append(("get_user_info", access_token))
        return self.user_info_result

    async def get_sites(self, access_token: str) -> ApiResult[list[Site]]:
        self.calls.append(("get_sites", access_token))
        return self.sites_result

    async def get_site(self, access_token: str, site_id: str) -> ApiResult[Site]:
        self.calls.append(("get_site", access_token, site_id))
        return self.site_result

    async def get_devices(self, access_token: str, site_id: str) -> ApiResult[list[Device]]:
        self.calls.append(("get_devices", access_token, site_id))
        return self.devices_result

    async def get_device(self, access_token: str, site_id: str, device_id: str) -> ApiResult[Device]:
        self.calls.append(("get_device", access_token, site_id, device_id))
        return self.device_result

    async def get_radios(self, access_token: str, site_id: str, device_id: str) -> ApiResult[list[Radio]]:
        self.calls.append(("get_radios", access_token, site_id, device_id))
        result = self.radios_by_device.get(device_id, ApiResult.ok([]))
        if isinstance(result, Exception):
            raise result
        return result

    async def control_radio(
        self, access_token: str, site_id: str, request: RadioControlRequest
    ) -> ApiResult[RadioControlResponse]:
        self.calls.append(("control_radio", access_token, site_id, request))
        return self.control_result


@pytest.fixture
def fake_client() -> FakeVendorClient:
    return FakeVendorClient()


