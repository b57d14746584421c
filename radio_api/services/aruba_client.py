"""Aruba Instant On vendor client — one coroutine per portal capability.

Every public method returns an :class:`ApiResult`; no exception crosses this
boundary except task cancellation. Failure status codes:

  - vendor non-2xx   → the vendor's own status code
  - timeout          → 408
  - network failure  → 503
  - unparseable body → 500
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import httpx
from pydantic import BaseModel, Field, ValidationError

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

STATUS_TIMEOUT = 408
STATUS_PARSE_ERROR = 500
STATUS_NETWORK_ERROR = 503


class VendorClient(Protocol):
    """Interface shared by the real portal client and the development stub."""

    async def login(self, request: LoginRequest) -> ApiResult[LoginResponse]: ...

    async def refresh_token(self, refresh_token: str) -> ApiResult[LoginResponse]: ...

    async def get_user_info(self, access_token: str) -> ApiResult[UserInfo]: ...

    async def get_sites(self, access_token: str) -> ApiResult[list[Site]]: ...

    async def get_site(self, access_token: str, site_id: str) -> ApiResult[Site]: ...

    async def get_devices(self, access_token: str, site_id: str) -> ApiResult[list[Device]]: ...

    async def get_device(
        self, access_token: str, site_id: str, device_id: str
    ) -> ApiResult[Device]: ...

    async def get_radios(
        self, access_token: str, site_id: str, device_id: str
    ) -> ApiResult[list[Radio]]: ...

    async def control_radio(
        self, access_token: str, site_id: str, request: RadioControlRequest
    ) -> ApiResult[RadioControlResponse]: ...


# ---------------------------------------------------------------------------
# Vendor wire DTOs (snake_case on auth endpoints, camelCase on device API)
# ---------------------------------------------------------------------------

class _AuthPayload(BaseModel):
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: int = 0
    token_type: Optional[str] = None


class _UserInfoElement(BaseModel):
    id: str
    email: str
    name: Optional[str] = None


class _RadioElement(BaseModel):
    id: str
    band: Optional[str] = None
    channel: int = 0
    channel_width: int = Field(default=0, alias="channelWidth")
    transmit_power: int = Field(default=0, alias="transmitPower")
    enabled: bool = False
    status: Optional[str] = None


class _DeviceElement(BaseModel):
    id: str
    name: str
    mac_address: str = Field(alias="macAddress")
    model: Optional[str] = None
    serial_number: Optional[str] = Field(default=None, alias="serialNumber")
    status: Optional[str] = None
    radios: Optional[list[_RadioElement]] = None


class _SiteElement(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    timezone: Optional[str] = None
    devices: Optional[list[_DeviceElement]] = None


class _Elements(BaseModel):
    elements: Optional[list[dict[str, Any]]] = None


# ---------------------------------------------------------------------------
# Mapping helpers
# ---------------------------------------------------------------------------

def map_device_status(status: Optional[str]) -> DeviceStatus:
    """Normalize a free-text vendor device status. Never raises."""
    value = (status or "").lower()
    if value in ("online", "up"):
        return DeviceStatus.ONLINE
    if value in ("offline", "down"):
        return DeviceStatus.OFFLINE
    if value == "updating":
        return DeviceStatus.UPDATING
    return DeviceStatus.UNKNOWN


def map_radio_status(status: Optional[str]) -> RadioStatus:
    """Normalize a free-text vendor radio status. Never raises."""
    value = (status or "").lower()
    if value in ("active", "up"):
        return RadioStatus.ACTIVE
    if value in ("inactive", "down"):
        return RadioStatus.INACTIVE
    if value == "disabled":
        return RadioStatus.DISABLED
    return RadioStatus.UNKNOWN


def _to_radio(element: _RadioElement) -> Radio:
    return Radio(
        id=element.id,
        band=element.band or "Unknown",
        channel=element.channel,
        channel_width=element.channel_width,
        transmit_power=element.transmit_power,
        enabled=element.enabled,
        status=map_radio_status(element.status),
    )


def _to_device(element: _DeviceElement) -> Device:
    return Device(
        id=element.id,
        name=element.name,
        mac_address=element.mac_address,
        model=element.model or "Unknown",
        serial_number=element.serial_number or "Unknown",
        status=map_device_status(element.status),
        radios=[_to_radio(r) for r in element.radios or []],
    )


def _to_site(element: _SiteElement) -> Site:
    return Site(
        id=element.id,
        name=element.name,
        description=element.description,
        timezone=element.timezone,
        devices=[_to_device(d) for d in element.devices or []],
    )


def build_radio_update_payload(request: RadioControlRequest) -> dict[str, Any]:
    """Vendor PATCH body holding only the fields the caller actually set."""
    payload: dict[str, Any] = {}
    if request.enabled is not None:
        payload["enabled"] = request.enabled
    if request.channel is not None:
        payload["channel"] = request.channel
    if request.transmit_power is not None:
        payload["transmitPower"] = request.transmit_power
    return payload


class _ParseError(Exception):
    """2xx vendor response whose body does not have the expected shape."""


def _json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise _ParseError(f"invalid JSON: {exc}") from exc


def _parse(model: type[BaseModel], data: Any) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise _ParseError(str(exc)) from exc


def _elements(response: httpx.Response, model: type[BaseModel]) -> list:
    body = _json(response)
    if body is None:
        return []
    wrapper = _parse(_Elements, body)
    return [_parse(model, item) for item in wrapper.elements or []]


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class ArubaApiClient:
    """Async client for the Instant On SSO and device-management APIs."""

    def __init__(self, http: httpx.AsyncClient, base_url: str, auth_url: str):
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._auth_url = auth_url.rstrip("/")

    def __repr__(self) -> str:
        return f"<ArubaApiClient base_url={self._base_url}>"

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _send(
        self,
        method: str,
        url: str,
        *,
        access_token: Optional[str] = None,
        payload: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        headers = {"Accept": "application/json"}
        if access_token is not None:
            headers["Authorization"] = f"Bearer {access_token}"
        logger.debug("Aruba request: %s %s", method, url)
        response = await self._http.request(method, url, headers=headers, json=payload)
        logger.debug("%s %s --> %s", method, url, response.status_code)
        return response

    async def _call(self, action: str, operation, *args) -> ApiResult:
        """Run ``operation`` and fold transport and parse faults into an ApiResult."""
        try:
            return await operation(*args)
        except httpx.TimeoutException as exc:
            logger.error("%s timed out: %s", action, exc)
            return ApiResult.fail(f"{action} request timed out. Please try again.", STATUS_TIMEOUT)
        except httpx.RequestError as exc:
            logger.error("%s network error: %s", action, exc)
            return ApiResult.fail(f"Network error: {exc}", STATUS_NETWORK_ERROR)
        except _ParseError as exc:
            logger.error("%s returned an unexpected response: %s", action, exc)
            return ApiResult.fail(f"Invalid {action.lower()} response", STATUS_PARSE_ERROR)
        except Exception as exc:
            logger.exception("%s failed: %s", action, exc)
            return ApiResult.fail(f"{action} error: {exc}", STATUS_PARSE_ERROR)

    @staticmethod
    def _auth_result(body: Any, fallback_refresh: str = "") -> ApiResult[LoginResponse]:
        data = _parse(_AuthPayload, body if body is not None else {})
        if not data.access_token:
            raise _ParseError("missing access_token")
        return ApiResult[LoginResponse].ok(
            LoginResponse(
                access_token=data.access_token,
                refresh_token=data.refresh_token or fallback_refresh,
                expires_in=data.expires_in,
                token_type=data.token_type or "Bearer",
            )
        )

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def login(self, request: LoginRequest) -> ApiResult[LoginResponse]:
        return await self._call("Login", self._login, request)

    async def _login(self, request: LoginRequest) -> ApiResult[LoginResponse]:
        logger.info("Attempting login for user: %s", request.email)
        response = await self._send(
            "POST",
            f"{self._auth_url}/aio/api/v1/mfa/validate/full",
            payload={"username": request.email, "password": request.password},
        )
        if not response.is_success:
            logger.error(
                "Login failed for user %s: status %s, error: %s",
                request.email, response.status_code, response.text[:300],
            )
            return ApiResult.fail(
                f"Authentication failed: {response.text}", response.status_code
            )
        result = self._auth_result(_json(response))
        logger.info("Login successful for user: %s", request.email)
        return result

    async def refresh_token(self, refresh_token: str) -> ApiResult[LoginResponse]:
        return await self._call("Refresh", self._refresh_token, refresh_token)

    async def _refresh_token(self, refresh_token: str) -> ApiResult[LoginResponse]:
        logger.info("Attempting to refresh authentication token")
        response = await self._send(
            "POST",
            f"{self._auth_url}/aio/api/v1/refresh",
            payload={"refresh_token": refresh_token},
        )
        if not response.is_success:
            logger.error("Token refresh failed: status %s", response.status_code)
            return ApiResult.fail("Token refresh failed", response.status_code)
        result = self._auth_result(_json(response), fallback_refresh=refresh_token)
        logger.info("Token refresh successful")
        return result

    async def get_user_info(self, access_token: str) -> ApiResult[UserInfo]:
        return await self._call("User info", self._get_user_info, access_token)

    async def _get_user_info(self, access_token: str) -> ApiResult[UserInfo]:
        response = await self._send("GET", f"{self._base_url}/userinfo", access_token=access_token)
        if not response.is_success:
            return ApiResult.fail("Failed to get user info", response.status_code)
        element = _parse(_UserInfoElement, _json(response))
        return ApiResult[UserInfo].ok(
            UserInfo(id=element.id, email=element.email, name=element.name or element.email)
        )

    # ------------------------------------------------------------------
    # Sites and devices
    # ------------------------------------------------------------------

    async def get_sites(self, access_token: str) -> ApiResult[list[Site]]:
        return await self._call("Sites", self._get_sites, access_token)

    async def _get_sites(self, access_token: str) -> ApiResult[list[Site]]:
        logger.debug("Fetching sites from Aruba API")
        response = await self._send("GET", f"{self._base_url}/sites", access_token=access_token)
        if not response.is_success:
            logger.error("Failed to get sites: status %s", response.status_code)
            return ApiResult.fail("Failed to get sites", response.status_code)
        sites = [_to_site(e) for e in _elements(response, _SiteElement)]
        logger.debug("Fetched %d sites from Aruba API", len(sites))
        return ApiResult[list[Site]].ok(sites)

    async def get_site(self, access_token: str, site_id: str) -> ApiResult[Site]:
        return await self._call("Site", self._get_site, access_token, site_id)

    async def _get_site(self, access_token: str, site_id: str) -> ApiResult[Site]:
        response = await self._send(
            "GET", f"{self._base_url}/sites/{site_id}", access_token=access_token
        )
        if not response.is_success:
            return ApiResult.fail("Failed to get site", response.status_code)
        body = _json(response)
        if body is None:
            return ApiResult.fail("Site not found", 404)
        return ApiResult[Site].ok(_to_site(_parse(_SiteElement, body)))

    async def get_devices(self, access_token: str, site_id: str) -> ApiResult[list[Device]]:
        return await self._call("Devices", self._get_devices, access_token, site_id)

    async def _get_devices(self, access_token: str, site_id: str) -> ApiResult[list[Device]]:
        logger.debug("Fetching devices for site %s", site_id)
        response = await self._send(
            "GET", f"{self._base_url}/sites/{site_id}/devices", access_token=access_token
        )
        if not response.is_success:
            logger.error(
                "Failed to get devices for site %s: status %s", site_id, response.status_code
            )
            return ApiResult.fail("Failed to get devices", response.status_code)
        devices = [_to_device(e) for e in _elements(response, _DeviceElement)]
        logger.debug("Fetched %d devices for site %s", len(devices), site_id)
        return ApiResult[list[Device]].ok(devices)

    async def get_device(
        self, access_token: str, site_id: str, device_id: str
    ) -> ApiResult[Device]:
        return await self._call("Device", self._get_device, access_token, site_id, device_id)

    async def _get_device(
        self, access_token: str, site_id: str, device_id: str
    ) -> ApiResult[Device]:
        response = await self._send(
            "GET",
            f"{self._base_url}/sites/{site_id}/devices/{device_id}",
            access_token=access_token,
        )
        if not response.is_success:
            return ApiResult.fail("Failed to get device", response.status_code)
        body = _json(response)
        if body is None:
            return ApiResult.fail("Device not found", 404)
        return ApiResult[Device].ok(_to_device(_parse(_DeviceElement, body)))

    # ------------------------------------------------------------------
    # Radios
    # ------------------------------------------------------------------

    async def get_radios(
        self, access_token: str, site_id: str, device_id: str
    ) -> ApiResult[list[Radio]]:
        return await self._call("Radios", self._get_radios, access_token, site_id, device_id)

    async def _get_radios(
        self, access_token: str, site_id: str, device_id: str
    ) -> ApiResult[list[Radio]]:
        response = await self._send(
            "GET",
            f"{self._base_url}/sites/{site_id}/devices/{device_id}/radios",
            access_token=access_token,
        )
        if not response.is_success:
            return ApiResult.fail("Failed to get radios", response.status_code)
        radios = [_to_radio(e) for e in _elements(response, _RadioElement)]
        return ApiResult[list[Radio]].ok(radios)

    async def control_radio(
        self, access_token: str, site_id: str, request: RadioControlRequest
    ) -> ApiResult[RadioControlResponse]:
        return await self._call("Radio control", self._control_radio, access_token, site_id, request)

    async def _control_radio(
        self, access_token: str, site_id: str, request: RadioControlRequest
    ) -> ApiResult[RadioControlResponse]:
        payload = build_radio_update_payload(request)
        logger.debug("Radio %s on device %s update: %s", request.radio_id, request.device_id, payload)
        response = await self._send(
            "PATCH",
            f"{self._base_url}/sites/{site_id}/devices/{request.device_id}/radios/{request.radio_id}",
            access_token=access_token,
            payload=payload,
        )
        if not response.is_success:
            logger.error(
                "Radio %s update failed: status %s", request.radio_id, response.status_code
            )
            return ApiResult.fail(
                f"Failed to control radio: {response.text}", response.status_code
            )
        body = _json(response) if response.content else None
        radio = _to_radio(_parse(_RadioElement, body)) if body is not None else None
        return ApiResult[RadioControlResponse].ok(
            RadioControlResponse(success=True, message="Radio updated successfully", radio=radio)
        )
