"""Aggregation service: credential building and best-effort enrichment."""

import asyncio
from datetime import datetime, timedelta, timezone

import httpx

from radio_api.core.response import ApiResult
from radio_api.schemas.auth import Credential, LoginResponse
from radio_api.schemas.site import RadioControlRequest, RadioControlResponse, RadioStatus, Site
from radio_api.services.aruba_service import ArubaService
from tests.factories import make_device, make_radio


def _credential() -> Credential:
    return Credential(
        access_token="T1", expires_at=datetime.now(timezone.utc) + timedelta(hours=1)
    )


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

async def test_authenticate_builds_credential_end_to_end(vendor):
    client, _ = vendor(
        lambda request: httpx.Response(
            200,
            json={
                "access_token": "T1",
                "refresh_token": "R1",
                "expires_in": 3600,
                "token_type": "Bearer",
            },
        )
    )
    before = datetime.now(timezone.utc)
    result = await ArubaService(client).authenticate("a@b.com", "secret")

    assert result.success
    credential = result.data
    assert credential.access_token == "T1"
    assert credential.refresh_token == "R1"
    assert credential.token_type == "Bearer"
    lifetime = (credential.expires_at - before).total_seconds()
    assert 3595 <= lifetime <= 3605
    assert not credential.is_expired


async def test_authenticate_failure_passes_through(fake_client):
    fake_client.login_result = ApiResult.fail("Authentication failed: nope", 403)
    result = await ArubaService(fake_client).authenticate("a@b.com", "bad")

    assert not result.success
    assert result.status_code == 403
    assert result.error == "Authentication failed: nope"


async def test_refresh_authentication(fake_client):
    fake_client.refresh_result = ApiResult.ok(
        LoginResponse(access_token="T2", refresh_token="R2", expires_in=60)
    )
    result = await ArubaService(fake_client).refresh_authentication("R1")

    assert result.success
    assert result.data.access_token == "T2"
    assert fake_client.calls == [("refresh_token", "R1")]


async def test_refresh_failure_is_not_retried(fake_client):
    fake_client.refresh_result = ApiResult.fail("Token refresh failed", 401)
    result = await ArubaService(fake_client).refresh_authentication("R1")

    assert not result.success
    assert result.status_code == 401
    assert len(fake_client.calls) == 1


# ---------------------------------------------------------------------------
# Site aggregation
# ---------------------------------------------------------------------------

async def test_site_failure_is_returned_without_fetching_devices(fake_client):
    fake_client.site_result = ApiResult.fail("Failed to get site", 404)
    result = await ArubaService(fake_client).get_site_with_devices(_credential(), "s1")

    assert not result.success
    assert result.status_code == 404
    assert [c[0] for c in fake_client.calls] == ["get_site"]


async def test_device_list_failure_still_returns_site(fake_client):
    fake_client.site_result = ApiResult.ok(Site(id="s1", name="HQ"))
    fake_client.devices_result = ApiResult.fail("Failed to get devices", 500)
    result = await ArubaService(fake_client).get_site_with_devices(_credential(), "s1")

    assert result.success
    assert result.data.id == "s1"
    assert result.data.devices == []


async def test_radios_are_merged_per_device(fake_client):
    fake_client.site_result = ApiResult.ok(Site(id="s1", name="HQ"))
    fake_client.devices_result = ApiResult.ok([make_device("d1"), make_device("d2")])
    fake_client.radios_by_device = {
        "d1": ApiResult.ok([make_radio("r1"), make_radio("r2")]),
        "d2": ApiResult.ok([make_radio("r3")]),
    }
    result = await ArubaService(fake_client).get_site_with_devices(_credential(), "s1")

    assert result.success
    devices = result.data.devices
    assert [d.id for d in devices] == ["d1", "d2"]
    assert [r.id for r in devices[0].radios] == ["r1", "r2"]
    assert [r.id for r in devices[1].radios] == ["r3"]


async def test_one_failed_radio_fetch_only_empties_that_device(fake_client):
    fake_client.site_result = ApiResult.ok(Site(id="s1", name="HQ"))
    fake_client.devices_result = ApiResult.ok(
        [make_device("d1"), make_device("d2"), make_device("d3")]
    )
    fake_client.radios_by_device = {
        "d1": ApiResult.ok([make_radio("r1")]),
        "d2": ApiResult.fail("Failed to get radios", 503),
        "d3": RuntimeError("boom"),
    }
    result = await ArubaService(fake_client).get_site_with_devices(_credential(), "s1")

    assert result.success
    devices = result.data.devices
    assert len(devices) == 3
    assert [r.id for r in devices[0].radios] == ["r1"]
    assert devices[1].radios == []
    assert devices[2].radios == []


async def test_radio_fetches_run_concurrently(fake_client):
    fake_client.site_result = ApiResult.ok(Site(id="s1", name="HQ"))
    fake_client.devices_result = ApiResult.ok([make_device(f"d{i}") for i in range(3)])

    in_flight = 0
    peak = 0

    async def slow_radios(access_token, site_id, device_id):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return ApiResult.ok([make_radio(f"{device_id}-r")])

    fake_client.get_radios = slow_radios
    result = await ArubaService(fake_client).get_site_with_devices(_credential(), "s1")

    assert result.success
    assert peak == 3
    assert [d.radios[0].id for d in result.data.devices] == ["d0-r", "d1-r", "d2-r"]


# ---------------------------------------------------------------------------
# Device aggregation
# ---------------------------------------------------------------------------

async def test_device_with_radios(fake_client):
    fake_client.device_result = ApiResult.ok(make_device("d1"))
    fake_client.radios_by_device = {"d1": ApiResult.ok([make_radio("r1")])}
    result = await ArubaService(fake_client).get_device_with_radios(_credential(), "s1", "d1")

    assert result.success
    assert [r.id for r in result.data.radios] == ["r1"]


async def test_device_failure_is_returned_as_is(fake_client):
    fake_client.device_result = ApiResult.fail("Failed to get device", 404)
    result = await ArubaService(fake_client).get_device_with_radios(_credential(), "s1", "d1")

    assert not result.success
    assert result.status_code == 404
    assert [c[0] for c in fake_client.calls] == ["get_device"]


async def test_device_radio_failure_yields_empty_list(fake_client):
    fake_client.device_result = ApiResult.ok(make_device("d1"))
    fake_client.radios_by_device = {"d1": ApiResult.fail("Failed to get radios", 500)}
    result = await ArubaService(fake_client).get_device_with_radios(_credential(), "s1", "d1")

    assert result.success
    assert result.data.radios == []


# ---------------------------------------------------------------------------
# Radio control
# ---------------------------------------------------------------------------

async def test_toggle_radio_end_to_end(vendor):
    client, transport = vendor(
        lambda request: httpx.Response(
            200, json={"id": "r1", "band": "5GHz", "enabled": False, "status": "disabled"}
        )
    )
    result = await ArubaService(client).toggle_radio(_credential(), "s1", "d1", "r1", False)

    request = transport.requests[-1]
    assert request.method == "PATCH"
    assert request.url.path.endswith("/sites/s1/devices/d1/radios/r1")
    assert transport.last_json() == {"enabled": False}
    assert result.success
    assert result.data.radio.enabled is False
    assert result.data.radio.status is RadioStatus.DISABLED


async def test_update_radio_passes_request_through(fake_client):
    fake_client.control_result = ApiResult.ok(RadioControlResponse(success=True))
    request = RadioControlRequest(device_id="d1", radio_id="r1", channel=11)
    result = await ArubaService(fake_client).update_radio(_credential(), "s1", request)

    assert result.success
    assert fake_client.calls == [("control_radio", "T1", "s1", request)]
