"""Site and device endpoints: read-only topology from the vendor portal."""

import logging

from fastapi import APIRouter, Depends, Query

from radio_api.core.exceptions import NotFoundError, unwrap
from radio_api.core.security import require_credential
from radio_api.dependencies import get_aruba_service
from radio_api.schemas.auth import Credential
from radio_api.schemas.site import Device, Site
from radio_api.services.aruba_service import ArubaService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sites", tags=["Sites"])


@router.get("", response_model=list[Site])
async def list_sites(
    credential: Credential = Depends(require_credential),
    service: ArubaService = Depends(get_aruba_service),
):
    logger.info("Fetching all sites")
    sites = unwrap(await service.get_sites(credential), "FETCH_FAILED", "Failed to fetch sites")
    logger.info("Fetched %d sites", len(sites))
    return sites


@router.get("/{site_id}", response_model=Site)
async def get_site(
    site_id: str,
    include_devices: bool = Query(
        default=True,
        alias="includeDevices",
        description="When true, devices and their radios are fetched and merged in.",
    ),
    credential: Credential = Depends(require_credential),
    service: ArubaService = Depends(get_aruba_service),
):
    logger.info("Fetching site %s (includeDevices: %s)", site_id, include_devices)
    if include_devices:
        return unwrap(
            await service.get_site_with_devices(credential, site_id),
            "FETCH_FAILED", "Failed to fetch site",
        )

    sites = unwrap(await service.get_sites(credential), "FETCH_FAILED", "Failed to fetch site")
    for site in sites:
        if site.id == site_id:
            return site
    raise NotFoundError("Site")


@router.get("/{site_id}/devices", response_model=list[Device])
async def list_devices(
    site_id: str,
    credential: Credential = Depends(require_credential),
    service: ArubaService = Depends(get_aruba_service),
):
    logger.info("Fetching devices for site %s", site_id)
    devices = unwrap(
        await service.get_devices(credential, site_id), "FETCH_FAILED", "Failed to fetch devices"
    )
    logger.info("Fetched %d devices for site %s", len(devices), site_id)
    return devices


@router.get("/{site_id}/devices/{device_id}", response_model=Device)
async def get_device(
    site_id: str,
    device_id: str,
    credential: Credential = Depends(require_credential),
    service: ArubaService = Depends(get_aruba_service),
):
    logger.info("Fetching device %s on site %s", device_id, site_id)
    device = unwrap(
        await service.get_device_with_radios(credential, site_id, device_id),
        "FETCH_FAILED", "Failed to fetch device",
    )
    logger.info("Fetched device %s with %d radios", device_id, len(device.radios))
    return device
