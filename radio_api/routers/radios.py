"""Radio endpoints: list, toggle and tune the radios of one access point."""

import logging

from fastapi import APIRouter, Depends

from radio_api.core.exceptions import unwrap
from radio_api.core.security import require_credential
from radio_api.dependencies import get_aruba_service
from radio_api.schemas.auth import Credential
from radio_api.schemas.site import (
    Radio,
    RadioControlRequest,
    RadioControlResponse,
    ToggleRadioRequest,
    UpdateRadioRequest,
)
from radio_api.services.aruba_service import ArubaService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sites/{site_id}/devices/{device_id}/radios", tags=["Radios"])


@router.get("", response_model=list[Radio])
async def list_radios(
    site_id: str,
    device_id: str,
    credential: Credential = Depends(require_credential),
    service: ArubaService = Depends(get_aruba_service),
):
    logger.info("Fetching radios for device %s on site %s", device_id, site_id)
    device = unwrap(
        await service.get_device_with_radios(credential, site_id, device_id),
        "FETCH_FAILED", "Failed to fetch radios",
    )
    return device.radios


@router.post("/{radio_id}/toggle", response_model=RadioControlResponse)
async def toggle_radio(
    site_id: str,
    device_id: str,
    radio_id: str,
    body: ToggleRadioRequest,
    credential: Credential = Depends(require_credential),
    service: ArubaService = Depends(get_aruba_service),
):
    logger.info("Toggling radio %s on device %s to %s", radio_id, device_id, body.enabled)
    result = await service.toggle_radio(credential, site_id, device_id, radio_id, body.enabled)
    return unwrap(result, "TOGGLE_FAILED", "Failed to toggle radio")


@router.patch("/{radio_id}", response_model=RadioControlResponse)
async def update_radio(
    site_id: str,
    device_id: str,
    radio_id: str,
    body: UpdateRadioRequest,
    credential: Credential = Depends(require_credential),
    service: ArubaService = Depends(get_aruba_service),
):
    """Partial update: only fields present in the body are sent to the vendor."""
    logger.info(
        "Updating radio %s on device %s (enabled: %s, channel: %s, power: %s)",
        radio_id, device_id, body.enabled, body.channel, body.transmit_power,
    )
    request = RadioControlRequest(
        device_id=device_id,
        radio_id=radio_id,
        enabled=body.enabled,
        channel=body.channel,
        transmit_power=body.transmit_power,
    )
    result = await service.update_radio(credential, site_id, request)
    return unwrap(result, "UPDATE_FAILED", "Failed to update radio")
