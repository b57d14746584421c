"""Site / Device / Radio topology schemas and radio-control DTOs."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field

from radio_api.schemas.common import CamelModel


class DeviceStatus(str, Enum):
    ONLINE = "Online"
    OFFLINE = "Offline"
    UPDATING = "Updating"
    UNKNOWN = "Unknown"


class RadioStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    DISABLED = "Disabled"
    UNKNOWN = "Unknown"


class Radio(CamelModel):
    id: str
    band: str = "Unknown"  # free text, e.g. "2.4GHz"
    channel: int = 0
    channel_width: int = 0
    transmit_power: int = 0  # dBm
    enabled: bool = False
    status: RadioStatus = RadioStatus.UNKNOWN


class Device(CamelModel):
    id: str
    name: str
    mac_address: str
    model: str = "Unknown"
    serial_number: str = "Unknown"
    status: DeviceStatus = DeviceStatus.UNKNOWN
    radios: list[Radio] = Field(default_factory=list)


class Site(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    timezone: Optional[str] = None
    devices: list[Device] = Field(default_factory=list)


class RadioControlRequest(CamelModel):
    """Partial radio update. Unset fields are left out of the vendor payload."""

    device_id: str
    radio_id: str
    enabled: Optional[bool] = None
    channel: Optional[int] = None
    transmit_power: Optional[int] = None


class RadioControlResponse(CamelModel):
    success: bool
    message: Optional[str] = None
    radio: Optional[Radio] = None


class ToggleRadioRequest(CamelModel):
    enabled: bool


class UpdateRadioRequest(CamelModel):
    enabled: Optional[bool] = None
    channel: Optional[int] = None
    transmit_power: Optional[int] = None
