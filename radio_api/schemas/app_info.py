"""Schemas for the /api/app/* diagnostics endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from radio_api.schemas.common import CamelModel


class VersionResponse(CamelModel):
    version: str
    environment: str


class LogEntry(CamelModel):
    timestamp: datetime
    level: str
    message: str
    exception: Optional[str] = None
