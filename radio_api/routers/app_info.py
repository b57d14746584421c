"""Diagnostics endpoints — build version and the in-memory log buffer."""

from fastapi import APIRouter, Depends, Query

from radio_api.core.config import settings
from radio_api.dependencies import get_log_collector
from radio_api.schemas.app_info import LogEntry, VersionResponse
from radio_api.services.log_collector import LogCollector

router = APIRouter(prefix="/app", tags=["App"])


@router.get("/version", response_model=VersionResponse)
async def version():
    return VersionResponse(version=settings.app_version, environment=settings.app_env)


@router.get("/logs", response_model=list[LogEntry])
async def logs(
    count: int = Query(default=100, ge=0, description="Most recent entries to return"),
    collector: LogCollector = Depends(get_log_collector),
):
    return collector.recent(min(count, collector.capacity))
