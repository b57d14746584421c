"""FastAPI dependencies resolving the per-app singletons built in the lifespan."""


from fastapi import Request

from radio_api.services.aruba_client import VendorClient
from radio_api.services.aruba_service import ArubaService
from radio_api.services.log_collector import LogCollector
from radio_api.services.token_store import TokenStore


def get_vendor_client(request: Request) -> VendorClient:
    return request.app.state.vendor_client


def get_aruba_service(request: Request) -> ArubaService:
    """A fresh service per request over the shared vendor client."""
    return ArubaService(get_vendor_client(request))


def get_token_store(request: Request) -> TokenStore:
    return request.app.state.token_store


def get_log_collector(request: Request) -> LogCollector:
    return request.app.state.log_collector
