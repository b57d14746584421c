"""Instant On Radio API — FastAPI application factory."""


import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from radio_api.core.config import settings
from radio_api.core.exceptions import register_exception_handlers
from radio_api.db.base import build_engine, build_session_factory
from radio_api.middleware.request_logging import RequestLoggingMiddleware
from radio_api.routers.app_info import router as app_info_router
from radio_api.routers.auth import router as auth_router
from radio_api.routers.radios import router as radios_router
from radio_api.routers.sites import router as sites_router
from radio_api.schemas.common import HealthResponse
from radio_api.services.aruba_client import ArubaApiClient
from radio_api.services.log_collector import LogCollector
from radio_api.services.mock_client import MockArubaApiClient
from radio_api.services.token_store import DatabaseTokenStore, InMemoryTokenStore

logger = logging.getLogger(__name__)


def _configure_logging(collector: LogCollector) -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.is_development else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    logging.getLogger().addHandler(collector)
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the vendor client and token store; close them on shutdown."""
    http: httpx.AsyncClient | None = None
    engine = None

    if settings.use_mock_client:
        logger.warning("Using mock Aruba API client - no vendor calls will be made")
        app.state.vendor_client = MockArubaApiClient(latency=settings.mock_latency_seconds)
    else:
        http = httpx.AsyncClient(
            timeout=settings.vendor_timeout_seconds,
            headers={"Accept": "application/json"},
        )
        app.state.vendor_client = ArubaApiClient(
            http, settings.aruba_api_base_url, settings.aruba_auth_url
        )

    try:
        if settings.token_store_backend == "database":
            engine = build_engine()
            app.state.token_store = DatabaseTokenStore(build_session_factory(engine))
        else:
            app.state.token_store = InMemoryTokenStore()
        yield
    finally:
        if http is not None:
            await http.aclose()
        if engine is not None:
            await engine.dispose()


def create_app() -> FastAPI:
    collector = LogCollector(capacity=settings.log_buffer_size)
    _configure_logging(collector)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.log_collector = collector

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Request logging ---
    app.add_middleware(RequestLoggingMiddleware)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- API routes (/api/*) ---
    app.include_router(auth_router, prefix="/api")
    app.include_router(sites_router, prefix="/api")
    app.include_router(radios_router, prefix="/api")
    app.include_router(app_info_router, prefix="/api")

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(app=settings.app_name, env=settings.app_env, version=settings.app_version)

    return app


app = create_app()
