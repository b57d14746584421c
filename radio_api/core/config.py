
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Instant On Radio API"
    app_env: str = "development"
    app_version: str = "1.0.0"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")

    # Aruba Instant On cloud portal
    use_mock_client: bool = Field(default=False, alias="USE_MOCK_ARUBA_CLIENT")
    aruba_api_base_url: str = Field(
        default="https://nb.portal.arubainstanton.com/api", alias="ARUBA_API_BASE_URL",
    )
    aruba_auth_url: str = Field(
        default="https://sso.arubainstanton.com", alias="ARUBA_AUTH_URL",
    )
    vendor_timeout_seconds: float = Field(default=30.0, alias="VENDOR_TIMEOUT_SECONDS")
    mock_latency_seconds: float = Field(
        default=0.0, alias="MOCK_LATENCY_SECONDS",
    )  # simulated vendor latency for the stub client

    # Server-side token persistence (off by default; the BFF is stateless)
    token_store_backend: str = Field(
        default="memory", alias="TOKEN_STORE_BACKEND",
    )  # "memory" | "database"
    persist_tokens: bool = Field(default=False, alias="PERSIST_TOKENS")
    database_url: str = Field(
        default="sqlite+aiosqlite:///./radio_api.db",
        alias="DATABASE_URL",
    )

    # In-memory log buffer served by /api/app/logs
    log_buffer_size: int = Field(default=500, alias="LOG_BUFFER_SIZE")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

settings = Settings()
