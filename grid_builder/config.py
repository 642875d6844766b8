from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent  # grid-builder/


class Settings(BaseSettings):
    """Application settings with validation.

    Every field has a local-development default, so the app starts without a
    .env file. Values are read from environment variables or .env.
    """

    # API server settings
    api_host: str = Field(default="127.0.0.1", min_length=1, description="API server host (e.g., '0.0.0.0')")
    api_port: int = Field(ge=1, le=65535, default=8000, description="API server port")

    # Storage endpoint consumed by the grid builder views
    api_base_url: str = Field(
        default="http://127.0.0.1:8000",
        description="Base URL of the storage endpoint (products, templates, grids)",
    )
    http_timeout_seconds: float = Field(default=10.0, gt=0, description="Timeout for storage endpoint calls")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: str = Field(default="logs", min_length=1, description="Directory for rotating JSON logs")

    # Rate limiting
    rate_limit_default: str = Field(default="60/minute", description="Default slowapi limit per client IP")

    # Product query cache policy
    products_query_enabled: bool = Field(default=True, description="Fetch products at all")
    products_stale_seconds: int = Field(default=0, ge=0, description="Cache window for product lists, 0 disables")
    products_retry_count: int = Field(default=1, ge=0, le=5, description="Retries after a failed product fetch")

    # Workspaces
    max_workspaces: int = Field(default=100, ge=1, description="Live grid workspaces kept before the oldest is evicted")

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("api_host", mode="after")
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        """Ensure api_host is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("api_host cannot be empty")
        return v

    @field_validator("api_base_url", mode="after")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Ensure the base URL is http(s) and has no trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_base_url must be a valid http:// or https:// URL")
        return v.rstrip("/")

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return v


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    Returns:
        Cached Settings instance

    Example:
        @app.get("/")
        async def route(settings: Settings = Depends(get_settings)):
            return {"base_url": settings.api_base_url}
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
