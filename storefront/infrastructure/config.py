"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Catalog store
    catalog_backend: Literal["sql", "memory"] = "sql"
    database_url: str = "sqlite+aiosqlite:///./storefront.db"
    database_auto_create: bool = False

    # Object store
    storage_backend: Literal["s3", "memory"] = "s3"
    image_bucket: str | None = None
    asset_bucket: str | None = None
    s3_endpoint_url: str | None = None
    aws_region: str | None = None

    # Pre-authorized link lifetimes (seconds)
    upload_link_ttl_seconds: int = 900
    download_link_ttl_seconds: int = 300
    image_link_ttl_seconds: int = 3600

    # Signing key for links minted by the in-memory object store
    link_signing_key: str = "dev-link-signing-key-change-in-production"

    # CORS
    cors_allow_origins: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()


def get_settings() -> Settings:
    """Get application settings.

    Used as a FastAPI dependency so tests can override configuration
    per request.
    """
    return settings
