"""Tests for application settings."""

from unittest.mock import patch

from storefront.infrastructure.config import Settings


class TestSettings:
    """Tests for Settings configuration."""

    def test_default_settings(self) -> None:
        """Test default settings values."""
        with patch.dict("os.environ", {}, clear=True):
            settings = Settings(_env_file=None)
            assert settings.catalog_backend == "sql"
            assert settings.database_url == "sqlite+aiosqlite:///./storefront.db"
            assert settings.storage_backend == "s3"
            assert settings.image_bucket is None
            assert settings.asset_bucket is None
            assert settings.upload_link_ttl_seconds == 900
            assert settings.download_link_ttl_seconds == 300
            assert settings.cors_allow_origins == ["*"]
            assert settings.log_level == "INFO"

    def test_settings_from_env(self) -> None:
        """Test settings from environment variables."""
        env_vars = {
            "IMAGE_BUCKET": "shop-images",
            "ASSET_BUCKET": "shop-assets",
            "STORAGE_BACKEND": "memory",
            "DOWNLOAD_LINK_TTL_SECONDS": "60",
            "CORS_ALLOW_ORIGINS": '["https://shop.example.com"]',
            "LOG_LEVEL": "DEBUG",
        }
        with patch.dict("os.environ", env_vars, clear=False):
            settings = Settings(_env_file=None)
            assert settings.image_bucket == "shop-images"
            assert settings.asset_bucket == "shop-assets"
            assert settings.storage_backend == "memory"
            assert settings.download_link_ttl_seconds == 60
            assert settings.cors_allow_origins == ["https://shop.example.com"]
            assert settings.log_level == "DEBUG"
