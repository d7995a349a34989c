"""
Aspas - Configuration and settings.

Everything is optional with sensible local defaults, so the app runs
without a .env file.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AspasSettings(BaseSettings):
    """
    Application settings.

    Read from environment variables (case-insensitive) and an optional .env.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    aspas_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Local profile store (SQLite file on-device)
    aspas_db_path: str = "aspas.db"

    # JPEG compression quality for stored profile pictures
    profile_picture_quality: float = Field(default=0.8, gt=0.0, le=1.0)

    # Clear phone/name/picture after a successful finish
    reset_on_finish: bool = True

    @property
    def is_development(self) -> bool:
        return self.aspas_env == "development"

    @property
    def is_production(self) -> bool:
        return self.aspas_env == "production"


@lru_cache
def get_settings() -> AspasSettings:
    """Get cached settings instance."""
    return AspasSettings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: AspasSettings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
