"""
Application configuration using Pydantic Settings.
Manages all environment variables and settings.
"""
import os
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.schemas.theme import ThemeName

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./photo_albums.db"


class Environment(str, Enum):
    """Application environment modes."""
    DEV = "DEV"
    PRODUCTION = "PRODUCTION"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PHOTO_ALBUMS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Environment = Field(
        default=Environment.DEV,
        description="Application environment: DEV or PRODUCTION"
    )

    # Application
    app_name: str = Field(default="Photo Albums")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    @model_validator(mode='after')
    def set_debug_from_environment(self):
        """Set debug mode based on environment unless DEBUG is given explicitly."""
        if 'PHOTO_ALBUMS_DEBUG' not in os.environ:
            self.debug = self.environment == Environment.DEV
        return self

    # Database (blank value falls back to the local SQLite file)
    database_url: str = Field(default=DEFAULT_DATABASE_URL)

    @field_validator("database_url", mode="before")
    @classmethod
    def coerce_empty_database_url(cls, v: str) -> str:
        if not v or not str(v).strip():
            return DEFAULT_DATABASE_URL
        return v

    # Uploaded binaries, served under /uploads
    uploads_dir: Path = Field(default=Path("public/uploads"))
    uploads_url_prefix: str = Field(default="/uploads")
    max_upload_size: int = Field(
        default=50 * 1024 * 1024,
        description="Maximum upload size in bytes",
    )

    # UI
    default_theme: ThemeName = Field(default=ThemeName.SPACE_BLUE)

    # Remote image proxy
    proxy_timeout_seconds: float = Field(default=10.0)
    proxy_max_attempts: int = Field(default=2)

    # Logging: NDJSON files are written here; blank disables file logging
    log_dir: str = Field(default="")

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Using lru_cache to avoid reading the environment on every request.
    """
    return Settings()
