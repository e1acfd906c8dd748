"""
Wrike Bridge Settings.

Configuration is read from environment variables prefixed with WRIKE_
(or a local .env file):

    WRIKE_API_BASE_URL   Wrike API root (default https://www.wrike.com/api/v4)
    WRIKE_SECRETS_PATH   File used by the server's secret storage
    WRIKE_LOG_LEVEL      Logging level for the server (default INFO)

The access token itself is never configured here; it is entered through
the "set token" command and kept in secret storage.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wrike_bridge.constants import API_BASE_URL


class Settings(BaseSettings):
    """Runtime settings for the Wrike bridge server."""

    model_config = SettingsConfigDict(
        env_prefix="WRIKE_",
        env_file=".env",
        extra="ignore",
    )

    api_base_url: str = Field(default=API_BASE_URL, description="Wrike API root URL")
    secrets_path: Path = Field(
        default=Path("~/.config/wrike-bridge/secrets.json"),
        description="Location of the JSON secret store",
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("secrets_path")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        return v.upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings()
