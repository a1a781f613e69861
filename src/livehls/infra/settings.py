"""
Application settings for livehls.

This module defines playlist defaults and logging options using Pydantic BaseSettings.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings using Pydantic BaseSettings."""

    # Playlist defaults
    version: int = Field(default=3, ge=1, alias="LIVEHLS_VERSION")
    window_size: int = Field(default=0, ge=0, alias="LIVEHLS_WINDOW_SIZE")  # seconds, 0 = unbounded
    allow_cache: bool = Field(default=True, alias="LIVEHLS_ALLOW_CACHE")
    chunked: bool = Field(default=True, alias="LIVEHLS_CHUNKED")
    base_url: str = Field(default="", alias="LIVEHLS_BASE_URL")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=True, alias="LOG_JSON")
    env: str = Field(default="dev", alias="ENV")  # dev|prod|test

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )


def _resolve_env_file() -> str | None:
    # 1) Explicit override
    explicit = os.getenv("LIVEHLS_ENV_FILE")
    if explicit and Path(explicit).is_file():
        return explicit

    # 2) CWD .env
    cwd_env = Path.cwd() / ".env"
    if cwd_env.is_file():
        return str(cwd_env)
    return None


def load_settings() -> Settings:
    """Build a fresh Settings instance from the environment and the nearest .env file."""
    env_file = _resolve_env_file()
    return Settings(_env_file=env_file) if env_file else Settings()  # type: ignore[call-arg]


# Global settings instance
settings = load_settings()
