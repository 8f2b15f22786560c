"""Configuration management using Pydantic Settings."""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_list(v: object) -> list[str]:
    """Parse a list from either a JSON array string, comma-separated string, or list."""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        v = v.strip()
        if not v:
            return []
        if v.startswith("["):
            return json.loads(v)
        return [item.strip() for item in v.split(",") if item.strip()]
    return list(v)  # type: ignore[arg-type]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = "redis://cache:6379"
    # Seconds; applies to connect and each command round-trip
    redis_socket_timeout: float = 5.0

    # Cache
    # "memory" keeps entries in-process (single replica / local dev only)
    cache_backend: Literal["redis", "memory"] = "redis"
    forecast_cache_ttl_seconds: int = 600
    current_cache_ttl_seconds: int = 300
    # Serve uncached data instead of failing when the store is down
    cache_fail_open: bool = False

    # Web front-end -> API
    weather_api_url: str = "http://weatherapi:8000"
    weather_api_timeout: float = 10.0

    # Stored as str to avoid pydantic-settings JSON parse issues with env vars.
    # Use parse_list() at the point of use.
    cors_origins: str = "http://localhost:5000,https://localhost:5001"

    log_level: str = "info"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
