"""Application settings using pydantic-settings."""

from __future__ import annotations

from datetime import timedelta
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from readthrough_core.config.redis_url import RedisOptions, parse_redis_url
from readthrough_core.constants import (
    DEFAULT_PING_TIMEOUT_SECONDS,
    DEFAULT_SOCKET_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_TTL_SECONDS,
)
from readthrough_core.exceptions import ConfigError


class Settings(BaseSettings):
    """Central configuration for readthrough-cache."""

    model_config = SettingsConfigDict(env_prefix="RT_", env_file=".env")

    # --- Store ---
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Store URL: redis[s]://[user[:pass]@]host[:port][/db]",
    )
    socket_connect_timeout_seconds: float = Field(
        default=DEFAULT_SOCKET_CONNECT_TIMEOUT_SECONDS,
        gt=0,
        description="TCP connect timeout for store connections",
    )
    ping_timeout_seconds: float = Field(
        default=DEFAULT_PING_TIMEOUT_SECONDS,
        gt=0,
        description="Deadline for the startup connectivity probe",
    )

    # --- Cache ---
    cache_ttl_seconds: int = Field(
        default=DEFAULT_TTL_SECONDS,
        gt=0,
        description="Server-side TTL applied to every written value",
    )
    fallback_on_read_error: bool = Field(
        default=True,
        description="Treat store read errors as misses and call the loader",
    )

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: 'console' for humans, 'json' for aggregation",
    )

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, value: str) -> str:
        """Reject URLs that parse_redis_url would refuse."""
        try:
            parse_redis_url(value)
        except ConfigError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @property
    def redis_options(self) -> RedisOptions:
        """Parsed connection options for redis_url."""
        return parse_redis_url(self.redis_url)

    @property
    def cache_ttl(self) -> timedelta:
        """Cache TTL as a timedelta."""
        return timedelta(seconds=self.cache_ttl_seconds)
