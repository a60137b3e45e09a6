"""Tests for Settings configuration."""

from __future__ import annotations

import os
from datetime import timedelta
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from readthrough_core.config.settings import Settings


@pytest.mark.unit
class TestSettings:
    """Test Settings validation and defaults."""

    def test_default_settings(self) -> None:
        """Settings loads with no environment and correct defaults."""
        with patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.redis_url == "redis://localhost:6379/0"
        assert s.cache_ttl_seconds == 60
        assert s.ping_timeout_seconds == 5.0
        assert s.fallback_on_read_error is True
        assert s.log_format == "console"

    def test_env_prefix(self) -> None:
        """RT_-prefixed variables override defaults."""
        env = {
            "RT_REDIS_URL": "rediss://cache.example.com:6380/3",
            "RT_CACHE_TTL_SECONDS": "300",
            "RT_FALLBACK_ON_READ_ERROR": "false",
            "RT_LOG_FORMAT": "json",
        }
        with patch.dict(os.environ, env, clear=True):
            s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.redis_options.host == "cache.example.com"
        assert s.redis_options.port == 6380
        assert s.redis_options.db == 3
        assert s.redis_options.ssl is True
        assert s.cache_ttl == timedelta(minutes=5)
        assert s.fallback_on_read_error is False
        assert s.log_format == "json"

    def test_invalid_redis_url_raises(self) -> None:
        """An unparseable redis_url fails validation."""
        with pytest.raises(ValidationError, match="unsupported redis URL scheme"):
            Settings(redis_url="memcached://localhost", _env_file=None)  # type: ignore[call-arg]

    def test_empty_redis_url_raises(self) -> None:
        """An empty redis_url fails validation."""
        with pytest.raises(ValidationError, match="must not be empty"):
            Settings(redis_url="", _env_file=None)  # type: ignore[call-arg]

    @pytest.mark.parametrize("ttl", [0, -5])
    def test_non_positive_ttl_raises(self, ttl: int) -> None:
        """TTL must be strictly positive."""
        with pytest.raises(ValidationError):
            Settings(cache_ttl_seconds=ttl, _env_file=None)  # type: ignore[call-arg]

    def test_invalid_log_format_raises(self) -> None:
        """Only console and json renderers exist."""
        with pytest.raises(ValidationError):
            Settings(log_format="xml", _env_file=None)  # type: ignore[arg-type, call-arg]
