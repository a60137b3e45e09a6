"""Configuration: settings and store URL parsing."""

from readthrough_core.config.redis_url import RedisOptions, parse_redis_url
from readthrough_core.config.settings import Settings

__all__ = [
    "RedisOptions",
    "Settings",
    "parse_redis_url",
]
