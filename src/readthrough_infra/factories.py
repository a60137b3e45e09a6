"""Factory functions for building stores and caches from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from readthrough_core.interfaces.entity import Cacheable
from readthrough_infra.cache.read_through import Loader, ReadThroughCache
from readthrough_infra.cache.redis_store import RedisStore

if TYPE_CHECKING:
    from readthrough_core.config.settings import Settings
    from readthrough_core.interfaces.serializer import Serializer


def create_store(settings: Settings) -> RedisStore:
    """Create a RedisStore for ``settings.redis_url``."""
    return RedisStore.from_options(
        settings.redis_options,
        socket_connect_timeout=settings.socket_connect_timeout_seconds,
    )


async def create_cache[E: Cacheable](
    settings: Settings,
    entity_type: type[E],
    loader: Loader[E],
    *,
    serializer: Serializer[E] | None = None,
) -> ReadThroughCache[E]:
    """Create a probed ReadThroughCache using settings for store, TTL and policy.

    Raises:
        ConfigError: If the store cannot be reached within the ping timeout.
    """
    return await ReadThroughCache.create(
        create_store(settings),
        entity_type,
        settings.cache_ttl,
        loader,
        serializer=serializer,
        fallback_on_read_error=settings.fallback_on_read_error,
        ping_timeout=settings.ping_timeout_seconds,
    )
