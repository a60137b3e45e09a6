"""Read-through cache: adapter, Redis store, serializer and key layout."""

from readthrough_infra.cache.read_through import Loader, ReadThroughCache
from readthrough_infra.cache.redis_store import RedisStore, classify_store_error
from readthrough_infra.cache.serializers import JSONSerializer

__all__ = [
    "JSONSerializer",
    "Loader",
    "ReadThroughCache",
    "RedisStore",
    "classify_store_error",
]
