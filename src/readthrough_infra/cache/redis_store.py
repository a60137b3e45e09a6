"""Redis-backed implementation of StoreClient."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import timedelta

import structlog
from redis import exceptions as redis_exceptions
from redis.asyncio import Redis

from readthrough_core.config.redis_url import RedisOptions
from readthrough_core.constants import (
    CLEAR_BATCH_SIZE,
    DEFAULT_SOCKET_CONNECT_TIMEOUT_SECONDS,
)
from readthrough_core.exceptions import StoreConnectivityError, StoreError

logger = structlog.get_logger()

# Resolver messages that mark DNS failures when no typed error survives
_CONNECTIVITY_MARKERS = (
    "no such host",
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
)

# redis-py derives these from its ConnectionError, but they are rejections
_REJECTION_ERRORS: tuple[type[BaseException], ...] = (
    redis_exceptions.AuthenticationError,
    redis_exceptions.AuthorizationError,
)

# socket.gaierror, ssl.SSLError, ConnectionRefusedError and TimeoutError are all OSError
_TRANSPORT_ERRORS: tuple[type[BaseException], ...] = (
    redis_exceptions.ConnectionError,
    redis_exceptions.TimeoutError,
    OSError,
)


def is_connectivity_error(exc: BaseException) -> bool:
    """Return True if exc is a transport failure the caller cannot fix.

    Walks the ``__cause__``/``__context__`` chain so that driver errors
    wrapping a socket or resolver failure are recognised.
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, _REJECTION_ERRORS):
            return False
        if isinstance(current, _TRANSPORT_ERRORS):
            return True
        message = str(current).lower()
        if any(marker in message for marker in _CONNECTIVITY_MARKERS):
            return True
        if isinstance(current, redis_exceptions.RedisError):
            return False
        current = current.__cause__ or current.__context__
    return False


def classify_store_error(exc: BaseException) -> StoreError:
    """Map a driver/OS error onto StoreConnectivityError or StoreError."""
    if is_connectivity_error(exc):
        return StoreConnectivityError(str(exc) or type(exc).__name__)
    return StoreError(str(exc) or type(exc).__name__)


@contextmanager
def _translate_errors(operation: str, key: str) -> Iterator[None]:
    """Re-raise driver errors from the wrapped block as StoreError."""
    try:
        yield
    except (redis_exceptions.RedisError, OSError) as exc:
        error = classify_store_error(exc)
        logger.debug(
            "store_operation_failed",
            operation=operation,
            key=key,
            error_type=type(error).__name__,
            error=str(exc),
        )
        raise error from exc


class RedisStore:
    """StoreClient backed by a redis-py asyncio client."""

    def __init__(self, redis: Redis, address: str | None = None) -> None:  # type: ignore[type-arg]
        """Initialize with a redis-py asyncio client."""
        self._redis = redis
        self._address = address or _describe_address(redis)

    @classmethod
    def from_options(
        cls,
        options: RedisOptions,
        *,
        socket_connect_timeout: float = DEFAULT_SOCKET_CONNECT_TIMEOUT_SECONDS,
    ) -> RedisStore:
        """Build a pooled client from parsed connection options."""
        client = Redis(
            host=options.host,
            port=options.port,
            db=options.db,
            username=options.username,
            password=options.password.get_secret_value() if options.password else None,
            ssl=options.ssl,
            socket_connect_timeout=socket_connect_timeout,
            socket_keepalive=True,
        )
        return cls(client, address=options.address)

    @property
    def address(self) -> str:
        """Return the ``host:port`` this store talks to."""
        return self._address

    async def get(self, key: str) -> bytes | None:
        """Retrieve raw bytes by key, or None on a miss."""
        with _translate_errors("get", key):
            value = await self._redis.get(key)
        if value is None:
            return None
        if isinstance(value, str):
            return value.encode("utf-8")
        return bytes(value)

    async def set(self, key: str, value: bytes, ttl: timedelta) -> None:
        """Store a value with a millisecond-precision TTL (SET ... PX)."""
        with _translate_errors("set", key):
            await self._redis.set(name=key, value=value, px=ttl)

    async def delete(self, *keys: str) -> int:
        """Delete keys from the store."""
        if not keys:
            return 0
        with _translate_errors("delete", ",".join(keys)):
            count = await self._redis.delete(*keys)
        return int(count or 0)

    async def delete_matching(self, pattern: str) -> int:
        """Delete all keys matching pattern using SCAN + batched UNLINK."""
        deleted = 0
        with _translate_errors("delete_matching", pattern):
            chunk: list[str | bytes] = []
            async for key in self._redis.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= CLEAR_BATCH_SIZE:
                    deleted += int(await self._redis.unlink(*chunk) or 0)
                    chunk = []
            if chunk:
                deleted += int(await self._redis.unlink(*chunk) or 0)
        return deleted

    async def ping(self) -> None:
        """Probe connectivity with PING."""
        with _translate_errors("ping", ""):
            await self._redis.ping()

    async def close(self) -> None:
        """Close the client and its connection pool."""
        await self._redis.aclose()


def _describe_address(redis: Redis) -> str:  # type: ignore[type-arg]
    """Derive ``host:port`` from the client's pool configuration."""
    kwargs = redis.connection_pool.connection_kwargs
    return f"{kwargs.get('host', 'localhost')}:{kwargs.get('port', 6379)}"
