"""Typed read-through cache over a StoreClient.

On ``get`` the stored value is decoded and returned; on a miss the loader
is awaited, its result is written back with the configured TTL, and the
result is returned. Miss-fill write-back tolerates connectivity errors so
an unreachable store degrades to calling the loader. Explicit ``set``
never does.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import timedelta
from types import TracebackType
from typing import Self

import structlog

from readthrough_core.constants import DEFAULT_PING_TIMEOUT_SECONDS
from readthrough_core.exceptions import (
    ConfigError,
    InvalidKeyError,
    OperationCancelledError,
    StoreConnectivityError,
    StoreError,
)
from readthrough_core.interfaces.entity import Cacheable
from readthrough_core.interfaces.serializer import Serializer
from readthrough_core.interfaces.store import StoreClient
from readthrough_infra.cache.keys import format_key, namespace_pattern, validate_prefix
from readthrough_infra.cache.serializers import JSONSerializer

logger = structlog.get_logger()

# Writes use PX, so anything shorter truncates to an expiry Redis rejects
MIN_TTL = timedelta(milliseconds=1)

type Loader[E] = Callable[[str], Awaitable[E]]


@asynccontextmanager
async def _deadline(timeout: float | None, operation: str) -> AsyncIterator[None]:
    """Bound the wrapped block by timeout seconds, if given."""
    if timeout is None:
        yield
        return
    scope = asyncio.timeout(timeout)
    try:
        async with scope:
            yield
    except TimeoutError as exc:
        if not scope.expired():
            raise
        msg = f"cache {operation} did not complete within {timeout}s"
        raise OperationCancelledError(msg) from exc


class ReadThroughCache[E: Cacheable]:
    """Read-through cache for one entity type.

    The namespace prefix is read once from ``entity_type.cache_prefix()``
    and every stored key is ``<prefix>:<key>``. Configuration is fixed
    after construction, so one instance can be shared across tasks.

    Concurrent misses on the same key each call the loader and each write
    back; the last write wins.
    """

    def __init__(
        self,
        store: StoreClient,
        entity_type: type[E],
        ttl: timedelta,
        loader: Loader[E],
        *,
        serializer: Serializer[E] | None = None,
        fallback_on_read_error: bool = True,
    ) -> None:
        """Initialize without probing the store.

        Args:
            store: Store client; owned by the cache until aclose().
            entity_type: Entity class, used for the prefix and decoding.
            ttl: Server-side expiry for every written value.
            loader: Awaited with the caller's key on a miss.
            serializer: Value codec; defaults to JSONSerializer(entity_type).
            fallback_on_read_error: Treat store read errors as misses.

        Raises:
            ConfigError: If ttl is under one millisecond or the prefix is invalid.
        """
        if ttl < MIN_TTL:
            msg = f"cache TTL must be positive and at least {MIN_TTL}, got {ttl}"
            raise ConfigError(msg)
        self._prefix = validate_prefix(entity_type.cache_prefix())
        self._store = store
        self._ttl = ttl
        self._loader = loader
        self._serializer: Serializer[E] = serializer or JSONSerializer(entity_type)
        self._fallback_on_read_error = fallback_on_read_error
        self._closed = False

    @classmethod
    async def create(
        cls,
        store: StoreClient,
        entity_type: type[E],
        ttl: timedelta,
        loader: Loader[E],
        *,
        serializer: Serializer[E] | None = None,
        fallback_on_read_error: bool = True,
        ping_timeout: float = DEFAULT_PING_TIMEOUT_SECONDS,
    ) -> Self:
        """Build a cache and fail fast if the store is unreachable.

        The store is closed before any error is raised.

        Raises:
            ConfigError: On invalid arguments, a ping timeout or a rejected ping.
        """
        try:
            cache = cls(
                store,
                entity_type,
                ttl,
                loader,
                serializer=serializer,
                fallback_on_read_error=fallback_on_read_error,
            )
        except BaseException:
            await store.close()
            raise

        try:
            async with asyncio.timeout(ping_timeout):
                await store.ping()
        except (StoreError, TimeoutError) as exc:
            reason = str(exc) or f"ping timed out after {ping_timeout}s"
            logger.warning("cache_connect_failed", address=store.address, error=reason)
            await store.close()
            msg = f"cannot reach store at {store.address}: {reason}"
            raise ConfigError(msg) from exc
        except BaseException:
            await store.close()
            raise

        logger.info(
            "cache_connected",
            address=store.address,
            prefix=cache.prefix,
            ttl_seconds=ttl.total_seconds(),
        )
        return cache

    @property
    def prefix(self) -> str:
        """Namespace captured at construction."""
        return self._prefix

    @property
    def ttl(self) -> timedelta:
        """TTL applied to every write."""
        return self._ttl

    @property
    def address(self) -> str:
        """Address of the underlying store."""
        return self._store.address

    def key_for(self, key: str) -> str:
        """Return the stored key for a caller key."""
        return format_key(self._prefix, key)

    async def get(self, key: str, *, timeout: float | None = None) -> E:
        """Return the cached entity for key, loading and storing it on a miss.

        Loader exceptions propagate unchanged. A stored value that fails to
        decode raises DecodeError and the loader is not called.
        """
        async with _deadline(timeout, "get"):
            return await self._get(key)

    async def set(self, entity: E, *, timeout: float | None = None) -> None:
        """Store entity under its own cache key. Every error is raised."""
        async with _deadline(timeout, "set"):
            await self._set(entity.cache_key(), entity, strict=True)

    async def delete(self, *keys: str, timeout: float | None = None) -> None:
        """Delete keys, attempting all of them.

        Raises:
            ExceptionGroup: Holding one InvalidKeyError or StoreError per
                key that failed.
        """
        async with _deadline(timeout, "delete"):
            errors: list[InvalidKeyError | StoreError] = []
            for key in keys:
                try:
                    await self._store.delete(self.key_for(key))
                except (InvalidKeyError, StoreError) as exc:
                    logger.warning("cache_delete_failed", key=key, error=str(exc))
                    errors.append(exc)
            if errors:
                msg = f"failed to delete {len(errors)} of {len(keys)} cache keys"
                raise ExceptionGroup(msg, errors)

    async def clear(self) -> int:
        """Delete every key in this cache's namespace, returning the count."""
        deleted = await self._store.delete_matching(namespace_pattern(self._prefix))
        logger.info("cache_cleared", prefix=self._prefix, deleted=deleted)
        return deleted

    async def aclose(self) -> None:
        """Release the store client. Must be called at most once."""
        if self._closed:
            msg = f"cache for prefix {self._prefix!r} is already closed"
            raise RuntimeError(msg)
        self._closed = True
        await self._store.close()
        logger.info("cache_closed", address=self._store.address, prefix=self._prefix)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _get(self, key: str) -> E:
        stored_key = self.key_for(key)
        try:
            data = await self._store.get(stored_key)
        except StoreError as exc:
            if not self._fallback_on_read_error:
                raise
            logger.warning("cache_read_failed", key=stored_key, error=str(exc))
            data = None

        if data is not None:
            logger.debug("cache_hit", key=stored_key)
            return self._serializer.decode(data)

        logger.debug("cache_miss", key=stored_key)
        entity = await self._loader(key)
        if entity is None:
            return entity
        await self._set(key, entity, strict=False)
        return entity

    async def _set(self, key: str, entity: E, *, strict: bool) -> None:
        """Encode and write entity under key.

        Encoding errors are always raised. With strict=False, connectivity
        errors from the store are logged and swallowed.
        """
        stored_key = self.key_for(key)
        data = self._serializer.encode(entity)
        try:
            await self._store.set(stored_key, data, self._ttl)
        except StoreConnectivityError as exc:
            if strict:
                raise
            logger.warning("cache_writeback_suppressed", key=stored_key, error=str(exc))
