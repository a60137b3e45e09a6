"""Abstract key-value store interface."""

from __future__ import annotations

from datetime import timedelta
from typing import Protocol, runtime_checkable


@runtime_checkable
class StoreClient(Protocol):
    """Async key-value store used by the read-through cache.

    Implementations raise StoreError (or StoreConnectivityError for
    transport failures) instead of driver-specific exceptions.
    """

    @property
    def address(self) -> str:
        """Human-readable address of the store (host:port)."""
        ...

    async def get(self, key: str) -> bytes | None:
        """Retrieve raw bytes by key, or None on a miss."""
        ...

    async def set(self, key: str, value: bytes, ttl: timedelta) -> None:
        """Store raw bytes with a server-side TTL."""
        ...

    async def delete(self, *keys: str) -> int:
        """Delete keys, returning how many existed."""
        ...

    async def delete_matching(self, pattern: str) -> int:
        """Delete every key matching a glob pattern, returning the count."""
        ...

    async def ping(self) -> None:
        """Probe connectivity."""
        ...

    async def close(self) -> None:
        """Release the underlying connection pool."""
        ...
