"""Entity contract for values stored in the cache."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Cacheable(Protocol):
    """An entity that knows its cache key and namespace.

    ``cache_prefix`` is a classmethod so the namespace can be read from the
    type alone, before any instance exists. It must return a constant.
    """

    def cache_key(self) -> str:
        """Return a non-empty key, unique within the prefix."""
        ...

    @classmethod
    def cache_prefix(cls) -> str:
        """Return the constant namespace for this entity type."""
        ...
