"""Public interface re-exports for readthrough_core."""

from readthrough_core.interfaces.entity import Cacheable
from readthrough_core.interfaces.serializer import Serializer
from readthrough_core.interfaces.store import StoreClient

__all__ = [
    "Cacheable",
    "Serializer",
    "StoreClient",
]
