"""Abstract value serializer interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Serializer[E](Protocol):
    """Symmetric entity <-> bytes codec. decode(encode(e)) == e."""

    def encode(self, entity: E) -> bytes:
        """Encode an entity, raising EncodeError on failure."""
        ...

    def decode(self, data: bytes) -> E:
        """Decode stored bytes, raising DecodeError on failure."""
        ...
