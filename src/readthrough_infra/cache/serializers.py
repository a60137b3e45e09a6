"""JSON value serializer backed by pydantic TypeAdapter."""

from __future__ import annotations

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from readthrough_core.exceptions import DecodeError, EncodeError


class JSONSerializer[E]:
    """Encode entities as UTF-8 JSON bytes and decode them back.

    Works for pydantic models, dataclasses and TypedDicts: anything
    pydantic can build a TypeAdapter for.
    """

    def __init__(self, entity_type: type[E]) -> None:
        """Initialize with the entity type to validate against on decode."""
        self._entity_type = entity_type
        self._adapter: TypeAdapter[E] = TypeAdapter(entity_type)

    def encode(self, entity: E) -> bytes:
        """Serialize an entity to JSON bytes."""
        try:
            return self._adapter.dump_json(entity)
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            msg = f"cannot encode {self._entity_type.__name__}: {exc}"
            raise EncodeError(msg) from exc

    def decode(self, data: bytes) -> E:
        """Deserialize JSON bytes into an entity."""
        try:
            return self._adapter.validate_json(data)
        except ValidationError as exc:
            msg = f"cannot decode {self._entity_type.__name__}: {exc}"
            raise DecodeError(msg) from exc
