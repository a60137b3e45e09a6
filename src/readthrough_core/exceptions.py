"""Custom exception hierarchy for readthrough-cache."""

from __future__ import annotations


class ReadThroughError(Exception):
    """Base exception for all readthrough-cache errors."""


class ConfigError(ReadThroughError):
    """Raised for an invalid URL, TTL or prefix, or a failed startup ping."""


class InvalidKeyError(ReadThroughError):
    """Raised when an entity produces an empty cache key."""


class SerializationError(ReadThroughError):
    """Base class for value encoding/decoding failures."""


class EncodeError(SerializationError):
    """Raised when an entity cannot be encoded for storage."""


class DecodeError(SerializationError):
    """Raised when stored bytes cannot be decoded into an entity."""


class StoreError(ReadThroughError):
    """Raised when the store rejects an operation (auth, OOM, wrong type)."""


class StoreConnectivityError(StoreError):
    """Raised on transport-level failures talking to the store.

    Unresolvable host, refused connection, connect/IO timeout and TLS
    handshake failures land here. Miss-fill write-back tolerates these.
    """


class OperationCancelledError(ReadThroughError):
    """Raised when a per-call timeout elapses before the operation completes."""
