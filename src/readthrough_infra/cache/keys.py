"""Stored-key layout: ``<prefix>:<key>``.

Prefixes must not contain KEY_SEPARATOR so the namespace boundary stays
unambiguous. Caller keys are used verbatim and never escaped.
"""

from __future__ import annotations

from readthrough_core.constants import KEY_SEPARATOR
from readthrough_core.exceptions import ConfigError, InvalidKeyError

_GLOB_SPECIAL = frozenset("*?[]\\")


def validate_prefix(prefix: str) -> str:
    """Return prefix unchanged if it is usable as a namespace.

    Raises:
        ConfigError: If prefix is empty or contains KEY_SEPARATOR.
    """
    if not prefix:
        msg = "cache prefix must not be empty"
        raise ConfigError(msg)
    if KEY_SEPARATOR in prefix:
        msg = f"cache prefix {prefix!r} must not contain separator {KEY_SEPARATOR!r}"
        raise ConfigError(msg)
    return prefix


def format_key(prefix: str, key: str) -> str:
    """Build the stored key for a caller key.

    Raises:
        InvalidKeyError: If key is empty.
    """
    if not key:
        msg = f"cache key must not be empty (prefix {prefix!r})"
        raise InvalidKeyError(msg)
    return f"{prefix}{KEY_SEPARATOR}{key}"


def namespace_pattern(prefix: str) -> str:
    """SCAN MATCH pattern covering every key under prefix."""
    escaped = "".join(f"\\{ch}" if ch in _GLOB_SPECIAL else ch for ch in prefix)
    return f"{escaped}{KEY_SEPARATOR}*"
