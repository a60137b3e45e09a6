"""Shared constants for readthrough-cache."""

from __future__ import annotations

# Separates the namespace prefix from the caller key: "<prefix>:<key>"
KEY_SEPARATOR = ":"

# Cache defaults
DEFAULT_TTL_SECONDS = 60
DEFAULT_PING_TIMEOUT_SECONDS = 5.0
DEFAULT_SOCKET_CONNECT_TIMEOUT_SECONDS = 5.0

# Redis URL defaults
DEFAULT_REDIS_PORT = 6379
DEFAULT_REDIS_DB = 0
REDIS_URL_SCHEMES = ("redis", "rediss")

# SCAN/UNLINK batch size for namespace invalidation
CLEAR_BATCH_SIZE = 500
