"""Integration test fixtures: a real Redis on localhost:6379/1."""

from __future__ import annotations

import logging
import socket
import time
from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from redis.asyncio import Redis

# ---------------------------------------------------------------------------
# Service health checks (with retry for CI container start-up)
# ---------------------------------------------------------------------------


def _tcp_reachable(
    host: str,
    port: int,
    timeout: float = 1.0,
    retries: int = 3,
    delay: float = 1.0,
) -> bool:
    """Check if a TCP service is reachable, retrying on failure."""
    for attempt in range(retries):
        try:
            with socket.create_connection((host, port), timeout=timeout):
                return True
        except OSError:
            if attempt < retries - 1:
                time.sleep(delay)
    return False


_redis_up = _tcp_reachable("localhost", 6379)

TEST_REDIS_URL = "redis://localhost:6379/1"


@pytest_asyncio.fixture
async def redis_client() -> AsyncGenerator[Redis, None]:  # type: ignore[type-arg]
    """Function-scoped Redis client on test DB 1, flushed before and after each test."""
    if not _redis_up:
        pytest.skip("Redis not reachable on localhost:6379")

    client: Redis = Redis.from_url(TEST_REDIS_URL)  # type: ignore[type-arg]
    await client.flushdb()
    yield client
    await client.flushdb()
    await client.aclose()


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Save and restore root logger handlers around each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.level = original_level
