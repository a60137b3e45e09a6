"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from readthrough_infra.cache.read_through import ReadThroughCache
from tests.mocks.mock_factories import User
from tests.mocks.mock_settings import make_settings
from tests.mocks.mock_store import FakeStore, RecordingLoader


@pytest.fixture
def mock_settings() -> MagicMock:
    """Return a MagicMock Settings with sensible defaults."""
    return make_settings()


@pytest.fixture
def store() -> FakeStore:
    """Return an empty in-memory store."""
    return FakeStore()


@pytest.fixture
def loader() -> RecordingLoader[User]:
    """Return a loader producing {2, "Ryan"}."""
    return RecordingLoader(User(id=2, name="Ryan"))


@pytest.fixture
def cache(store: FakeStore, loader: RecordingLoader[User]) -> ReadThroughCache[User]:
    """Return a User cache over the fake store with a one-minute TTL."""
    return ReadThroughCache(store, User, timedelta(minutes=1), loader)


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Save and restore root logger handlers around each test.

    configure_logging() replaces root handlers; stale StreamHandlers would
    otherwise write to streams pytest has already closed.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.level = original_level
