"""Shared test fixtures for the shared-package test suite.

Provides a mock Redis client and a settings cache reset so tests can run
without Docker infrastructure.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from shared.config import get_settings


# ---------------------------------------------------------------------------
# Redis mock
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_redis():
    """Mock async Redis client with the operations the cache uses."""
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock()
    redis.delete = AsyncMock(return_value=0)
    redis.ping = AsyncMock(return_value=True)
    return redis


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop the cached Settings so monkeypatched env vars take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
