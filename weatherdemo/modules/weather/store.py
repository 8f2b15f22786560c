"""In-process key/value store speaking the subset of the Redis API the cache uses."""

from __future__ import annotations

import time
from datetime import timedelta
from typing import Callable


class InMemoryStore:
    """A lightweight TTL store emulating Redis behaviour for tests and local runs.

    Expired entries are dropped lazily when read; nothing sweeps in the
    background.
    """

    def __init__(self, time_func: Callable[[], float] = time.monotonic) -> None:
        self._time_func = time_func
        self._storage: dict[str, tuple[float | None, str]] = {}

    async def get(self, key: str) -> str | None:
        item = self._storage.get(key)
        if item is None:
            return None
        expires_at, value = item
        if expires_at is not None and expires_at <= self._time_func():
            self._storage.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: str, ex: int | float | timedelta | None = None) -> bool:
        expires_at = None
        if ex is not None:
            seconds = ex.total_seconds() if isinstance(ex, timedelta) else ex
            expires_at = self._time_func() + seconds
        self._storage[key] = (expires_at, value)
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self._storage.pop(key, None) is not None:
                removed += 1
        return removed


__all__ = ["InMemoryStore"]
