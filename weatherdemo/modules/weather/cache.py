"""Typed JSON cache over a Redis-compatible key/value store."""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import Any, Awaitable, Protocol, TypeVar

import structlog
from pydantic import TypeAdapter
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError
from redis.exceptions import TimeoutError as RedisTimeoutError

from modules.weather.errors import InvalidArgumentError, StoreUnavailableError

logger = structlog.get_logger()

T = TypeVar("T")

# Builtin ConnectionError/TimeoutError are covered by OSError
_STORE_ERRORS = (RedisConnectionError, RedisTimeoutError, OSError)

_ANY = TypeAdapter(Any)


class KeyValueStore(Protocol):
    """The slice of ``redis.asyncio.Redis`` the cache relies on."""

    async def get(self, key: str) -> str | bytes | None: ...

    async def set(self, key: str, value: str, ex: timedelta | None = None) -> Any: ...

    async def delete(self, *keys: str) -> int: ...


@lru_cache(maxsize=None)
def _adapter(value_type: Any) -> TypeAdapter:
    return TypeAdapter(value_type)


def _require_key(key: str) -> None:
    if not key:
        raise InvalidArgumentError("Key cannot be None or empty")


class CacheService:
    """Cache-aside building block: typed get/set/remove/exists keyed by string.

    Values are stored as camelCase JSON.  A payload that no longer decodes into
    the requested type is treated as corrupt: it is deleted and reported as a
    miss.  Store connectivity failures surface as ``StoreUnavailableError``.
    """

    def __init__(self, store: KeyValueStore):
        if store is None:
            raise InvalidArgumentError("store is required")
        self._store = store

    async def get(self, key: str, value_type: type[T] | Any) -> T | None:
        """Return the cached value decoded as ``value_type``, or None on miss/expiry/corruption."""
        _require_key(key)

        raw = await self._read("get", key)
        if not raw:
            logger.debug("cache_miss", key=key)
            return None

        try:
            value = _adapter(value_type).validate_json(raw)
        except ValueError as e:
            logger.warning("cache_decode_failed", key=key, error=str(e))
            await self.remove(key)
            return None

        logger.debug("cache_hit", key=key)
        return value

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Store ``value`` under ``key``, expiring after ``ttl`` when given."""
        _require_key(key)
        if value is None:
            raise InvalidArgumentError("Value cannot be None")
        if ttl is not None and ttl <= timedelta(0):
            raise InvalidArgumentError(f"TTL must be positive, got {ttl}")

        payload = _ANY.dump_json(value, by_alias=True).decode("utf-8")
        await self._run("set", key, self._store.set(key, payload, ex=ttl))
        logger.debug("cache_set", key=key, ttl=ttl.total_seconds() if ttl else None)

    async def remove(self, key: str) -> None:
        """Delete ``key``; absent keys are not an error."""
        _require_key(key)
        await self._run("remove", key, self._store.delete(key))
        logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        """True when a non-expired payload is stored, whether or not it decodes."""
        _require_key(key)
        raw = await self._read("exists", key)
        return bool(raw)

    async def _read(self, op: str, key: str) -> str | bytes | None:
        # A key holding a non-string Redis type is not ours; report a miss and leave it
        try:
            return await self._run(op, key, self._store.get(key))
        except ResponseError as e:
            if not str(e).startswith("WRONGTYPE"):
                raise
            logger.warning("cache_wrong_type", op=op, key=key, error=str(e))
            return None

    @staticmethod
    async def _run(op: str, key: str, pending: Awaitable[T]) -> T:
        try:
            return await pending
        except _STORE_ERRORS as e:
            logger.error("cache_store_unavailable", op=op, key=key, error=str(e))
            raise StoreUnavailableError(f"Cache store unavailable during {op} of '{key}'") from e
