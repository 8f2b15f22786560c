"""Cache-aside weather reads."""

from __future__ import annotations

from datetime import timedelta
from typing import Callable, TypeVar

import structlog

from modules.weather.cache import CacheService
from modules.weather.errors import InvalidArgumentError, StoreUnavailableError
from modules.weather.generator import WeatherGenerator
from shared.schemas.weather import CurrentSnapshot, ForecastEntry

logger = structlog.get_logger()

T = TypeVar("T")

FORECAST_CACHE_TTL = timedelta(minutes=10)
CURRENT_CACHE_TTL = timedelta(minutes=5)


def _cache_key(kind: str, city: str) -> str:
    """Build a cache key; city case is folded so "London" and "LONDON" share an entry."""
    return f"{kind}:{city.lower()}"


def _require_city(city: str) -> None:
    if city is None or not city.strip():
        raise InvalidArgumentError("City cannot be None or empty")


class WeatherService:
    """Serves forecasts and current conditions, generating only on cache miss.

    Concurrent misses for the same key are not coordinated: each caller
    generates and the last write wins.
    """

    def __init__(
        self,
        cache: CacheService,
        generator: WeatherGenerator | None = None,
        *,
        forecast_ttl: timedelta = FORECAST_CACHE_TTL,
        current_ttl: timedelta = CURRENT_CACHE_TTL,
        fail_open: bool = False,
    ):
        if cache is None:
            raise InvalidArgumentError("cache is required")
        self.cache = cache
        self.generator = generator or WeatherGenerator()
        self.forecast_ttl = forecast_ttl
        self.current_ttl = current_ttl
        self.fail_open = fail_open

    async def get_forecast(self, city: str) -> list[ForecastEntry]:
        """Return the 5-day forecast for ``city``."""
        _require_city(city)
        return await self._cached(
            _cache_key("forecast", city),
            list[ForecastEntry],
            lambda: self.generator.generate_forecast(city),
            self.forecast_ttl,
        )

    async def get_current_weather(self, city: str) -> CurrentSnapshot:
        """Return current conditions for ``city``.

        The snapshot always carries the caller's spelling of the city, even
        when it was cached under a differently-cased request.
        """
        _require_city(city)
        snapshot = await self._cached(
            _cache_key("current", city),
            CurrentSnapshot,
            lambda: self.generator.generate_current(city),
            self.current_ttl,
        )
        if snapshot.city != city:
            snapshot = snapshot.model_copy(update={"city": city})
        return snapshot

    async def _cached(
        self,
        key: str,
        value_type: type[T] | object,
        generate: Callable[[], T],
        ttl: timedelta,
    ) -> T:
        try:
            cached = await self.cache.get(key, value_type)
        except StoreUnavailableError:
            if not self.fail_open:
                raise
            logger.warning("store_unavailable_fallback", key=key, op="get")
            return generate()

        if cached is not None:
            return cached

        value = generate()
        logger.info("weather_generated", key=key)

        try:
            await self.cache.set(key, value, ttl)
        except StoreUnavailableError:
            if not self.fail_open:
                raise
            logger.warning("store_unavailable_fallback", key=key, op="set")
        return value
