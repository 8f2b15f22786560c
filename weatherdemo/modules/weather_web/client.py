"""Async HTTP client for the Weather API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar
from urllib.parse import quote

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from shared.schemas.weather import CurrentSnapshot, ForecastEntry

logger = structlog.get_logger()

T = TypeVar("T")

_FORECAST_LIST = TypeAdapter(list[ForecastEntry])
_CURRENT = TypeAdapter(CurrentSnapshot)


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Outcome of an API call: either a decoded value or an error description."""

    value: T | None = None
    error: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class WeatherApiClient:
    """Reads forecasts and current conditions from the Weather API.

    Failures never raise: transport errors, non-2xx statuses and bodies that
    do not decode are returned as failed ``ApiResult`` values so the caller
    decides how to present them.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def get_forecast(self, city: str) -> ApiResult[list[ForecastEntry]]:
        """Fetch the 5-day forecast for a city."""
        logger.info("weather_api_forecast_request", city=city)
        return await self._fetch(
            "/api/weather/forecast", _FORECAST_LIST, city=city, params={"city": city}
        )

    async def get_current_weather(self, city: str) -> ApiResult[CurrentSnapshot]:
        """Fetch current conditions for a city."""
        logger.info("weather_api_current_request", city=city)
        return await self._fetch(
            f"/api/weather/{quote(city, safe='')}",
            _CURRENT,
            city=city,
        )

    async def _fetch(
        self,
        path: str,
        adapter: TypeAdapter,
        *,
        city: str,
        params: dict[str, Any] | None = None,
    ) -> ApiResult[Any]:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.get(path, params=params)
        except httpx.RequestError as e:
            logger.error("weather_api_request_error", city=city, path=path, error=str(e))
            return ApiResult(error=f"Failed to connect to Weather API: {e}")

        if resp.is_error:
            logger.warning("weather_api_http_error", city=city, path=path, status=resp.status_code)
            return ApiResult(
                error=f"Weather API error: {resp.status_code}", status_code=resp.status_code
            )

        try:
            value = adapter.validate_json(resp.content)
        except ValidationError as e:
            logger.error("weather_api_decode_error", city=city, path=path, error=str(e))
            return ApiResult(error="Weather API returned an unreadable response", status_code=resp.status_code)

        return ApiResult(value=value, status_code=resp.status_code)
