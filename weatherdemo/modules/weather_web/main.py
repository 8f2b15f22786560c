"""Weather web front-end — FastAPI service."""

from __future__ import annotations

import asyncio
import logging

import structlog
from fastapi import Depends, FastAPI, Query
from pydantic import BaseModel

from modules.weather_web.client import WeatherApiClient
from shared.config import get_settings
from shared.schemas.common import HealthResponse
from shared.schemas.weather import CurrentSnapshot, ForecastEntry

structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(get_settings().log_level.upper())
    ),
)

logger = structlog.get_logger()
app = FastAPI(title="Weather Web", version="1.0.0")

CURRENT_UNAVAILABLE_MESSAGE = "Weather service is currently unavailable. Please try again later."
FORECAST_UNAVAILABLE_MESSAGE = (
    "Unable to fetch weather forecast. The weather service may be temporarily unavailable."
)


class WeatherPage(BaseModel):
    """Everything the weather page shows for one city lookup."""

    city: str
    current: CurrentSnapshot | None = None
    forecasts: list[ForecastEntry] = []
    error_message: str | None = None


def get_api_client() -> WeatherApiClient:
    settings = get_settings()
    return WeatherApiClient(settings.weather_api_url, timeout=settings.weather_api_timeout)


@app.get("/weather", response_model=WeatherPage)
async def weather_page(
    city: str = Query(..., min_length=1, max_length=100),
    client: WeatherApiClient = Depends(get_api_client),
):
    """Look up current conditions and the forecast for a city in parallel."""
    city = city.strip()
    if not city:
        # Whitespace-only input; same shape as a missing city
        return WeatherPage(city=city, error_message="Please enter a city name")

    logger.info("weather_page_lookup", city=city)
    current, forecast = await asyncio.gather(
        client.get_current_weather(city),
        client.get_forecast(city),
    )

    page = WeatherPage(
        city=city,
        current=current.value,
        forecasts=forecast.value or [],
    )
    if not current.ok:
        page.error_message = CURRENT_UNAVAILABLE_MESSAGE
    elif not forecast.ok or not forecast.value:
        page.error_message = FORECAST_UNAVAILABLE_MESSAGE
    return page


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok")
