"""Tests for the Weather API FastAPI endpoints."""

from __future__ import annotations

import random
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from structlog.testing import capture_logs

from modules.weather.cache import CacheService
from modules.weather.errors import StoreUnavailableError
from modules.weather.generator import WeatherGenerator
from modules.weather.main import app, get_weather_service
from modules.weather.service import WeatherService
from modules.weather.store import InMemoryStore
from modules.weather.tests.fixtures import FIXED_NOW


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def weather_service():
    return WeatherService(
        CacheService(InMemoryStore()),
        WeatherGenerator(rng=random.Random(42), clock=lambda: FIXED_NOW),
    )


@pytest.fixture
async def client(weather_service):
    """Create an async test client for the FastAPI app."""
    app.dependency_overrides[get_weather_service] = lambda: weather_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


# ---------------------------------------------------------------------------
# Forecast
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_forecast(client):
    resp = await client.get("/api/weather/forecast", params={"city": "London"})

    assert resp.status_code == 200
    data = resp.json()
    assert len(data) == 5
    assert data[0]["date"] == "2026-02-16"
    assert set(data[0]) == {"date", "temperatureCelsius", "summary", "temperatureFahrenheit"}
    for entry in data:
        assert entry["temperatureFahrenheit"] == 32 + round(entry["temperatureCelsius"] / 0.5556)


@pytest.mark.asyncio
async def test_forecast_is_cached_between_requests(client):
    first = await client.get("/api/weather/forecast", params={"city": "London"})
    second = await client.get("/api/weather/forecast", params={"city": "london"})

    assert first.json() == second.json()


@pytest.mark.asyncio
async def test_forecast_without_city_uses_default(client, weather_service):
    resp = await client.get("/api/weather/forecast")

    assert resp.status_code == 200
    assert await weather_service.cache.exists("forecast:default") is True


@pytest.mark.asyncio
async def test_forecast_blank_city_is_bad_request(client):
    resp = await client.get("/api/weather/forecast", params={"city": "   "})

    assert resp.status_code == 400
    assert "City" in resp.json()["detail"]


# ---------------------------------------------------------------------------
# Current weather
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_current(client):
    resp = await client.get("/api/weather/Tokyo")

    assert resp.status_code == 200
    data = resp.json()
    assert data["city"] == "Tokyo"
    assert -2 <= data["temperatureCelsius"] < 38
    assert 30 <= data["humidityPercent"] < 95
    assert data["windSpeed"] >= 0
    assert data["observedAt"].startswith("2026-02-15T12:00:00")
    assert data["temperatureFahrenheit"] == 32 + round(data["temperatureCelsius"] / 0.5556)


@pytest.mark.asyncio
async def test_current_escaped_city(client):
    resp = await client.get("/api/weather/New%20York")

    assert resp.status_code == 200
    assert resp.json()["city"] == "New York"


@pytest.mark.asyncio
async def test_current_city_with_encoded_slash(client):
    resp = await client.get("/api/weather/A%2FB")

    assert resp.status_code == 200
    assert resp.json()["city"] == "A/B"


@pytest.mark.asyncio
async def test_forecast_route_not_shadowed_by_city_path(client):
    resp = await client.get("/api/weather/forecast", params={"city": "London"})

    assert resp.status_code == 200
    assert isinstance(resp.json(), list)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_debug_events_filtered_at_default_log_level(client):
    with capture_logs() as logs:
        resp = await client.get("/api/weather/London")

    assert resp.status_code == 200
    events = [entry["event"] for entry in logs]
    assert "weather_generated" in events
    assert "cache_miss" not in events
    assert "cache_set" not in events


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_store_unavailable_is_503(client, weather_service):
    weather_service.cache.get = AsyncMock(side_effect=StoreUnavailableError("down"))

    resp = await client.get("/api/weather/London")

    assert resp.status_code == 503
    assert resp.json() == {"detail": "Cache store unavailable"}


@pytest.mark.asyncio
async def test_not_ready_is_503():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        resp = await c.get("/api/weather/London")

    assert resp.status_code == 503
