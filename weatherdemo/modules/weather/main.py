"""Weather API — FastAPI service."""

from __future__ import annotations

import logging
from datetime import timedelta

import structlog
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from modules.weather.cache import CacheService, KeyValueStore
from modules.weather.errors import InvalidArgumentError, StoreUnavailableError
from modules.weather.generator import DEFAULT_BIAS_KEY, WeatherGenerator
from modules.weather.service import WeatherService
from modules.weather.store import InMemoryStore
from shared.config import Settings, get_settings, parse_list
from shared.redis import close_redis, get_redis
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
app = FastAPI(title="Weather API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=parse_list(get_settings().cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)

service: WeatherService | None = None


def build_service(store: KeyValueStore, settings: Settings) -> WeatherService:
    """Wire the cache-aside service from settings."""
    return WeatherService(
        CacheService(store),
        WeatherGenerator(),
        forecast_ttl=timedelta(seconds=settings.forecast_cache_ttl_seconds),
        current_ttl=timedelta(seconds=settings.current_cache_ttl_seconds),
        fail_open=settings.cache_fail_open,
    )


@app.on_event("startup")
async def startup():
    global service
    settings = get_settings()

    if settings.cache_backend == "memory":
        store: KeyValueStore = InMemoryStore()
        logger.warning("weather_cache_in_memory", hint="entries are not shared between replicas")
    else:
        store = await get_redis()
        # Keep the client even if Redis is down; requests report 503 until it returns
        try:
            await store.ping()
            logger.info("weather_redis_connected")
        except Exception as e:
            logger.warning("weather_redis_unavailable", error=str(e))

    service = build_service(store, settings)
    logger.info("weather_api_ready", cache_backend=settings.cache_backend)


@app.on_event("shutdown")
async def shutdown():
    await close_redis()


def get_weather_service() -> WeatherService:
    if service is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    return service


@app.exception_handler(InvalidArgumentError)
async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    logger.error("weather_store_unavailable", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=503, content={"detail": "Cache store unavailable"})


@app.get("/api/weather/forecast", response_model=list[ForecastEntry])
async def get_weather_forecast(
    city: str | None = None,
    weather: WeatherService = Depends(get_weather_service),
):
    """Return a 5-day weather forecast for the specified city."""
    return await weather.get_forecast(city if city is not None else DEFAULT_BIAS_KEY)


# Must stay after the forecast route; ":path" keeps decoded "/" inside the city
@app.get("/api/weather/{city:path}", response_model=CurrentSnapshot)
async def get_current_weather(
    city: str,
    weather: WeatherService = Depends(get_weather_service),
):
    """Return current weather information for the specified city."""
    return await weather.get_current_weather(city)


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok")
