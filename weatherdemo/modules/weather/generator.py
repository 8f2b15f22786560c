"""Synthetic weather data generation."""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone
from typing import Callable

from shared.schemas.weather import CurrentSnapshot, ForecastEntry

SUMMARIES: tuple[str, ...] = (
    "Freezing",
    "Bracing",
    "Chilly",
    "Cool",
    "Mild",
    "Warm",
    "Balmy",
    "Hot",
    "Sweltering",
    "Scorching",
)

DEFAULT_BIAS_KEY = "Default"

# Degrees Celsius added to both ends of the temperature range
CITY_TEMPERATURE_BIAS: dict[str, int] = {
    "New York": 5,
    "London": -2,
    "Tokyo": 8,
    "Sydney": 12,
    "Berlin": 0,
    DEFAULT_BIAS_KEY: 10,
}

_BIAS_BY_FOLDED_NAME = {name.casefold(): bias for name, bias in CITY_TEMPERATURE_BIAS.items()}

FORECAST_DAYS = 5


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def temperature_bias(city: str) -> int:
    """Return the temperature offset for a city, falling back to the default bias."""
    # Case-insensitive and ignores surrounding whitespace: " tokyo " gets Tokyo's bias
    return _BIAS_BY_FOLDED_NAME.get(city.strip().casefold(), CITY_TEMPERATURE_BIAS[DEFAULT_BIAS_KEY])


class WeatherGenerator:
    """Produces plausible-looking forecasts and snapshots for any city name.

    The random source and the clock are injected so callers can seed and pin
    them; by default an unseeded ``random.Random`` and the UTC wall clock are
    used.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._rng = rng or random.Random()
        self._clock = clock or _utcnow

    def generate_forecast(self, city: str) -> list[ForecastEntry]:
        """Generate a forecast for the next five days, ordered by date."""
        bias = temperature_bias(city)
        today = self._clock().date()

        return [
            ForecastEntry(
                date=today + timedelta(days=offset),
                temperature_celsius=self._rng.randrange(-20 + bias, 35 + bias),
                summary=self._rng.choice(SUMMARIES),
            )
            for offset in range(1, FORECAST_DAYS + 1)
        ]

    def generate_current(self, city: str) -> CurrentSnapshot:
        """Generate current conditions; ``city`` is echoed back verbatim."""
        bias = temperature_bias(city)

        return CurrentSnapshot(
            city=city,
            temperature_celsius=self._rng.randrange(-10 + bias, 30 + bias),
            summary=self._rng.choice(SUMMARIES),
            humidity_percent=self._rng.randrange(30, 95),
            wind_speed=self._rng.random() * 30,
            observed_at=self._clock(),
        )
