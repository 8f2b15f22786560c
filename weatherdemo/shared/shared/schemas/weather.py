"""Weather data records shared by the API service and the web front-end.

Both services exchange these as JSON with camelCase field names.  Decoding
accepts field names in any letter case (``temperatureCelsius``,
``TemperatureCelsius``, ``temperature_celsius``) so payloads written by other
encoders still load.  Fahrenheit values are computed on every access and are
never read back from a payload.
"""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from pydantic.alias_generators import to_camel


def to_fahrenheit(celsius: int) -> int:
    """Convert whole degrees Celsius to whole degrees Fahrenheit."""
    return 32 + round(celsius / 0.5556)


class WeatherRecord(BaseModel):
    """Base for wire records: frozen, camelCase aliases, case-insensitive decode."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _match_field_names(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        known: dict[str, str] = {}
        for name in cls.model_fields:
            known[name.lower()] = name
            known[to_camel(name).lower()] = name
        return {
            known.get(key.lower(), key) if isinstance(key, str) else key: value
            for key, value in data.items()
        }


class ForecastEntry(WeatherRecord):
    """One day of a multi-day forecast."""

    date: dt.date
    temperature_celsius: int
    summary: str | None = None

    @computed_field(alias="temperatureFahrenheit")  # type: ignore[prop-decorator]
    @property
    def temperature_fahrenheit(self) -> int:
        return to_fahrenheit(self.temperature_celsius)


class CurrentSnapshot(WeatherRecord):
    """Live conditions for a city."""

    city: str
    temperature_celsius: int
    summary: str | None = None
    humidity_percent: int = Field(ge=0, le=100)
    wind_speed: float = Field(ge=0)
    observed_at: dt.datetime

    @computed_field(alias="temperatureFahrenheit")  # type: ignore[prop-decorator]
    @property
    def temperature_fahrenheit(self) -> int:
        return to_fahrenheit(self.temperature_celsius)
