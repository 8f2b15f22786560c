"""Pydantic schemas shared by the weather services."""

from shared.schemas.common import HealthResponse
from shared.schemas.weather import CurrentSnapshot, ForecastEntry, to_fahrenheit

__all__ = [
    "CurrentSnapshot",
    "ForecastEntry",
    "HealthResponse",
    "to_fahrenheit",
]
