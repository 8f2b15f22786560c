"""Weather service error types."""

from __future__ import annotations


class WeatherError(Exception):
    """Base weather service error."""


class InvalidArgumentError(WeatherError, ValueError):
    """Raised for client-input faults: blank city, empty cache key, missing value."""


class StoreUnavailableError(WeatherError, RuntimeError):
    """Raised when the backing cache store cannot be reached or times out."""
