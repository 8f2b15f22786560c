"""Test fixtures and sample payloads for weather module tests."""

from __future__ import annotations

from datetime import date, datetime, timezone

from shared.schemas.weather import CurrentSnapshot, ForecastEntry

FIXED_NOW = datetime(2026, 2, 15, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Monotonic-style clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


SAMPLE_FORECAST = [
    ForecastEntry(date=date(2026, 2, 16), temperature_celsius=22, summary="Warm"),
    ForecastEntry(date=date(2026, 2, 17), temperature_celsius=25, summary="Balmy"),
    ForecastEntry(date=date(2026, 2, 18), temperature_celsius=18, summary=None),
]

SAMPLE_CURRENT = CurrentSnapshot(
    city="TestCity",
    temperature_celsius=20,
    summary="Mild",
    humidity_percent=60,
    wind_speed=5.5,
    observed_at=FIXED_NOW,
)

# Encoded the way the cache writes it
FORECAST_PAYLOAD = (
    '[{"date":"2026-02-16","temperatureCelsius":22,"summary":"Warm","temperatureFahrenheit":72},'
    '{"date":"2026-02-17","temperatureCelsius":25,"summary":"Balmy","temperatureFahrenheit":77},'
    '{"date":"2026-02-18","temperatureCelsius":18,"summary":null,"temperatureFahrenheit":64}]'
)

# Written by an encoder with PascalCase names
CURRENT_PAYLOAD_PASCAL = (
    '{"City":"TestCity","TemperatureCelsius":20,"Summary":"Mild","HumidityPercent":60,'
    '"WindSpeed":5.5,"ObservedAt":"2026-02-15T12:00:00Z","TemperatureFahrenheit":68}'
)

CORRUPT_PAYLOAD = '{"city": "TestCity", "temperatureCelsius": "not-a-number"'
