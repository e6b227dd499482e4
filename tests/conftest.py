"""Shared fixtures: an in-memory weather provider and observation factory."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, timedelta
from typing import Any

import pytest

from picnic_planner.schemas import DailyObservation, Location, YearlyDataPoint

PORTLAND = Location(latitude=45.52, longitude=-122.68, name="Portland, Oregon, United States")


class FakeProvider:
    """Provider returning canned data and counting calls.

    ``failing_years`` make the historical lookup raise for those years.
    """

    source = "fake"

    def __init__(
        self,
        start: date = date(2026, 7, 1),
        days: int = 14,
        failing_years: set[int] | None = None,
        forecast_error: Exception | None = None,
    ) -> None:
        self.start = start
        self.days = days
        self.failing_years = failing_years or set()
        self.forecast_error = forecast_error
        self.forecast_calls = 0
        self.historical_calls: list[date] = []

    def fetch_forecast(self, location: Location) -> list[DailyObservation]:
        self.forecast_calls += 1
        if self.forecast_error is not None:
            raise self.forecast_error
        return [
            DailyObservation(
                date=self.start + timedelta(days=i),
                max_temperature=24.0,
                min_temperature=20.0,
                precipitation_chance=5.0,
                precipitation_amount=0.1,
                wind_speed=10.0,
                humidity=60.0,
            )
            for i in range(self.days)
        ]

    def fetch_historical_point(self, location: Location, day: date) -> YearlyDataPoint:
        self.historical_calls.append(day)
        if day.year in self.failing_years:
            msg = f"no archive data for {day}"
            raise RuntimeError(msg)
        return YearlyDataPoint(
            year=day.year,
            temperature=20.0 + (day.year % 5),
            precipitation=1.0,
            humidity=55.0,
        )


@pytest.fixture
def location() -> Location:
    return PORTLAND


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def make_observation() -> Callable[..., DailyObservation]:
    """Factory for a pleasant day, overridable per field."""

    def _make(**overrides: Any) -> DailyObservation:
        values: dict[str, Any] = {
            "date": date(2026, 7, 4),
            "max_temperature": 24.0,
            "min_temperature": 20.0,
            "precipitation_chance": 5.0,
            "precipitation_amount": 0.0,
            "wind_speed": 10.0,
            "humidity": 50.0,
        }
        values.update(overrides)
        return DailyObservation(**values)

    return _make


@pytest.fixture
def make_provider() -> type[FakeProvider]:
    return FakeProvider
