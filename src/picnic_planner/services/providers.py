"""
Weather providers.

A provider answers two questions: "what is the forecast here?" and "what
was the weather here on this exact past day?". ``CachedWeatherProvider``
wraps any provider with TTL caching on a ``DataStore``; it is a decorator
around the fetch calls and does not change their contract.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from picnic_planner.datasources.weather import fetch_forecast, fetch_historical_point
from picnic_planner.datasources.weather.client import FORECAST_DAYS
from picnic_planner.schemas import DailyObservation, YearlyDataPoint
from picnic_planner.services.http import DEFAULT_TIMEOUT

if TYPE_CHECKING:
    from datetime import date

    from picnic_planner.schemas import Location
    from picnic_planner.store import DataStore

logger = logging.getLogger(__name__)

FORECAST_TTL = timedelta(minutes=10)
HISTORICAL_TTL = timedelta(hours=24)


class WeatherProvider(Protocol):
    """Point-weather provider."""

    def fetch_forecast(self, location: Location) -> list[DailyObservation]: ...

    def fetch_historical_point(self, location: Location, day: date) -> YearlyDataPoint: ...


class OpenMeteoProvider:
    """Provider backed by the Open-Meteo forecast and archive APIs."""

    source = "open-meteo.com"

    def __init__(
        self, forecast_days: int = FORECAST_DAYS, timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        self.forecast_days = forecast_days
        self.timeout = timeout

    def fetch_forecast(self, location: Location) -> list[DailyObservation]:
        return fetch_forecast(location, forecast_days=self.forecast_days, timeout=self.timeout)

    def fetch_historical_point(self, location: Location, day: date) -> YearlyDataPoint:
        return fetch_historical_point(location, day, timeout=self.timeout)


def _coords_key(location: Location) -> str:
    # Rounded so tiny coordinate differences share a cache entry
    return f"{location.latitude:.2f}_{location.longitude:.2f}"


class CachedWeatherProvider:
    """Caches another provider's answers in a ``DataStore``.

    Forecasts live in ``live/forecast/`` for ``forecast_ttl``; per-year
    archive points live in ``historical/points/`` for ``historical_ttl``.
    Failures are never cached.
    """

    def __init__(
        self,
        inner: WeatherProvider,
        store: DataStore,
        forecast_ttl: timedelta = FORECAST_TTL,
        historical_ttl: timedelta = HISTORICAL_TTL,
    ) -> None:
        self.inner = inner
        self.store = store
        self.forecast_ttl = forecast_ttl
        self.historical_ttl = historical_ttl

    @property
    def source(self) -> str:
        return getattr(self.inner, "source", type(self.inner).__name__)

    def forecast_path(self, location: Location) -> Path:
        return Path("live") / "forecast" / f"{_coords_key(location)}.json"

    def historical_path(self, location: Location, day: date) -> Path:
        return Path("historical") / "points" / _coords_key(location) / f"{day.isoformat()}.json"

    def fetch_forecast(self, location: Location) -> list[DailyObservation]:
        path = self.forecast_path(location)
        if self.store.is_fresh(path):
            logger.debug("Cache hit for forecast: %s", path)
            cached = self.store.read(path) or []
            return [DailyObservation.model_validate(row) for row in cached]

        logger.debug("Cache miss for forecast: %s", path)
        observations = self.inner.fetch_forecast(location)
        self.store.write(
            path,
            [obs.model_dump(mode="json") for obs in observations],
            source=self.source,
            valid_until=datetime.now(UTC) + self.forecast_ttl,
            location=location.model_dump(mode="json"),
        )
        return observations

    def fetch_historical_point(self, location: Location, day: date) -> YearlyDataPoint:
        path = self.historical_path(location, day)
        if self.store.is_fresh(path):
            logger.debug("Cache hit for historical: %s", path)
            return YearlyDataPoint.model_validate(self.store.read(path))

        logger.debug("Cache miss for historical: %s", path)
        point = self.inner.fetch_historical_point(location, day)
        self.store.write(
            path,
            point.model_dump(mode="json"),
            source=f"{self.source} (archive)",
            valid_until=datetime.now(UTC) + self.historical_ttl,
            location=location.model_dump(mode="json"),
        )
        return point
