"""
Prefect flow for fetching a picnic outlook snapshot.

Resolves a place, fetches the scored forecast and the historical summary
concurrently, and saves the combined outlook to the data store.

Run locally:
    python -m picnic_planner.flows.fetch "Portland" 2026-07-04

Run with Prefect dashboard:
    prefect server start &
    python -m picnic_planner.flows.fetch "Portland" 2026-07-04
"""

from __future__ import annotations

import sys
from datetime import UTC, date, datetime, timedelta
from pathlib import Path
from typing import Any

from prefect import flow, task

from picnic_planner.analysis.historical import get_historical_summary
from picnic_planner.config import get_settings
from picnic_planner.datasources.geocoding import resolve
from picnic_planner.schemas import (
    CombinedResult,
    ForecastDay,
    ForecastResult,
    HistoricalSummary,
    Location,
)
from picnic_planner.services.planner import build_scorer, parse_day, score_forecast
from picnic_planner.services.providers import CachedWeatherProvider, OpenMeteoProvider
from picnic_planner.store import DataStore

_settings = get_settings()

# Data store with tiered directories
store = DataStore(_settings.data_dir)

# Cached Open-Meteo provider shared by the tasks
provider = CachedWeatherProvider(
    OpenMeteoProvider(forecast_days=_settings.forecast_days, timeout=_settings.request_timeout),
    store,
    forecast_ttl=timedelta(minutes=_settings.forecast_cache_minutes),
    historical_ttl=timedelta(hours=_settings.historical_cache_hours),
)

# Relative paths within the store
OUTLOOK_PATH = Path("derived/outlook.json")

OUTLOOK_TTL = timedelta(minutes=10)


@task(name="resolve-location", retries=2, retry_delay_seconds=5)
def resolve_location(
    place: str, state: str | None = None, country: str | None = None
) -> Location:
    """Geocode the place name."""
    return resolve(place, state=state, country=country)


@task(name="fetch-forecast", retries=2, retry_delay_seconds=5)
def fetch_forecast(location: Location) -> list[ForecastDay]:
    """Fetch and score the 14-day forecast.

    Scores with the thresholds file from settings when one is configured.
    """
    scorer = build_scorer(get_settings().preferences_path)
    return score_forecast(provider.fetch_forecast(location), scorer)


@task(name="fetch-historical")
def fetch_historical(location: Location, day: date, years_back: int = 10) -> HistoricalSummary:
    """Summarize the same calendar day over previous years.

    No task-level retries: individual missing years are already tolerated.
    """
    settings = get_settings()
    return get_historical_summary(
        location,
        day,
        years_back,
        provider.fetch_historical_point,
        timeout=settings.historical_timeout,
        max_workers=settings.max_workers,
    )


def _request_params(
    place: str, day: date, years_back: int, state: str | None, country: str | None
) -> dict[str, Any]:
    return {
        "place": place,
        "requested_date": day.isoformat(),
        "years_back": years_back,
        "state": state,
        "country": country,
    }


@task(name="save-outlook")
def save_outlook(
    outlook: CombinedResult,
    place: str,
    years_back: int = 10,
    state: str | None = None,
    country: str | None = None,
) -> Path:
    """Save the combined outlook via store, tagged with the request that built it."""
    return store.write(
        OUTLOOK_PATH,
        outlook.model_dump(mode="json"),
        source="open-meteo.com",
        valid_until=datetime.now(UTC) + OUTLOOK_TTL,
        **_request_params(place, outlook.requested_date, years_back, state, country),
    )


def _snapshot_matches(
    place: str, day: date, years_back: int, state: str | None, country: str | None
) -> bool:
    meta = store.read_meta(OUTLOOK_PATH)
    if meta is None:
        return False
    expected = _request_params(place, day, years_back, state, country)
    return all(getattr(meta, key, None) == value for key, value in expected.items())


def _summarize(outlook: CombinedResult) -> dict[str, Any]:
    return {
        "location": str(outlook.location),
        "requested_date": outlook.requested_date.isoformat(),
        "category": outlook.forecast.assessment.category.value if outlook.forecast else None,
        "score": outlook.forecast.assessment.score if outlook.forecast else None,
        "years_of_data": outlook.historical.years_of_data,
    }


@flow(name="fetch-outlook", log_prints=True)
def fetch_outlook(
    place: str,
    day: str | None = None,
    years_back: int = 10,
    state: str | None = None,
    country: str | None = None,
) -> dict[str, Any]:
    """
    Fetch forecast + history for one place and date.

    Checks freshness before fetching: a still-valid snapshot built from the
    same place, date, filters and years_back is reused.
    """
    target = parse_day(day) if day else date.today()

    if store.is_fresh(OUTLOOK_PATH) and _snapshot_matches(
        place, target, years_back, state, country
    ):
        print(f"Outlook for {place} on {target} is fresh, skipping fetch.")
        return _summarize(CombinedResult.model_validate(store.read(OUTLOOK_PATH)))

    print(f"Resolving {place!r}...")
    location = resolve_location(place, state, country)

    print(f"Fetching forecast and {years_back} years of history for {location}...")
    forecast_future = fetch_forecast.submit(location)
    historical_future = fetch_historical.submit(location, target, years_back)
    forecast = ForecastResult(location=location, days=forecast_future.result())
    summary = historical_future.result()

    outlook = CombinedResult(
        location=location,
        requested_date=target,
        forecast=forecast.day(target),
        historical=summary,
    )
    output_path = save_outlook(outlook, place, years_back, state, country)
    print(f"Saved outlook ({summary.years_of_data} years of history) to {output_path}")

    return _summarize(outlook)


if __name__ == "__main__":
    args = sys.argv[1:]
    result = fetch_outlook(args[0], args[1] if len(args) > 1 else None)
    print(f"Flow complete: {result}")
