"""Single-day historical weather from Open-Meteo Archive API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import requests

from picnic_planner.datasources.weather.client import (
    HISTORICAL_DAILY_VARS,
    OPEN_METEO_HISTORICAL,
    value_at,
)
from picnic_planner.errors import NotFoundError, UpstreamError
from picnic_planner.schemas import YearlyDataPoint
from picnic_planner.services.http import DEFAULT_TIMEOUT, session

if TYPE_CHECKING:
    from datetime import date

    from picnic_planner.schemas import Location


def parse_historical_point(data: dict[str, Any], day: date) -> YearlyDataPoint:
    """
    Convert a one-day archive response into a yearly data point.

    Raises:
        NotFoundError: If the archive has no row, or a null value, for ``day``.
    """
    daily = data.get("daily") or {}
    if not daily.get("time"):
        msg = f"No archive data for {day.isoformat()}"
        raise NotFoundError(msg, code="Weather.HistoricalDataNotFound")

    values = [value_at(daily.get(var), 0) for var in HISTORICAL_DAILY_VARS]
    if any(v is None for v in values):
        msg = f"Incomplete archive data for {day.isoformat()}"
        raise NotFoundError(msg, code="Weather.HistoricalDataNotFound")

    temperature, precipitation, humidity = values
    return YearlyDataPoint(
        year=day.year,
        temperature=temperature,
        precipitation=precipitation,
        humidity=humidity,
    )


def fetch_historical_point(
    location: Location,
    day: date,
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> YearlyDataPoint:
    """
    Fetch mean temperature, precipitation and humidity for one past day.

    Args:
        location: Where to look.
        day: Exact date (the year matters).
        timeout: Request timeout in seconds.

    Returns:
        Data point for ``day.year``.

    Raises:
        UpstreamError: If the request fails or the response can't be parsed.
        NotFoundError: If the archive has no data for that day.
    """
    params: dict[str, Any] = {
        "latitude": location.latitude,
        "longitude": location.longitude,
        "start_date": day.isoformat(),
        "end_date": day.isoformat(),
        "daily": HISTORICAL_DAILY_VARS,
        "timezone": "auto",
    }

    try:
        resp = session.get(OPEN_METEO_HISTORICAL, params=params, timeout=timeout)
        resp.raise_for_status()
        data: dict[str, Any] = resp.json()
    except (requests.RequestException, ValueError) as exc:
        msg = f"Failed to retrieve archive data for {day.isoformat()}: {exc}"
        raise UpstreamError(msg) from exc

    return parse_historical_point(data, day)
