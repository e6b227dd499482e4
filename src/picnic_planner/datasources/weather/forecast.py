"""14-day weather forecast from Open-Meteo Forecast API."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Any

import requests

from picnic_planner.datasources.weather.client import (
    FORECAST_DAILY_VARS,
    FORECAST_DAYS,
    OPEN_METEO_API,
    value_at,
)
from picnic_planner.errors import UpstreamError
from picnic_planner.schemas import DailyObservation
from picnic_planner.services.http import DEFAULT_TIMEOUT, session

if TYPE_CHECKING:
    from picnic_planner.schemas import Location

logger = logging.getLogger(__name__)


def parse_forecast(data: dict[str, Any]) -> list[DailyObservation]:
    """
    Convert a forecast response into observations, one per day.

    Rows with an unparsable date are skipped. Missing temperatures or rain
    values default to 0; missing wind or humidity stay None.

    Raises:
        UpstreamError: If the response has no ``daily`` block.
    """
    daily = data.get("daily")
    if not isinstance(daily, dict):
        msg = "Invalid response from Open-Meteo forecast API"
        raise UpstreamError(msg)

    observations: list[DailyObservation] = []
    for i, date_str in enumerate(daily.get("time", [])):
        try:
            day = date.fromisoformat(date_str)
        except (TypeError, ValueError):
            logger.debug("Skipping forecast row with bad date %r", date_str)
            continue
        observations.append(
            DailyObservation(
                date=day,
                max_temperature=value_at(daily.get("temperature_2m_max"), i, 0.0),
                min_temperature=value_at(daily.get("temperature_2m_min"), i, 0.0),
                precipitation_chance=value_at(daily.get("precipitation_probability_max"), i, 0.0),
                precipitation_amount=value_at(daily.get("precipitation_sum"), i, 0.0),
                humidity=value_at(daily.get("relative_humidity_2m_mean"), i),
                wind_speed=value_at(daily.get("wind_speed_10m_max"), i),
                wind_direction=value_at(daily.get("wind_direction_10m_dominant"), i),
            )
        )
    return observations


def fetch_forecast(
    location: Location,
    *,
    forecast_days: int = FORECAST_DAYS,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[DailyObservation]:
    """
    Fetch the daily forecast for a location from Open-Meteo.

    Args:
        location: Where to forecast.
        forecast_days: Number of days to forecast (max 16).
        timeout: Request timeout in seconds.

    Returns:
        Observations ordered by date.

    Raises:
        UpstreamError: If the request fails or the response can't be parsed.
    """
    params: dict[str, str | int | float | list[str]] = {
        "latitude": location.latitude,
        "longitude": location.longitude,
        "daily": FORECAST_DAILY_VARS,
        "timezone": "auto",
        "forecast_days": forecast_days,
    }

    try:
        resp = session.get(OPEN_METEO_API, params=params, timeout=timeout)
        resp.raise_for_status()
        data: dict[str, Any] = resp.json()
    except (requests.RequestException, ValueError) as exc:
        msg = f"Failed to retrieve forecast data from Open-Meteo: {exc}"
        raise UpstreamError(msg) from exc

    return parse_forecast(data)
