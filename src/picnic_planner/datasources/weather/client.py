"""Open-Meteo API client constants and shared configuration.

API docs:
  - Forecast: https://open-meteo.com/en/docs
  - Archive: https://open-meteo.com/en/docs/historical-weather-api
"""

from __future__ import annotations

from typing import Any

OPEN_METEO_API = "https://api.open-meteo.com/v1/forecast"
OPEN_METEO_HISTORICAL = "https://archive-api.open-meteo.com/v1/archive"

#: The provider's forecast window used for picnic planning
FORECAST_DAYS = 14

# Daily variables we request from the forecast API
FORECAST_DAILY_VARS = [
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_probability_max",
    "precipitation_sum",
    "relative_humidity_2m_mean",
    "wind_speed_10m_max",
    "wind_direction_10m_dominant",
]

# Daily variables we request from the archive API (one day per request)
HISTORICAL_DAILY_VARS = [
    "temperature_2m_mean",
    "precipitation_sum",
    "relative_humidity_2m_mean",
]


def value_at(values: list[Any] | None, index: int, default: Any = None) -> Any:
    """Return ``values[index]``, or ``default`` when missing or null."""
    if not values or index >= len(values) or values[index] is None:
        return default
    return values[index]
