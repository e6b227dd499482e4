"""Open-Meteo weather data source.

Fetches forecast and historical daily weather from Open-Meteo (free, no API key).

Public API:
  - forecast: fetch_forecast (14-day forecast as DailyObservation list)
  - historical: fetch_historical_point (one past day as YearlyDataPoint)
  - client: API URLs, shared constants
"""

from picnic_planner.datasources.weather.client import (
    FORECAST_DAYS,
    OPEN_METEO_API,
    OPEN_METEO_HISTORICAL,
)
from picnic_planner.datasources.weather.forecast import fetch_forecast, parse_forecast
from picnic_planner.datasources.weather.historical import (
    fetch_historical_point,
    parse_historical_point,
)

__all__ = [
    "FORECAST_DAYS",
    "OPEN_METEO_API",
    "OPEN_METEO_HISTORICAL",
    "fetch_forecast",
    "fetch_historical_point",
    "parse_forecast",
    "parse_historical_point",
]
