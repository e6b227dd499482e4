"""Picnic Planner - weather suitability scoring for outdoor picnics.

Architecture::

    datasources/   External APIs (Open-Meteo forecast, archive, geocoding)
    analysis/      Pure domain logic (suitability scoring, historical aggregation)
    services/      Shared utilities (HTTP client with retry, providers, planner facade)
    store.py       Tiered cache with TTL (live forecasts, historical points, outlooks)
    flows/         Prefect orchestration (fetch a picnic outlook snapshot)
    cli.py         Command-line entry point

Data flow: place text -> geocoding -> {forecast, historical} -> scoring -> Result

Extension points:
  - New scoring strategy:  implement ``SuitabilityScorer`` in analysis/suitability.py
  - New weather provider:  implement ``WeatherProvider`` in services/providers.py
"""

__version__ = "0.1.0"

from picnic_planner.config import Settings
from picnic_planner.schemas import Location, Result, SuitabilityAssessment

__all__ = ["Location", "Result", "Settings", "SuitabilityAssessment", "__version__"]
