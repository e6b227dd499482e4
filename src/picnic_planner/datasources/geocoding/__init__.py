"""Open-Meteo geocoding data source.

Resolves free-text place names to coordinates.

Public API:
  - search: search_places (raw candidates), resolve (best Location)
  - models: PlaceMatch
"""

from picnic_planner.datasources.geocoding.models import PlaceMatch
from picnic_planner.datasources.geocoding.search import resolve, search_places

__all__ = ["PlaceMatch", "resolve", "search_places"]
