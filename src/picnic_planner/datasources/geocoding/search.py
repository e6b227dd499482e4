"""Place-name search against the Open-Meteo geocoding API."""

from __future__ import annotations

import logging
from typing import Any

import requests

from picnic_planner.datasources.geocoding.client import OPEN_METEO_GEOCODING, RESULT_COUNT
from picnic_planner.datasources.geocoding.models import PlaceMatch
from picnic_planner.errors import InvalidInputError, NotFoundError, UpstreamError
from picnic_planner.reference.us_states import state_full_name
from picnic_planner.schemas import Location
from picnic_planner.services.http import DEFAULT_TIMEOUT, session

logger = logging.getLogger(__name__)


def search_places(query: str, *, timeout: float = DEFAULT_TIMEOUT) -> list[PlaceMatch]:
    """
    Return geocoding candidates for ``query`` (possibly empty).

    Raises:
        UpstreamError: If the request fails or the response can't be parsed.
    """
    params: dict[str, str | int] = {
        "name": query,
        "count": RESULT_COUNT,
        "language": "en",
        "format": "json",
    }
    try:
        resp = session.get(OPEN_METEO_GEOCODING, params=params, timeout=timeout)
        resp.raise_for_status()
        data: dict[str, Any] = resp.json()
        return [PlaceMatch.from_api(raw) for raw in data.get("results") or []]
    except (requests.RequestException, ValueError, KeyError, TypeError) as exc:
        msg = f"Failed to geocode location: {query}"
        raise UpstreamError(msg, code="Geocoding.ServiceError") from exc


def _pick(matches: list[PlaceMatch], state: str | None, country: str | None) -> PlaceMatch:
    """First match agreeing with state/country, else the top match."""
    candidates = matches
    if state:
        wanted = {state.strip().lower()}
        full = state_full_name(state)
        if full:
            wanted.add(full.lower())
        candidates = [m for m in candidates if m.admin1.lower() in wanted]
    if country:
        wanted_country = country.strip().lower()
        candidates = [
            m
            for m in candidates
            if wanted_country in (m.country.lower(), m.country_code.lower())
        ]
    return candidates[0] if candidates else matches[0]


def resolve(
    place: str,
    *,
    state: str | None = None,
    country: str | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Location:
    """
    Resolve a place name to a Location.

    Searches the bare place name first. If that finds nothing and a state is
    given, searches again with ``"place, state"``.

    Args:
        place: City or free-form place text.
        state: Optional region filter (US abbreviation or full name).
        country: Optional country filter (name or ISO code).
        timeout: Request timeout in seconds.

    Raises:
        InvalidInputError: If ``place`` is empty.
        NotFoundError: If nothing matches.
        UpstreamError: If the geocoding request fails.
    """
    if not place or not place.strip():
        msg = "City name cannot be empty"
        raise InvalidInputError(msg, code="Geocoding.InvalidCity")

    query = place.strip()
    matches = search_places(query, timeout=timeout)
    if not matches and state:
        query = f"{query}, {state.strip()}"
        matches = search_places(query, timeout=timeout)
    if not matches:
        msg = f"No geocoding results found for query: {query}"
        raise NotFoundError(msg, code="Geocoding.LocationNotFound")

    match = _pick(matches, state, country)
    logger.debug("Resolved %r to %s", place, match.display_name)
    return Location(
        latitude=match.latitude,
        longitude=match.longitude,
        name=match.display_name,
    )
