"""
Picnic planner facade.

Ties geocoding, the weather provider, the suitability scorer and the
historical aggregator together. Every public method returns a ``Result``
instead of raising, so callers branch on ``result.error.kind``.

Example::

    planner = PicnicPlanner()
    result = planner.plan("Austin", "2026-07-04", state="TX")
    if result.success:
        print(result.value.forecast, result.value.historical)
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import ValidationError

from picnic_planner.analysis.historical import get_historical_summary
from picnic_planner.analysis.preferences import load_preferences
from picnic_planner.analysis.suitability import (
    FixedThresholdScorer,
    PreferenceScorer,
    SuitabilityScorer,
)
from picnic_planner.datasources.geocoding import resolve
from picnic_planner.errors import ErrorKind, InvalidInputError, PicnicPlannerError
from picnic_planner.schemas import (
    CombinedResult,
    DailyObservation,
    ForecastDay,
    ForecastResult,
    HistoricalResult,
    HistoricalSummary,
    Location,
    Result,
)
from picnic_planner.services.providers import OpenMeteoProvider, WeatherProvider

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_YEARS_BACK = 10


def parse_day(value: date | str) -> date:
    """Accept a date or an ISO ``YYYY-MM-DD`` string.

    Raises:
        InvalidInputError: If the string is not a valid date.
    """
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError) as exc:
        msg = f"Invalid date format: {value!r}. Expected YYYY-MM-DD"
        raise InvalidInputError(msg, code="Weather.InvalidDate") from exc


def score_forecast(
    observations: list[DailyObservation], scorer: SuitabilityScorer
) -> list[ForecastDay]:
    """Pair each observation with its assessment, keeping order."""
    return [ForecastDay(observation=obs, assessment=scorer.assess(obs)) for obs in observations]


def build_scorer(preferences_path: Path | None = None) -> SuitabilityScorer:
    """Preference scorer when a thresholds file is given, else the fixed scorer.

    Raises:
        InvalidInputError: If the file cannot be read or fails validation.
    """
    if preferences_path is None:
        return FixedThresholdScorer()
    try:
        return PreferenceScorer(load_preferences(preferences_path))
    except (OSError, ValidationError) as exc:
        msg = f"Could not load preferences from {preferences_path}: {exc}"
        raise InvalidInputError(msg, code="Preferences.Invalid") from exc


def capture(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    """Run ``fn`` and fold any exception into a failed ``Result``."""
    try:
        return Result.ok(fn(*args, **kwargs))
    except PicnicPlannerError as exc:
        return Result.fail(exc.kind, exc.code, exc.message)
    except ValidationError as exc:
        return Result.fail(ErrorKind.VALIDATION, "General.ValidationFailed", str(exc))
    except Exception as exc:
        logger.exception("Unexpected error in %s", getattr(fn, "__name__", fn))
        return Result.fail(
            ErrorKind.UNEXPECTED,
            "General.UnexpectedError",
            f"An unexpected error occurred: {exc}",
        )


class PicnicPlanner:
    """Forecast, history and combined outlooks for a single location."""

    def __init__(
        self,
        provider: WeatherProvider | None = None,
        scorer: SuitabilityScorer | None = None,
        geocoder: Callable[..., Location] = resolve,
        *,
        years_back: int = DEFAULT_YEARS_BACK,
        historical_timeout: float | None = None,
        max_workers: int = 10,
    ) -> None:
        self.provider = provider or OpenMeteoProvider()
        self.scorer = scorer or FixedThresholdScorer()
        self.geocoder = geocoder
        self.years_back = years_back
        self.historical_timeout = historical_timeout
        self.max_workers = max_workers

    # ------------------------------------------------------------------
    # Raising building blocks
    # ------------------------------------------------------------------

    def _forecast(self, location: Location) -> ForecastResult:
        observations = self.provider.fetch_forecast(location)
        return ForecastResult(location=location, days=score_forecast(observations, self.scorer))

    def _summary(self, location: Location, day: date, years_back: int | None) -> HistoricalSummary:
        return get_historical_summary(
            location,
            day,
            self.years_back if years_back is None else years_back,
            self.provider.fetch_historical_point,
            timeout=self.historical_timeout,
            max_workers=self.max_workers,
        )

    def _historical(
        self, location: Location, day: date | str, years_back: int | None
    ) -> HistoricalResult:
        requested = parse_day(day)
        summary = self._summary(location, requested, years_back)
        return HistoricalResult(location=location, requested_date=requested, summary=summary)

    def _combined(
        self, location: Location, day: date | str, years_back: int | None
    ) -> CombinedResult:
        requested = parse_day(day)
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="combined") as pool:
            forecast_future = pool.submit(self._forecast, location)
            summary_future = pool.submit(self._summary, location, requested, years_back)
            # Wait for both before surfacing either failure
            forecast_error = forecast_future.exception()
            summary_error = summary_future.exception()
        if forecast_error is not None:
            raise forecast_error
        if summary_error is not None:
            raise summary_error

        return CombinedResult(
            location=location,
            requested_date=requested,
            forecast=forecast_future.result().day(requested),
            historical=summary_future.result(),
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve_location(
        self, place: str, *, state: str | None = None, country: str | None = None
    ) -> Result[Location]:
        """Geocode free-form place text."""
        return capture(self.geocoder, place, state=state, country=country)

    def location_from_coordinates(
        self, latitude: float, longitude: float, name: str | None = None
    ) -> Result[Location]:
        """Build a Location, reporting out-of-range coordinates as validation errors."""
        return capture(Location, latitude=latitude, longitude=longitude, name=name)

    def get_forecast(self, location: Location) -> Result[ForecastResult]:
        """Scored 14-day forecast."""
        return capture(self._forecast, location)

    def get_historical(
        self, location: Location, day: date | str, years_back: int | None = None
    ) -> Result[HistoricalResult]:
        """Historical summary for ``day``'s month/day over prior years."""
        return capture(self._historical, location, day, years_back)

    def get_combined(
        self, location: Location, day: date | str, years_back: int | None = None
    ) -> Result[CombinedResult]:
        """Forecast and history fetched concurrently.

        ``forecast`` is None when ``day`` falls outside the forecast window.
        """
        return capture(self._combined, location, day, years_back)

    def plan(
        self,
        place: str,
        day: date | str,
        *,
        state: str | None = None,
        country: str | None = None,
        years_back: int | None = None,
    ) -> Result[CombinedResult]:
        """Resolve ``place`` and return the combined outlook for ``day``."""
        located = self.resolve_location(place, state=state, country=country)
        if located.value is None:
            return Result[CombinedResult](success=False, error=located.error)
        return self.get_combined(located.value, day, years_back)
