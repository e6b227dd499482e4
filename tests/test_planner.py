"""Tests for the PicnicPlanner facade."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any

import pytest

from picnic_planner.analysis.suitability import FixedThresholdScorer, PreferenceScorer
from picnic_planner.errors import ErrorKind, InvalidInputError, NotFoundError, UpstreamError
from picnic_planner.schemas import Location, SuitabilityCategory
from picnic_planner.services.planner import PicnicPlanner, build_scorer, capture, parse_day

if TYPE_CHECKING:
    from pathlib import Path

    from conftest import FakeProvider


def _geocoder(location: Location) -> Any:
    def geocode(place: str, **_filters: Any) -> Location:
        return location

    return geocode


def _missing(place: str, **_filters: Any) -> Location:
    msg = f"No geocoding results found for query: {place}"
    raise NotFoundError(msg, code="Geocoding.LocationNotFound")


class TestParseDay:
    """Date parsing."""

    def test_iso_string(self) -> None:
        assert parse_day("2026-07-04") == date(2026, 7, 4)

    def test_date_passthrough(self) -> None:
        assert parse_day(date(2026, 7, 4)) == date(2026, 7, 4)

    @pytest.mark.parametrize("value", ["07/04/2026", "2026-02-30", ""])
    def test_invalid(self, value: str) -> None:
        result = capture(parse_day, value)
        assert result.error is not None
        assert result.error.kind == ErrorKind.VALIDATION
        assert result.error.code == "Weather.InvalidDate"


class TestBuildScorer:
    """Scorer selection from an optional thresholds file."""

    def test_no_file_is_fixed(self) -> None:
        assert isinstance(build_scorer(None), FixedThresholdScorer)

    def test_file_is_preference_scorer(self, tmp_path: Path) -> None:
        prefs = tmp_path / "prefs.json"
        prefs.write_text('{"wind": {"ideal": {"max": 10}, "poor": {"min": 20}}}')
        scorer = build_scorer(prefs)
        assert isinstance(scorer, PreferenceScorer)
        assert scorer.preferences.wind.ideal.max == 10

    @pytest.mark.parametrize("content", [None, "{not json", '{"wind": {"ideal": {"max": 50}}}'])
    def test_unreadable_file(self, tmp_path: Path, content: str | None) -> None:
        prefs = tmp_path / "prefs.json"
        if content is not None:
            prefs.write_text(content)
        with pytest.raises(InvalidInputError, match="Could not load preferences") as exc_info:
            build_scorer(prefs)
        assert exc_info.value.code == "Preferences.Invalid"


class TestCapture:
    """Exception to Result mapping."""

    def test_success(self) -> None:
        result = capture(lambda: 5)
        assert result.success is True
        assert result.value == 5

    def test_planner_error_keeps_kind(self) -> None:
        def boom() -> None:
            raise UpstreamError("provider down")

        result = capture(boom)
        assert result.success is False
        assert result.error is not None
        assert result.error.kind == ErrorKind.UPSTREAM_FAILURE
        assert result.error.message == "provider down"

    def test_unexpected_error(self) -> None:
        def boom() -> None:
            raise KeyError("x")

        result = capture(boom)
        assert result.error is not None
        assert result.error.kind == ErrorKind.UNEXPECTED
        assert result.error.code == "General.UnexpectedError"


class TestLocationInputs:
    """Geocoding and coordinate validation."""

    def test_resolve_location(self, location: Location, fake_provider: FakeProvider) -> None:
        planner = PicnicPlanner(fake_provider, geocoder=_geocoder(location))
        result = planner.resolve_location("Portland", state="OR")
        assert result.value == location

    def test_resolve_not_found(self, fake_provider: FakeProvider) -> None:
        planner = PicnicPlanner(fake_provider, geocoder=_missing)
        result = planner.resolve_location("Atlantis")
        assert result.error is not None
        assert result.error.kind == ErrorKind.NOT_FOUND

    def test_coordinates_valid(self, fake_provider: FakeProvider) -> None:
        result = PicnicPlanner(fake_provider).location_from_coordinates(45.5, -122.6, "Here")
        assert result.value == Location(latitude=45.5, longitude=-122.6, name="Here")

    def test_coordinates_out_of_range(self, fake_provider: FakeProvider) -> None:
        result = PicnicPlanner(fake_provider).location_from_coordinates(95, 0)
        assert result.success is False
        assert result.error is not None
        assert result.error.kind == ErrorKind.VALIDATION
        assert result.error.code == "General.ValidationFailed"


class TestGetForecast:
    """Scored forecast."""

    def test_scores_every_day(self, location: Location, fake_provider: FakeProvider) -> None:
        result = PicnicPlanner(fake_provider).get_forecast(location)

        assert result.value is not None
        assert len(result.value.days) == 14
        assert all(d.assessment.category == SuitabilityCategory.IDEAL for d in result.value.days)
        assert result.value.location == location

    def test_uses_injected_scorer(self, location: Location, fake_provider: FakeProvider) -> None:
        result = PicnicPlanner(fake_provider, PreferenceScorer()).get_forecast(location)
        assert result.value is not None
        assert result.value.days[0].assessment.description == "Perfect conditions for a picnic!"

    def test_upstream_failure(
        self, location: Location, make_provider: type[FakeProvider]
    ) -> None:
        provider = make_provider(forecast_error=UpstreamError("Failed to retrieve forecast"))
        result = PicnicPlanner(provider).get_forecast(location)
        assert result.error is not None
        assert result.error.kind == ErrorKind.UPSTREAM_FAILURE


class TestGetHistorical:
    """Historical summary."""

    def test_summary(self, location: Location, fake_provider: FakeProvider) -> None:
        result = PicnicPlanner(fake_provider).get_historical(location, "2026-07-04", 5)

        assert result.value is not None
        assert result.value.requested_date == date(2026, 7, 4)
        assert result.value.summary.years_of_data == 5
        assert len(fake_provider.historical_calls) == 5

    def test_default_years_back(self, location: Location, fake_provider: FakeProvider) -> None:
        PicnicPlanner(fake_provider, years_back=3).get_historical(location, "2026-07-04")
        assert len(fake_provider.historical_calls) == 3

    def test_partial_data(self, location: Location, make_provider: type[FakeProvider]) -> None:
        provider = make_provider(failing_years={2025, 2024, 2023})
        result = PicnicPlanner(provider).get_historical(location, date(2026, 7, 4), 10)
        assert result.value is not None
        assert result.value.summary.years_of_data == 7

    def test_no_data(self, location: Location, make_provider: type[FakeProvider]) -> None:
        provider = make_provider(failing_years=set(range(2000, 2026)))
        result = PicnicPlanner(provider).get_historical(location, date(2026, 7, 4), 10)
        assert result.error is not None
        assert result.error.kind == ErrorKind.NOT_FOUND
        assert result.error.code == "Weather.HistoricalDataNotFound"

    def test_invalid_date(self, location: Location, fake_provider: FakeProvider) -> None:
        result = PicnicPlanner(fake_provider).get_historical(location, "July 4th")
        assert result.error is not None
        assert result.error.kind == ErrorKind.VALIDATION
        assert fake_provider.historical_calls == []


class TestGetCombined:
    """Forecast and history together."""

    def test_date_inside_forecast(self, location: Location, fake_provider: FakeProvider) -> None:
        result = PicnicPlanner(fake_provider).get_combined(location, "2026-07-04", 4)

        assert result.value is not None
        assert result.value.forecast is not None
        assert result.value.forecast.date == date(2026, 7, 4)
        assert result.value.historical.years_of_data == 4

    def test_date_outside_forecast(
        self, location: Location, fake_provider: FakeProvider
    ) -> None:
        result = PicnicPlanner(fake_provider).get_combined(location, "2026-09-01", 4)

        assert result.value is not None
        assert result.value.forecast is None
        assert result.value.historical.years_of_data == 4

    def test_forecast_failure_reported(
        self, location: Location, make_provider: type[FakeProvider]
    ) -> None:
        provider = make_provider(forecast_error=UpstreamError("down"))
        result = PicnicPlanner(provider).get_combined(location, "2026-07-04", 4)

        assert result.error is not None
        assert result.error.kind == ErrorKind.UPSTREAM_FAILURE
        # History still ran to completion
        assert len(provider.historical_calls) == 4

    def test_history_failure_reported(
        self, location: Location, make_provider: type[FakeProvider]
    ) -> None:
        provider = make_provider(failing_years=set(range(2000, 2026)))
        result = PicnicPlanner(provider).get_combined(location, "2026-07-04", 4)
        assert result.error is not None
        assert result.error.kind == ErrorKind.NOT_FOUND


class TestPlan:
    """Place text to combined outlook."""

    def test_plan(self, location: Location, fake_provider: FakeProvider) -> None:
        planner = PicnicPlanner(fake_provider, geocoder=_geocoder(location))
        result = planner.plan("Portland", "2026-07-04", state="OR", years_back=2)

        assert result.success is True
        assert result.value is not None
        assert result.value.location == location

    def test_geocoding_failure_short_circuits(self, fake_provider: FakeProvider) -> None:
        planner = PicnicPlanner(fake_provider, geocoder=_missing)
        result = planner.plan("Atlantis", "2026-07-04")

        assert result.success is False
        assert result.error is not None
        assert result.error.code == "Geocoding.LocationNotFound"
        assert fake_provider.forecast_calls == 0
