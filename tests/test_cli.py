"""
Tests for CLI functionality.

These tests verify the command-line interface logic.
"""

from __future__ import annotations

import argparse
import json
from typing import TYPE_CHECKING, Any
from unittest.mock import patch

import pytest

from picnic_planner.cli import (
    build_planner,
    cmd_info,
    cmd_refresh,
    create_parser,
    main,
    report_error,
)
from picnic_planner.errors import ErrorKind, NotFoundError
from picnic_planner.schemas import ErrorDetail, Location
from picnic_planner.services.planner import PicnicPlanner

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from conftest import FakeProvider


def _planner(provider: FakeProvider, location: Location) -> PicnicPlanner:
    def geocode(place: str, **_filters: Any) -> Location:
        if place == "Atlantis":
            msg = "No geocoding results found for query: Atlantis"
            raise NotFoundError(msg, code="Geocoding.LocationNotFound")
        return location

    return PicnicPlanner(provider, geocoder=geocode)


class TestCreateParser:
    """Tests for create_parser function."""

    def test_creates_parser(self) -> None:
        """Parser is created successfully."""
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.prog == "picnic-planner"

    def test_parser_has_version(self) -> None:
        """Parser has version argument."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--version"])

    def test_parser_has_debug_flag(self) -> None:
        """Parser accepts --debug flag."""
        args = create_parser().parse_args(["--debug", "info"])
        assert args.debug is True

    def test_forecast_command(self) -> None:
        """Forecast takes a place and location filters."""
        args = create_parser().parse_args(
            ["forecast", "Springfield", "--state", "MO", "--country", "US", "--json"]
        )
        assert args.command == "forecast"
        assert args.place == "Springfield"
        assert args.state == "MO"
        assert args.json is True

    def test_outlook_requires_date(self) -> None:
        """Outlook refuses to run without --date."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["outlook", "Austin"])

    def test_historical_command(self) -> None:
        """Historical accepts --date and --years-back."""
        args = create_parser().parse_args(
            ["historical", "Austin", "--date", "2026-07-04", "--years-back", "20"]
        )
        assert args.date == "2026-07-04"
        assert args.years_back == 20

    def test_coordinates(self) -> None:
        """Coordinates can replace the place name."""
        args = create_parser().parse_args(["forecast", "--lat", "45.5", "--lon", "-122.6"])
        assert args.place is None
        assert args.lat == 45.5

    def test_refresh_command(self) -> None:
        """Refresh takes a place and an optional date."""
        args = create_parser().parse_args(["refresh", "Portland"])
        assert args.command == "refresh"
        assert args.date is None


class TestCmdInfo:
    """Tests for cmd_info function."""

    def test_prints_app_info(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Info command prints application information."""
        assert cmd_info(argparse.Namespace()) == 0
        output = capsys.readouterr().out
        assert "Application: picnic-planner" in output
        assert "Version" in output


class TestReportError:
    """User-facing error messages."""

    def test_not_found_shows_message(self, capsys: pytest.CaptureFixture[str]) -> None:
        error = ErrorDetail(kind=ErrorKind.NOT_FOUND, code="x", message="No results for Atlantis")
        assert report_error(error) == 1
        assert "No results for Atlantis" in capsys.readouterr().err

    def test_upstream_is_generic(self, capsys: pytest.CaptureFixture[str]) -> None:
        error = ErrorDetail(
            kind=ErrorKind.UPSTREAM_FAILURE, code="Weather.ServiceError", message="HTTP 503 at x"
        )
        assert report_error(error) == 1
        err = capsys.readouterr().err
        assert "try again" in err
        assert "503" not in err


class TestBuildPlanner:
    """Planner wiring from settings and options."""

    def test_preferences_file_selects_preference_scorer(self, tmp_path: Path) -> None:
        prefs = tmp_path / "prefs.json"
        prefs.write_text(json.dumps({"wind": {"ideal": {"max": 10}, "poor": {"min": 20}}}))
        args = create_parser().parse_args(["forecast", "Austin", "--preferences", str(prefs)])

        planner = build_planner(args)

        assert type(planner.scorer).__name__ == "PreferenceScorer"
        assert planner.scorer.preferences.wind.ideal.max == 10  # type: ignore[attr-defined]

    def test_default_scorer(self) -> None:
        args = create_parser().parse_args(["forecast", "Austin"])
        assert type(build_planner(args).scorer).__name__ == "FixedThresholdScorer"

    def test_missing_preferences_file(
        self, capsys: pytest.CaptureFixture[str], tmp_path: Path
    ) -> None:
        exit_code = main(["forecast", "Austin", "--preferences", str(tmp_path / "none.json")])
        assert exit_code == 1
        assert "Could not load preferences" in capsys.readouterr().err


class TestWeatherCommands:
    """forecast / historical / outlook through main()."""

    @pytest.fixture(autouse=True)
    def _canned_planner(self, fake_provider: FakeProvider, location: Location) -> Iterator[None]:
        planner = _planner(fake_provider, location)
        with patch("picnic_planner.cli.build_planner", return_value=planner):
            yield

    def test_forecast_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["forecast", "Portland"]) == 0
        output = capsys.readouterr().out
        assert output.startswith("Forecast for Portland")
        assert output.count("Ideal") == 14

    def test_forecast_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["forecast", "Portland", "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert len(payload["days"]) == 14
        assert payload["days"][0]["assessment"]["category"] == "ideal"

    def test_historical_fahrenheit(self, capsys: pytest.CaptureFixture[str]) -> None:
        argv = ["historical", "Portland", "--date", "2026-07-04", "--years-back", "3", "--fahrenheit"]
        assert main(argv) == 0
        output = capsys.readouterr().out
        assert "Jul 04 over 3 years" in output
        assert "°F" in output

    def test_outlook(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["outlook", "Portland", "--date", "2026-07-04", "--years-back", "2"]) == 0
        output = capsys.readouterr().out
        assert "Outlook for Portland" in output
        assert "Excellent picnic conditions!" in output
        assert "Perfect temperature range (22°C)" in output

    def test_outlook_outside_forecast_window(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["outlook", "Portland", "--date", "2026-12-25", "--years-back", "2"]) == 0
        assert "outside the forecast window" in capsys.readouterr().out

    def test_unknown_place(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["forecast", "Atlantis"]) == 1
        assert "Atlantis" in capsys.readouterr().err

    def test_bad_date(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["historical", "Portland", "--date", "July 4"]) == 1
        assert "Invalid date format" in capsys.readouterr().err

    def test_bad_coordinates(self, fake_provider: FakeProvider) -> None:
        assert main(["forecast", "--lat", "120", "--lon", "0"]) == 1
        assert fake_provider.forecast_calls == 0


class TestCmdRefresh:
    """Tests for cmd_refresh function."""

    def test_runs_fetch_flow(self) -> None:
        """Refresh passes the place, date and filters to the flow."""
        args = create_parser().parse_args(
            ["refresh", "Austin", "--date", "2026-07-04", "--state", "TX", "--years-back", "5"]
        )

        with patch("picnic_planner.cli.fetch_outlook") as mock_fetch:
            mock_fetch.return_value = {"location": "Austin", "category": "ideal"}
            exit_code = cmd_refresh(args)

        assert exit_code == 0
        mock_fetch.assert_called_once_with(
            "Austin", "2026-07-04", years_back=5, state="TX", country=None
        )

    def test_years_back_from_settings(self) -> None:
        """Refresh defaults years_back from settings."""
        args = create_parser().parse_args(["refresh", "Austin"])

        with patch("picnic_planner.cli.fetch_outlook", return_value={}) as mock_fetch:
            cmd_refresh(args)

        assert mock_fetch.call_args.kwargs["years_back"] == 10


class TestMain:
    """Tests for main entry point."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_info(self) -> None:
        assert main(["info"]) == 0
