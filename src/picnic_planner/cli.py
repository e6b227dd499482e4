"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING

from picnic_planner import __version__
from picnic_planner.analysis.preferences import TemperatureUnit
from picnic_planner.config import get_settings
from picnic_planner.errors import ErrorKind, PicnicPlannerError
from picnic_planner.flows.fetch import fetch_outlook
from picnic_planner.formatting import format_forecast_day, format_historical_summary
from picnic_planner.schemas import (
    CombinedResult,
    ErrorDetail,
    ForecastResult,
    HistoricalResult,
    Result,
)
from picnic_planner.services.planner import PicnicPlanner, build_scorer
from picnic_planner.services.providers import CachedWeatherProvider, OpenMeteoProvider
from picnic_planner.store import DataStore

if TYPE_CHECKING:
    from picnic_planner.schemas import Location


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="picnic-planner",
        description="Score upcoming and historical weather for picnic suitability",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    # Shared location/output options for the weather commands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("place", nargs="?", help="City or place name")
    common.add_argument("--state", help="State/region filter (e.g. TX or Texas)")
    common.add_argument("--country", help="Country filter (name or ISO code)")
    common.add_argument("--lat", type=float, help="Latitude (skips geocoding)")
    common.add_argument("--lon", type=float, help="Longitude (skips geocoding)")
    common.add_argument("--json", action="store_true", help="Print JSON instead of text")
    common.add_argument("--preferences", type=Path, help="Score with thresholds from a JSON file")
    common.add_argument("--fahrenheit", action="store_true", help="Show temperatures in °F")

    dated = argparse.ArgumentParser(add_help=False)
    dated.add_argument("--date", required=True, help="Target date (YYYY-MM-DD)")
    dated.add_argument(
        "--years-back",
        type=int,
        default=None,
        help="Years of history to average (default: years_back from settings)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")
    subparsers.add_parser("forecast", parents=[common], help="Scored 14-day forecast")
    subparsers.add_parser(
        "historical", parents=[common, dated], help="Past weather on a calendar date"
    )
    subparsers.add_parser(
        "outlook", parents=[common, dated], help="Forecast and history for one date"
    )

    refresh_parser = subparsers.add_parser(
        "refresh", help="Run the fetch flow and save an outlook snapshot"
    )
    refresh_parser.add_argument("place", help="City or place name")
    refresh_parser.add_argument("--date", default=None, help="Target date (default: today)")
    refresh_parser.add_argument("--state", help="State/region filter")
    refresh_parser.add_argument("--country", help="Country filter")
    refresh_parser.add_argument("--years-back", type=int, default=None)

    return parser


def configure_logging(debug: bool = False) -> None:
    """Route library logging to stderr at the configured level."""
    level = "DEBUG" if debug else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_planner(args: argparse.Namespace) -> PicnicPlanner:
    """Planner wired from settings and CLI options."""
    settings = get_settings()
    provider = CachedWeatherProvider(
        OpenMeteoProvider(forecast_days=settings.forecast_days, timeout=settings.request_timeout),
        DataStore(settings.data_dir),
        forecast_ttl=timedelta(minutes=settings.forecast_cache_minutes),
        historical_ttl=timedelta(hours=settings.historical_cache_hours),
    )
    preferences_path = getattr(args, "preferences", None) or settings.preferences_path
    return PicnicPlanner(
        provider,
        build_scorer(preferences_path),
        years_back=settings.years_back,
        historical_timeout=settings.historical_timeout,
        max_workers=settings.max_workers,
    )


def _unit(args: argparse.Namespace) -> TemperatureUnit:
    return TemperatureUnit.FAHRENHEIT if args.fahrenheit else TemperatureUnit.CELSIUS


def report_error(error: ErrorDetail | None) -> int:
    """Print a user-facing message for a failed Result and return exit code 1."""
    if error is None:
        print("Error: unknown failure", file=sys.stderr)
    elif error.kind in (ErrorKind.VALIDATION, ErrorKind.NOT_FOUND):
        print(f"Error: {error.message}", file=sys.stderr)
    else:
        logging.getLogger(__name__).debug("%s: %s", error.code, error.message)
        print(
            "Error: weather service is unavailable right now. Please try again later.",
            file=sys.stderr,
        )
    return 1


def _locate(planner: PicnicPlanner, args: argparse.Namespace) -> Result[Location]:
    if args.lat is not None and args.lon is not None:
        return planner.location_from_coordinates(args.lat, args.lon, name=args.place)
    return planner.resolve_location(args.place or "", state=args.state, country=args.country)


def _emit_json(model: ForecastResult | HistoricalResult | CombinedResult) -> None:
    print(model.model_dump_json(indent=2))


def _print_forecast(forecast: ForecastResult, args: argparse.Namespace) -> None:
    print(f"Forecast for {forecast.location}")
    for day in forecast.days:
        print(f"  {format_forecast_day(day, _unit(args))}")


def _print_historical(result: HistoricalResult, args: argparse.Namespace) -> None:
    print(f"History for {result.location}")
    for line in format_historical_summary(result.summary, _unit(args)):
        print(f"  {line}")


def _print_outlook(outlook: CombinedResult, args: argparse.Namespace) -> None:
    print(f"Outlook for {outlook.location} on {outlook.requested_date:%A %B %d, %Y}")
    if outlook.forecast is None:
        print("  Date is outside the forecast window.")
    else:
        assessment = outlook.forecast.assessment
        print(f"  {format_forecast_day(outlook.forecast, _unit(args))}")
        print(f"  {assessment.description}")
        for reason in assessment.reasons:
            print(f"    - {reason}")
    for line in format_historical_summary(outlook.historical, _unit(args)):
        print(f"  {line}")


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Data directory: {settings.data_dir}")
    return 0


def cmd_forecast(args: argparse.Namespace) -> int:
    """Handle the 'forecast' command."""
    planner = build_planner(args)
    located = _locate(planner, args)
    if located.value is None:
        return report_error(located.error)

    result = planner.get_forecast(located.value)
    if result.value is None:
        return report_error(result.error)

    if args.json:
        _emit_json(result.value)
    else:
        _print_forecast(result.value, args)
    return 0


def cmd_historical(args: argparse.Namespace) -> int:
    """Handle the 'historical' command."""
    planner = build_planner(args)
    located = _locate(planner, args)
    if located.value is None:
        return report_error(located.error)

    result = planner.get_historical(located.value, args.date, args.years_back)
    if result.value is None:
        return report_error(result.error)

    if args.json:
        _emit_json(result.value)
    else:
        _print_historical(result.value, args)
    return 0


def cmd_outlook(args: argparse.Namespace) -> int:
    """Handle the 'outlook' command."""
    planner = build_planner(args)
    located = _locate(planner, args)
    if located.value is None:
        return report_error(located.error)

    result = planner.get_combined(located.value, args.date, args.years_back)
    if result.value is None:
        return report_error(result.error)

    if args.json:
        _emit_json(result.value)
    else:
        _print_outlook(result.value, args)
    return 0


def cmd_refresh(args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: run the fetch flow."""
    settings = get_settings()
    years_back = args.years_back if args.years_back is not None else settings.years_back
    print(f"Fetching outlook for {args.place}...")
    summary = fetch_outlook(
        args.place,
        args.date,
        years_back=years_back,
        state=args.state,
        country=args.country,
    )
    print(f"Done: {summary}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.debug)

    commands = {
        "info": cmd_info,
        "forecast": cmd_forecast,
        "historical": cmd_historical,
        "outlook": cmd_outlook,
        "refresh": cmd_refresh,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1
    try:
        return handler(args)
    except PicnicPlannerError as exc:
        return report_error(ErrorDetail(kind=exc.kind, code=exc.code, message=exc.message))


if __name__ == "__main__":
    sys.exit(main())
