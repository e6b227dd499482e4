"""Display helpers for the CLI.

Pure conversion and formatting functions with no external dependencies.
Values are stored in Celsius and converted only for display.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from picnic_planner.analysis.preferences import TemperatureUnit
from picnic_planner.schemas import SuitabilityCategory

if TYPE_CHECKING:
    from picnic_planner.schemas import ForecastDay, HistoricalSummary

CATEGORY_LABELS: dict[SuitabilityCategory, str] = {
    SuitabilityCategory.IDEAL: "\u2600\ufe0f Ideal",
    SuitabilityCategory.FAIR: "\u26c5 Fair",
    SuitabilityCategory.POOR: "\U0001f327\ufe0f Poor",
}


def c_to_f(celsius: float) -> float:
    """Convert Celsius to Fahrenheit."""
    return celsius * 9 / 5 + 32


def f_to_c(fahrenheit: float) -> float:
    """Convert Fahrenheit to Celsius."""
    return (fahrenheit - 32) * 5 / 9


def display_temperature(
    celsius: float | None, unit: TemperatureUnit = TemperatureUnit.CELSIUS
) -> str:
    """``21.5°C`` / ``70.7°F``, or ``--`` when unknown."""
    if celsius is None:
        return "--"
    if unit == TemperatureUnit.FAHRENHEIT:
        return f"{c_to_f(celsius):.1f}°F"
    return f"{celsius:.1f}°C"


def display_temperature_range(
    max_celsius: float | None,
    min_celsius: float | None,
    unit: TemperatureUnit = TemperatureUnit.CELSIUS,
) -> str:
    """High / low pair."""
    return f"{display_temperature(max_celsius, unit)} / {display_temperature(min_celsius, unit)}"


def format_forecast_day(day: ForecastDay, unit: TemperatureUnit = TemperatureUnit.CELSIUS) -> str:
    """One-line summary of a scored forecast day."""
    obs = day.observation
    label = CATEGORY_LABELS[day.assessment.category]
    temps = display_temperature_range(obs.max_temperature, obs.min_temperature, unit)
    return (
        f"{obs.date:%a %b %d}  {label:<10} {day.assessment.score:>3}  {temps}  "
        f"rain {obs.precipitation_chance:g}%"
    )


def format_historical_summary(
    summary: HistoricalSummary, unit: TemperatureUnit = TemperatureUnit.CELSIUS
) -> list[str]:
    """Summary header followed by one line per year, newest first."""
    low, high = summary.temperature_range()
    lines = [
        f"{summary.date:%b %d} over {summary.years_of_data} years",
        f"  Avg temperature:   {display_temperature(summary.average_temperature, unit)} "
        f"({display_temperature(low, unit)} to {display_temperature(high, unit)})",
        f"  Avg precipitation: {summary.average_precipitation:.1f} mm",
        f"  Avg humidity:      {summary.average_humidity:.1f}%",
    ]
    for point in sorted(summary.yearly_data, key=lambda p: p.year, reverse=True):
        lines.append(
            f"    {point.year}  {display_temperature(point.temperature, unit):>8}  "
            f"{point.precipitation:5.1f} mm  {point.humidity:5.1f}%"
        )
    return lines
