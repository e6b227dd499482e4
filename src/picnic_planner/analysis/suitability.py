"""Picnic suitability scoring.

Two independent strategies share the ``SuitabilityScorer`` interface:

  - ``FixedThresholdScorer``: four dimensions (temperature, rain chance, wind,
    humidity) scored on fixed bands and summed to 0-100.
  - ``PreferenceScorer``: starts at 100 and deducts per dimension using
    user-defined bands; any dimension in its "poor" band forces Poor.

Both are pure: no I/O, identical inputs give identical output, including
reason wording and order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from picnic_planner.analysis.preferences import DEFAULT_PREFERENCES, UserPreferences
from picnic_planner.schemas import SuitabilityAssessment, SuitabilityCategory

if TYPE_CHECKING:
    from picnic_planner.schemas import DailyObservation

# Category cut points on the summed fixed-threshold score
IDEAL_MIN_SCORE = 80
FAIR_MIN_SCORE = 60

# Points awarded when wind or humidity is unknown
NEUTRAL_POINTS = 10

FIXED_DESCRIPTIONS: dict[SuitabilityCategory, str] = {
    SuitabilityCategory.IDEAL: "Excellent picnic conditions!",
    SuitabilityCategory.FAIR: "Good picnic conditions with minor concerns",
    SuitabilityCategory.POOR: "Poor picnic conditions",
}


def _num(value: float) -> str:
    """Render a measurement without a trailing ``.0``."""
    return f"{value:g}"


class SuitabilityScorer(Protocol):
    """Anything that turns a day of weather into an assessment."""

    def assess(self, observation: DailyObservation) -> SuitabilityAssessment: ...


# =============================================================================
# Fixed thresholds
# =============================================================================


def _temperature_points(max_temp: float, min_temp: float, reasons: list[str]) -> int:
    avg = (max_temp + min_temp) / 2
    shown = round(avg)
    if 20 <= avg <= 25:
        reasons.append(f"Perfect temperature range ({shown}°C)")
        return 30
    if 15 <= avg <= 30:
        reasons.append(f"Acceptable temperature ({shown}°C)")
        return 20
    if avg < 15:
        reasons.append(f"Too cold for comfortable outdoor activities ({shown}°C)")
    else:
        reasons.append(f"Too hot for comfortable outdoor activities ({shown}°C)")
    return 5


def _precipitation_points(chance: float, reasons: list[str]) -> int:
    if chance <= 10:
        reasons.append(f"Very low chance of rain ({_num(chance)}%)")
        return 30
    if chance <= 30:
        reasons.append(f"Low chance of rain ({_num(chance)}%)")
        return 20
    if chance <= 50:
        reasons.append(f"Moderate chance of rain ({_num(chance)}%)")
        return 10
    reasons.append(f"High chance of rain ({_num(chance)}%)")
    return 0


def _wind_points(wind_speed: float | None, reasons: list[str]) -> int:
    if wind_speed is None:
        reasons.append("Wind data unavailable")
        return NEUTRAL_POINTS
    if wind_speed <= 15:
        reasons.append(f"Light winds ({_num(wind_speed)} km/h)")
        return 20
    if wind_speed <= 25:
        reasons.append(f"Moderate winds ({_num(wind_speed)} km/h)")
        return 15
    if wind_speed <= 35:
        reasons.append(f"Strong winds ({_num(wind_speed)} km/h)")
        return 5
    reasons.append(f"Very strong winds ({_num(wind_speed)} km/h)")
    return 0


def _humidity_points(humidity: float | None, reasons: list[str]) -> int:
    if humidity is None:
        reasons.append("Humidity data unavailable")
        return NEUTRAL_POINTS
    if 40 <= humidity <= 60:
        reasons.append(f"Comfortable humidity ({_num(humidity)}%)")
        return 20
    if 30 <= humidity <= 70:
        reasons.append(f"Acceptable humidity ({_num(humidity)}%)")
        return 15
    if humidity < 30:
        reasons.append(f"Low humidity may cause discomfort ({_num(humidity)}%)")
    else:
        reasons.append(f"High humidity may cause discomfort ({_num(humidity)}%)")
    return 5


def category_for_score(score: int) -> SuitabilityCategory:
    """Map a summed fixed-threshold score to its category."""
    if score >= IDEAL_MIN_SCORE:
        return SuitabilityCategory.IDEAL
    if score >= FAIR_MIN_SCORE:
        return SuitabilityCategory.FAIR
    return SuitabilityCategory.POOR


def assess_conditions(
    max_temp: float,
    min_temp: float,
    precipitation_chance: float,
    precipitation_amount: float,
    wind_speed: float | None = None,
    humidity: float | None = None,
) -> SuitabilityAssessment:
    """
    Score raw weather values for picnic suitability.

    Total function: any numeric input is accepted, extremes just score low.
    ``precipitation_amount`` is accepted for signature parity but only the
    chance of rain is scored.

    Args:
        max_temp: Daily high (°C).
        min_temp: Daily low (°C).
        precipitation_chance: Probability of rain (0-100).
        precipitation_amount: Expected rain (mm).
        wind_speed: Max wind speed (km/h), None if unknown.
        humidity: Relative humidity (%), None if unknown.

    Returns:
        Assessment with exactly four reasons: temperature, rain, wind, humidity.
    """
    reasons: list[str] = []
    total = (
        _temperature_points(max_temp, min_temp, reasons)
        + _precipitation_points(precipitation_chance, reasons)
        + _wind_points(wind_speed, reasons)
        + _humidity_points(humidity, reasons)
    )
    category = category_for_score(total)
    return SuitabilityAssessment(
        category=category,
        score=total,
        description=FIXED_DESCRIPTIONS[category],
        reasons=tuple(reasons),
    )


class FixedThresholdScorer:
    """Scores with the fixed 30/30/20/20 point bands."""

    name = "fixed"

    def assess(self, observation: DailyObservation) -> SuitabilityAssessment:
        return assess_conditions(
            observation.max_temperature,
            observation.min_temperature,
            observation.precipitation_chance,
            observation.precipitation_amount,
            wind_speed=observation.wind_speed,
            humidity=observation.humidity,
        )


# =============================================================================
# User preferences
# =============================================================================

PREFERENCE_IDEAL_MIN_SCORE = 85
PREFERENCE_FAIR_MIN_SCORE = 60

PREFERENCE_DESCRIPTIONS: dict[SuitabilityCategory, str] = {
    SuitabilityCategory.IDEAL: "Perfect conditions for a picnic!",
    SuitabilityCategory.FAIR: "Good conditions with minor concerns",
    SuitabilityCategory.POOR: "Challenging conditions for outdoor activities",
}

# (fair deduction, poor deduction) per dimension
TEMPERATURE_PENALTY = (10, 30)
RAIN_CHANCE_PENALTY = (8, 25)
RAIN_AMOUNT_PENALTY = (6, 20)
WIND_PENALTY = (5, 15)
HUMIDITY_PENALTY = (3, 10)


class PreferenceScorer:
    """Scores against user-adjustable thresholds.

    Unlike the fixed scorer, a single dimension in its poor band makes the
    whole day Poor no matter how high the remaining score is.
    """

    name = "preferences"

    def __init__(self, preferences: UserPreferences | None = None) -> None:
        self.preferences = preferences or DEFAULT_PREFERENCES

    def assess(self, observation: DailyObservation) -> SuitabilityAssessment:  # noqa: PLR0912
        prefs = self.preferences
        reasons: list[str] = []
        score = 100
        poor = False

        avg = observation.average_temperature
        temp = prefs.temperature
        if temp.ideal.min <= avg <= temp.ideal.max:
            reasons.append(f"Ideal temperature ({round(avg)}°C)")
        elif avg < temp.poor.min or avg > temp.poor.max:
            reasons.append(f"Poor temperature ({round(avg)}°C)")
            score -= TEMPERATURE_PENALTY[1]
            poor = True
        else:
            reasons.append(f"Fair temperature ({round(avg)}°C)")
            score -= TEMPERATURE_PENALTY[0]

        chance = observation.precipitation_chance
        rain = prefs.precipitation
        if chance <= rain.ideal.chance_max:
            reasons.append(f"Low rain chance ({_num(chance)}%)")
        elif chance >= rain.poor.chance_min:
            reasons.append(f"High rain chance ({_num(chance)}%)")
            score -= RAIN_CHANCE_PENALTY[1]
            poor = True
        else:
            reasons.append(f"Moderate rain chance ({_num(chance)}%)")
            score -= RAIN_CHANCE_PENALTY[0]

        # Rain amount is only reported when some rain is expected
        amount = observation.precipitation_amount
        if amount > 0:
            if amount <= rain.ideal.amount_max:
                reasons.append(f"Light rain ({_num(amount)}mm)")
            elif amount >= rain.poor.amount_min:
                reasons.append(f"Heavy rain ({_num(amount)}mm)")
                score -= RAIN_AMOUNT_PENALTY[1]
                poor = True
            else:
                reasons.append(f"Moderate rain ({_num(amount)}mm)")
                score -= RAIN_AMOUNT_PENALTY[0]

        wind = observation.wind_speed
        if wind is None:
            reasons.append("Wind data unavailable")
        elif wind <= prefs.wind.ideal.max:
            reasons.append(f"Light breeze ({round(wind)} km/h)")
        elif wind >= prefs.wind.poor.min:
            reasons.append(f"Strong wind ({round(wind)} km/h)")
            score -= WIND_PENALTY[1]
            poor = True
        else:
            reasons.append(f"Moderate wind ({round(wind)} km/h)")
            score -= WIND_PENALTY[0]

        humidity = observation.humidity
        hum = prefs.humidity
        if humidity is None:
            reasons.append("Humidity data unavailable")
        elif hum.ideal.min <= humidity <= hum.ideal.max:
            reasons.append(f"Comfortable humidity ({_num(humidity)}%)")
        elif humidity < hum.poor.min or humidity > hum.poor.max:
            reasons.append(f"Uncomfortable humidity ({_num(humidity)}%)")
            score -= HUMIDITY_PENALTY[1]
            poor = True
        else:
            reasons.append(f"Fair humidity ({_num(humidity)}%)")
            score -= HUMIDITY_PENALTY[0]

        if poor:
            category = SuitabilityCategory.POOR
        elif score >= PREFERENCE_IDEAL_MIN_SCORE:
            category = SuitabilityCategory.IDEAL
        elif score >= PREFERENCE_FAIR_MIN_SCORE:
            category = SuitabilityCategory.FAIR
        else:
            category = SuitabilityCategory.POOR

        return SuitabilityAssessment(
            category=category,
            score=max(0, score),
            description=PREFERENCE_DESCRIPTIONS[category],
            reasons=tuple(reasons),
        )
