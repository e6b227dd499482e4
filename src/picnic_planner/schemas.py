"""
Domain models for picnic planner.

Pydantic models for data from external APIs and internal processing.
These define the canonical schema - datasources normalize API responses to these.
Every model is created fresh per request and is plain data, so an outer layer
can serialize it with ``model_dump(mode="json")``.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from enum import StrEnum
from statistics import fmean
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from picnic_planner.errors import ErrorKind

T = TypeVar("T")


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _utcnow() -> datetime:
    return datetime.now(UTC)


# =============================================================================
# Geographic
# =============================================================================


class Location(BaseModel):
    """Geographic point with an optional display name."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    name: str | None = None

    def __str__(self) -> str:
        coords = f"{self.latitude}, {self.longitude}"
        return f"{self.name} ({coords})" if self.name else coords


# =============================================================================
# Daily weather + suitability
# =============================================================================


class DailyObservation(BaseModel):
    """One day of weather, as scored by the suitability scorers.

    Wind and humidity are optional: absence means "unknown", never zero.
    """

    model_config = ConfigDict(frozen=True)

    date: date
    max_temperature: float
    min_temperature: float
    precipitation_chance: float = 0.0
    precipitation_amount: float = 0.0
    humidity: float | None = None
    wind_speed: float | None = None
    wind_direction: float | None = None

    @field_validator("precipitation_chance")
    @classmethod
    def _clamp_chance(cls, v: float) -> float:
        return _clamp(v, 0, 100)

    @field_validator("precipitation_amount")
    @classmethod
    def _clamp_amount(cls, v: float) -> float:
        return max(v, 0.0)

    @field_validator("humidity")
    @classmethod
    def _clamp_humidity(cls, v: float | None) -> float | None:
        return None if v is None else _clamp(v, 0, 100)

    @field_validator("wind_speed")
    @classmethod
    def _clamp_wind_speed(cls, v: float | None) -> float | None:
        return None if v is None else max(v, 0.0)

    @field_validator("wind_direction")
    @classmethod
    def _clamp_wind_direction(cls, v: float | None) -> float | None:
        return None if v is None else _clamp(v, 0, 360)

    @property
    def average_temperature(self) -> float:
        """Midpoint of the daily high and low (°C)."""
        return (self.max_temperature + self.min_temperature) / 2


class SuitabilityCategory(StrEnum):
    """Picnic suitability bucket."""

    IDEAL = "ideal"
    FAIR = "fair"
    POOR = "poor"


class SuitabilityAssessment(BaseModel):
    """Scored, categorized picnic suitability for one day.

    ``reasons`` keeps insertion order: one entry per scored dimension.
    """

    model_config = ConfigDict(frozen=True)

    category: SuitabilityCategory
    score: int
    description: str
    reasons: tuple[str, ...] = ()

    @field_validator("score")
    @classmethod
    def _clamp_score(cls, v: int) -> int:
        return int(_clamp(v, 0, 100))


class ForecastDay(BaseModel):
    """A forecast day paired with its assessment."""

    model_config = ConfigDict(frozen=True)

    observation: DailyObservation
    assessment: SuitabilityAssessment

    @property
    def date(self) -> date:
        return self.observation.date


# =============================================================================
# Historical
# =============================================================================


class YearlyDataPoint(BaseModel):
    """Weather on the requested calendar day in one past year."""

    model_config = ConfigDict(frozen=True)

    year: int
    temperature: float = Field(..., description="Mean temperature (°C)")
    precipitation: float = Field(..., description="Total precipitation (mm)")
    humidity: float = Field(..., description="Mean relative humidity (%)")

    @field_validator("precipitation")
    @classmethod
    def _clamp_precipitation(cls, v: float) -> float:
        return max(v, 0.0)

    @field_validator("humidity")
    @classmethod
    def _clamp_humidity(cls, v: float) -> float:
        return _clamp(v, 0, 100)


class HistoricalSummary(BaseModel):
    """Statistics for one calendar date across the years that returned data.

    Averages are derived from ``yearly_data`` when the model is built and are
    rounded to one decimal; any averages passed in are ignored.
    """

    model_config = ConfigDict(frozen=True)

    date: date
    yearly_data: tuple[YearlyDataPoint, ...] = Field(..., min_length=1)
    average_temperature: float
    average_precipitation: float
    average_humidity: float

    @model_validator(mode="before")
    @classmethod
    def _derive_averages(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not data.get("yearly_data"):
            return data
        points = [YearlyDataPoint.model_validate(p) for p in data["yearly_data"]]
        return {
            **data,
            "yearly_data": points,
            "average_temperature": round(fmean(p.temperature for p in points), 1),
            "average_precipitation": round(fmean(p.precipitation for p in points), 1),
            "average_humidity": round(fmean(p.humidity for p in points), 1),
        }

    @property
    def years_of_data(self) -> int:
        return len(self.yearly_data)

    def data_for_year(self, year: int) -> YearlyDataPoint | None:
        """Return the point for ``year``, or None if that year had no data."""
        return next((p for p in self.yearly_data if p.year == year), None)

    def temperature_range(self) -> tuple[float, float]:
        """(min, max) mean temperature across years."""
        temps = [p.temperature for p in self.yearly_data]
        return min(temps), max(temps)

    def precipitation_range(self) -> tuple[float, float]:
        """(min, max) precipitation across years."""
        precip = [p.precipitation for p in self.yearly_data]
        return min(precip), max(precip)

    def __str__(self) -> str:
        low, high = self.temperature_range()
        return (
            f"{self.date:%m-%d}: Avg {self.average_temperature}°C ({low}-{high}°C), "
            f"Avg {self.average_precipitation}mm precipitation, "
            f"{self.years_of_data} years of data"
        )


# =============================================================================
# Caller-facing results
# =============================================================================


class ForecastResult(BaseModel):
    """Scored multi-day forecast for a location."""

    location: Location
    days: list[ForecastDay] = Field(default_factory=list)
    retrieved_at: datetime = Field(default_factory=_utcnow)

    def day(self, target: date) -> ForecastDay | None:
        """Return the forecast for ``target`` if it is inside the window."""
        return next((d for d in self.days if d.date == target), None)


class HistoricalResult(BaseModel):
    """Historical summary for a location and requested date."""

    location: Location
    requested_date: date
    summary: HistoricalSummary
    retrieved_at: datetime = Field(default_factory=_utcnow)


class CombinedResult(BaseModel):
    """Forecast for the requested date (when in range) plus its history."""

    location: Location
    requested_date: date
    forecast: ForecastDay | None = None
    historical: HistoricalSummary
    retrieved_at: datetime = Field(default_factory=_utcnow)


class ErrorDetail(BaseModel):
    """Structured failure: branch on ``kind``, show ``message``."""

    kind: ErrorKind
    code: str
    message: str


class Result(BaseModel, Generic[T]):
    """Generic result wrapper for operations."""

    success: bool
    value: T | None = None
    error: ErrorDetail | None = None

    @classmethod
    def ok(cls, value: T) -> Result[T]:
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, kind: ErrorKind, code: str, message: str) -> Result[T]:
        return cls(success=False, error=ErrorDetail(kind=kind, code=code, message=message))
