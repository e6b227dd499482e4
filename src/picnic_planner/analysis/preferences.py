"""User-adjustable thresholds for the preference scorer.

Defaults:
  Ideal: 18-26°C, <=20% rain, <=2mm precipitation, <=20 km/h wind, 40-70% humidity
  Poor:  <10°C or >30°C, >=60% rain, >=10mm precipitation, >=35 km/h wind,
         <30% or >80% humidity

Temperatures are always stored in Celsius; ``temperature_unit`` only
controls how values are displayed.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, model_validator

if TYPE_CHECKING:
    from pathlib import Path


class TemperatureUnit(StrEnum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"


class Band(BaseModel):
    """Inclusive min/max range."""

    min: float
    max: float

    @model_validator(mode="after")
    def _ordered(self) -> Band:
        if self.min > self.max:
            msg = f"Band minimum {self.min} is above maximum {self.max}"
            raise ValueError(msg)
        return self


class TemperatureThresholds(BaseModel):
    ideal: Band = Field(default_factory=lambda: Band(min=18, max=26))
    poor: Band = Field(default_factory=lambda: Band(min=10, max=30))

    @model_validator(mode="after")
    def _ideal_inside_poor(self) -> TemperatureThresholds:
        if self.ideal.min < self.poor.min or self.ideal.max > self.poor.max:
            msg = "Ideal temperature band must sit inside the poor limits"
            raise ValueError(msg)
        return self


class RainIdeal(BaseModel):
    chance_max: float = Field(default=20, ge=0, le=100)
    amount_max: float = Field(default=2, ge=0)


class RainPoor(BaseModel):
    chance_min: float = Field(default=60, ge=0, le=100)
    amount_min: float = Field(default=10, ge=0)


class PrecipitationThresholds(BaseModel):
    ideal: RainIdeal = Field(default_factory=RainIdeal)
    poor: RainPoor = Field(default_factory=RainPoor)

    @model_validator(mode="after")
    def _ideal_below_poor(self) -> PrecipitationThresholds:
        if self.ideal.chance_max > self.poor.chance_min:
            msg = "Ideal rain chance must not exceed the poor rain chance"
            raise ValueError(msg)
        if self.ideal.amount_max > self.poor.amount_min:
            msg = "Ideal rain amount must not exceed the poor rain amount"
            raise ValueError(msg)
        return self


class WindIdeal(BaseModel):
    max: float = Field(default=20, ge=0)


class WindPoor(BaseModel):
    min: float = Field(default=35, ge=0)


class WindThresholds(BaseModel):
    ideal: WindIdeal = Field(default_factory=WindIdeal)
    poor: WindPoor = Field(default_factory=WindPoor)

    @model_validator(mode="after")
    def _ideal_below_poor(self) -> WindThresholds:
        if self.ideal.max > self.poor.min:
            msg = "Ideal wind speed must not exceed the poor wind speed"
            raise ValueError(msg)
        return self


class HumidityThresholds(BaseModel):
    ideal: Band = Field(default_factory=lambda: Band(min=40, max=70))
    poor: Band = Field(default_factory=lambda: Band(min=30, max=80))

    @model_validator(mode="after")
    def _ideal_inside_poor(self) -> HumidityThresholds:
        if self.ideal.min < self.poor.min or self.ideal.max > self.poor.max:
            msg = "Ideal humidity band must sit inside the poor limits"
            raise ValueError(msg)
        return self


class UserPreferences(BaseModel):
    """Complete set of thresholds for ``PreferenceScorer``."""

    temperature: TemperatureThresholds = Field(default_factory=TemperatureThresholds)
    precipitation: PrecipitationThresholds = Field(default_factory=PrecipitationThresholds)
    wind: WindThresholds = Field(default_factory=WindThresholds)
    humidity: HumidityThresholds = Field(default_factory=HumidityThresholds)
    temperature_unit: TemperatureUnit = TemperatureUnit.CELSIUS


DEFAULT_PREFERENCES = UserPreferences()


def load_preferences(path: Path) -> UserPreferences:
    """Read preferences from a JSON file.

    Missing sections fall back to the defaults.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        pydantic.ValidationError: If the thresholds are malformed or inconsistent.
    """
    return UserPreferences.model_validate_json(path.read_text())
