"""Geocoding response models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PlaceMatch:
    """One candidate returned by the geocoding search."""

    name: str
    latitude: float
    longitude: float
    country: str = ""
    admin1: str = ""
    country_code: str = ""
    population: int | None = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> PlaceMatch:
        return cls(
            name=raw.get("name", ""),
            latitude=raw["latitude"],
            longitude=raw["longitude"],
            country=raw.get("country") or "",
            admin1=raw.get("admin1") or "",
            country_code=raw.get("country_code") or "",
            population=raw.get("population"),
        )

    @property
    def display_name(self) -> str:
        """``Name, Region, Country`` with empty parts dropped."""
        return ", ".join(part for part in (self.name, self.admin1, self.country) if part)
