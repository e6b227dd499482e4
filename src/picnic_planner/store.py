"""Tiered JSON cache for weather lookups and outlook snapshots.

Files are grouped by how quickly they go stale:
  - live/: forecasts, minutes TTL
  - historical/: per-year archive points, 24h TTL
  - derived/: picnic outlook snapshots written by the fetch flow

Each file is an envelope ``{"meta": {...}, "data": ...}``. ``meta`` is an
``EnvelopeMeta``: where the payload came from, when, until when it may be
reused, plus any caller-supplied keys describing the request.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_serializer, field_validator


class EnvelopeMeta(BaseModel):
    """Metadata block of a cached file.

    Unknown keys (location, place, years_back, ...) are kept as extras and
    readable as attributes.
    """

    model_config = ConfigDict(extra="allow")

    source: str = ""
    fetched_at: datetime | None = None
    valid_until: datetime | None = None

    @field_validator("fetched_at", "valid_until")
    @classmethod
    def _assume_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @field_serializer("fetched_at", "valid_until")
    def _isoformat(self, v: datetime | None) -> str | None:
        return v.isoformat() if v is not None else None

    def is_fresh(self, now: datetime | None = None) -> bool:
        """True while ``valid_until`` lies in the future. No expiry means stale."""
        if self.valid_until is None:
            return False
        return (now or datetime.now(UTC)) < self.valid_until


class DataStore:
    """Reads and writes enveloped JSON files under one base directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.live = base_dir / "live"
        self.historical = base_dir / "historical"
        self.derived = base_dir / "derived"

    def read(self, path: Path) -> Any | None:
        """Payload stored under ``data``, or None if the file is missing."""
        envelope = self.read_raw(path)
        if envelope is None:
            return None
        return envelope.get("data", envelope)

    def read_raw(self, path: Path) -> dict[str, Any] | None:
        """Whole envelope as a dict, or None if the file is missing."""
        full = self._within_base(path)
        if not full.exists():
            return None
        result: dict[str, Any] = json.loads(full.read_text())
        return result

    def read_meta(self, path: Path) -> EnvelopeMeta | None:
        """Parsed ``meta`` block, or None if the file is missing or malformed."""
        envelope = self.read_raw(path)
        if envelope is None:
            return None
        try:
            return EnvelopeMeta.model_validate(envelope.get("meta") or {})
        except ValidationError:
            return None

    def write(
        self,
        path: Path,
        data: Any,
        source: str,
        valid_until: datetime | None = None,
        **params: Any,
    ) -> Path:
        """Write ``data`` inside an envelope and return the absolute path.

        Args:
            path: Path relative to the base (e.g. ``live/forecast/45.52_-122.68.json``).
            data: JSON-serializable payload.
            source: Provider identifier, e.g. ``"open-meteo.com"``.
            valid_until: Reuse deadline; None for snapshots that are never reused.
            **params: Request description stored alongside (location, place, ...).
        """
        full = self._within_base(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        meta = EnvelopeMeta(
            source=source,
            fetched_at=datetime.now(UTC),
            valid_until=valid_until,
            **params,
        )
        envelope = {"meta": meta.model_dump(mode="json", exclude_none=True), "data": data}
        full.write_text(json.dumps(envelope, indent=2))
        return full

    def is_fresh(self, path: Path) -> bool:
        """True if the file exists and its ``valid_until`` has not passed."""
        meta = self.read_meta(path)
        return meta is not None and meta.is_fresh()

    def _within_base(self, path: Path) -> Path:
        full = path if path.is_absolute() else self.base / path
        if not full.resolve().is_relative_to(self.base.resolve()):
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg)
        return full
