"""Error kinds and the exceptions raised by datasources and analysis.

Callers branch on ``kind`` rather than on message text. The planner facade
turns these into structured ``Result`` failures.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Category of a failure, independent of the exception type."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UPSTREAM_FAILURE = "upstream_failure"
    UNEXPECTED = "unexpected"


class PicnicPlannerError(Exception):
    """Base class for all planner errors."""

    kind: ErrorKind = ErrorKind.UNEXPECTED
    default_code: str = "General.Unexpected"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code


class InvalidInputError(PicnicPlannerError):
    """Bad caller input: empty place name, malformed date, bad coordinates."""

    kind = ErrorKind.VALIDATION
    default_code = "General.InvalidInput"


class NotFoundError(PicnicPlannerError):
    """Nothing matched: no geocoding result, no usable historical years."""

    kind = ErrorKind.NOT_FOUND
    default_code = "General.NotFound"


class UpstreamError(PicnicPlannerError):
    """The weather or geocoding provider failed or returned garbage."""

    kind = ErrorKind.UPSTREAM_FAILURE
    default_code = "Weather.ServiceError"
