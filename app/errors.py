# app/errors.py
from enum import Enum
from typing import Any

from fastapi.responses import JSONResponse


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    UPSTREAM_FAILURE = "upstream_failure"
    UNKNOWN = "unknown"


# Keep aligned with ErrorKind.
_STATUS: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UPSTREAM_FAILURE: 500,
    ErrorKind.UNKNOWN: 500,
}


class DailyError(Exception):
    """Base for every condition a route turns into an ``{"error": ...}`` body."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def status_code(self) -> int:
        return _STATUS[self.kind]

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class NotFound(DailyError):
    kind = ErrorKind.NOT_FOUND


class UpstreamFailure(DailyError):
    kind = ErrorKind.UPSTREAM_FAILURE


def error_response(err: DailyError) -> JSONResponse:
    return JSONResponse(err.to_dict(), status_code=err.status_code)
