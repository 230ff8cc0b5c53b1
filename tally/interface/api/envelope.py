"""Response envelope shared by every vote and admin route.

Success: ``{"success": true, "data": ..., "timestamp": ...}``
Failure: ``{"success": false, "error": "...", "code": "NOT_FOUND"}``
"""

from datetime import datetime, timezone
from typing import Generic, Literal, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from tally.interface.error import ErrorCode

T = TypeVar("T")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Envelope(BaseModel, Generic[T]):
    """Successful response."""

    success: Literal[True] = True
    data: T
    timestamp: datetime = Field(default_factory=_now)


class ErrorEnvelope(BaseModel):
    """Failed response."""

    success: Literal[False] = False
    error: str
    code: ErrorCode


def ok(data: T) -> Envelope[T]:
    """Wrap route data in the success envelope."""
    return Envelope(data=data)


def error_response(status_code: int, code: ErrorCode, message: str) -> JSONResponse:
    """Render the failure envelope."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorEnvelope(error=message, code=code).model_dump(mode="json"),
    )
