"""Interface layer errors.

Maps domain errors to the wire error codes and HTTP statuses.
"""

from enum import Enum

from fastapi import status

from tally.domain.error import (
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    StoreUnavailableError,
    UnauthenticatedError,
    ValidationError,
)


class ErrorCode(str, Enum):
    """Machine-readable error code in the response envelope."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# Checked in order; subclasses before their bases
_DOMAIN_ERRORS: list[tuple[type[DomainError], int, ErrorCode]] = [
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED, ErrorCode.UNAUTHENTICATED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN, ErrorCode.FORBIDDEN),
    (ValidationError, status.HTTP_400_BAD_REQUEST, ErrorCode.INVALID_ARGUMENT),
    (NotFoundError, status.HTTP_404_NOT_FOUND, ErrorCode.NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT, ErrorCode.CONFLICT),
    (
        StoreUnavailableError,
        status.HTTP_503_SERVICE_UNAVAILABLE,
        ErrorCode.STORE_UNAVAILABLE,
    ),
]


def classify(error: DomainError) -> tuple[int, ErrorCode]:
    """Return the HTTP status and error code for a domain error."""
    for error_type, status_code, code in _DOMAIN_ERRORS:
        if isinstance(error, error_type):
            return status_code, code
    return status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCode.INTERNAL_ERROR
