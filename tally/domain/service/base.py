"""Base service class for domain services."""

from collections.abc import Iterator
from contextlib import contextmanager

import logfire
from sqlalchemy.exc import InterfaceError, OperationalError

from tally.domain.error import StoreUnavailableError


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Surface driver and connection failures as StoreUnavailableError."""
    try:
        yield
    except (OperationalError, InterfaceError, ConnectionError) as e:
        logfire.error("Store unavailable", operation=operation, error=str(e))
        raise StoreUnavailableError(f"Store unavailable during {operation}") from e
