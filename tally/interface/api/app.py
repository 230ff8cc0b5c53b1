"""FastAPI application."""

import sys

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logfire

from tally.domain.error import DomainError
from tally.interface.api.envelope import error_response
from tally.interface.api.routes import admin, health, votes
from tally.interface.error import ErrorCode, classify
from tally.util.di.container import create_container, setup_di
from tally.util.observability import instrument_fastapi


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error in the failure envelope."""
    status_code, code = classify(exc)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logfire.error(
            "Request failed", path=request.url.path, code=code.value, error=str(exc)
        )
    return error_response(status_code, code, str(exc))


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and parameters are INVALID_ARGUMENT, not 422."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return error_response(
        status.HTTP_400_BAD_REQUEST, ErrorCode.INVALID_ARGUMENT, message
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Log anything unexpected and hide the details from the client."""
    logfire.error(
        "Unexpected error",
        path=request.url.path,
        error=str(exc),
        _exc_info=sys.exc_info(),
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.INTERNAL_ERROR,
        "Internal server error",
    )


def register_error_handlers(app_instance: FastAPI) -> None:
    app_instance.add_exception_handler(DomainError, handle_domain_error)
    app_instance.add_exception_handler(RequestValidationError, handle_validation_error)
    app_instance.add_exception_handler(Exception, handle_unexpected_error)


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    app_instance = FastAPI(
        title="Tally API",
        description="Vote aggregation for forum topics and posts, with score reconciliation",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    # Settings are loaded from environment automatically
    container = create_container()
    setup_di(app_instance, container)

    register_error_handlers(app_instance)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(admin.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
