"""
Application factory for FastAPI.

This module provides a factory function for creating FastAPI application instances.
The factory pattern allows for:
- Easy testing with custom settings
- Multiple app instances with different configurations
- Clear separation of app creation from route definitions

Usage:
    from backend.main import create_app
    from backend.settings import Settings

    # Default app (uses get_settings())
    app = create_app()

    # Test app with custom settings
    test_settings = Settings(environment="test", _env_file=None)
    test_app = create_app(settings=test_settings)
"""

import logging
from typing import Optional

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from application.exceptions import ProgressError
from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _init_sentry(settings)

    app = FastAPI(
        title="FitCoach Progress API",
        description="Per-user progress tracking for premade workout plans",
        version="1.0.0",
    )

    _configure_cors(app, settings)
    _register_exception_handlers(app)
    _include_routers(app)

    logger.info(
        f"FitCoach Progress API created (environment: {settings.environment}, "
        f"conflict retries: {settings.progress_conflict_retries})"
    )
    return app


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
            profiles_sample_rate=0.1,
        )
        logger.info("Sentry initialized for progress-api")


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware for the application."""
    trusted_origins = list(DEFAULT_CORS_ORIGINS)
    trusted_origins.extend(
        origin for origin in settings.cors_origins_list if origin not in trusted_origins
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=trusted_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _error_body(message: str, error_code: str, **extra) -> dict:
    body = {"detail": message, "error_code": error_code}
    body.update(extra)
    return body


async def progress_error_handler(request: Request, exc: ProgressError) -> JSONResponse:
    """Map domain errors to their HTTP status and error code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(
            f"{request.method} {request.url.path} rejected "
            f"({exc.error_code}): {exc.message}"
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.error_code),
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies and parameters are 400, not 422."""
    errors = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    logger.warning(f"{request.method} {request.url.path} invalid request: {errors}")
    return JSONResponse(
        status_code=400,
        content=_error_body("Invalid request", "VALIDATION_ERROR", errors=errors),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log with traceback and hide internals from the client."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content=_error_body("Internal server error", "INTERNAL_ERROR"),
    )


def _register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProgressError, progress_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import health_router, progress_router

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    # Progress tracking under /workouts
    app.include_router(progress_router)


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
