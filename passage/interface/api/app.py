"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from passage.config import Settings
from passage.interface.api.routes import auth, health
from passage.interface.error import (
    request_validation_error_handler,
    unhandled_error_handler,
)
from passage.util.di.container import create_container, setup_di
from passage.util.logging import get_logger
from passage.util.observability import instrument_fastapi

logger = get_logger(__name__)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container; the production container when omitted

    Raises:
        ConfigurationError: If required secrets are missing
    """
    # Fails closed on a missing or weak signing secret
    settings = Settings()

    app_instance = FastAPI(
        title="Passage API",
        description="Authentication backend: signup, login, Google sign-in and password reset",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    setup_di(app_instance, container or create_container())

    app_instance.add_exception_handler(
        RequestValidationError, request_validation_error_handler
    )
    app_instance.add_exception_handler(Exception, unhandled_error_handler)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)

    logger.info("Application created: environment=%s", settings.environment)

    return app_instance
