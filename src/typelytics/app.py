"""FastAPI application factory and lifespan management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from typelytics.catalog import EventCatalog
from typelytics.client import PostHog
from typelytics.config import Settings
from typelytics.errors import ConfigurationError
from typelytics.middleware.auth import APIKeyMiddleware
from typelytics.middleware.logging import RequestLoggingMiddleware
from typelytics.routes import events, health, insights

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log application startup and shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    posthog: PostHog | None = app.state.posthog
    logger.info(
        "api_startup",
        host=settings.host,
        port=settings.port,
        posthog_configured=posthog is not None,
        events=len(posthog.events) if posthog else 0,
    )
    try:
        yield
    finally:
        logger.info("api_shutdown")


def load_client(settings: Settings) -> PostHog | None:
    """Build the PostHog client from the environment.

    A missing event catalog file is fatal. Missing credentials are not: the
    service starts, reports itself not ready, and answers chart requests
    with 503.

    Args:
        settings: Service configuration.

    Returns:
        Configured client, or None when credentials are missing.

    Raises:
        ConfigurationError: If the catalog file cannot be loaded.
    """
    catalog = (
        EventCatalog.from_file(settings.events_file)
        if settings.events_file
        else EventCatalog()
    )
    try:
        return PostHog(events=catalog)
    except ConfigurationError as e:
        logger.warning("posthog_not_configured", setting=e.setting, error=str(e))
        return None


def create_app(
    settings: Settings | None = None,
    posthog: PostHog | None = None,
) -> FastAPI:
    """Factory function to create configured FastAPI application.

    Args:
        settings: Configuration instance. Creates default if None.
        posthog: PostHog client. Built from the environment if None.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings()
    if posthog is None:
        posthog = load_client(settings)

    app = FastAPI(
        title="Typelytics API",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/api/v1/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/api/v1/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.posthog = posthog

    if settings.key:
        app.add_middleware(APIKeyMiddleware, api_key=settings.key)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(events.router, prefix="/api/v1")
    app.include_router(insights.router, prefix="/api/v1")

    return app
