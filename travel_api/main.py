"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, rate limiting)
- Logging configuration
- Lifecycle notifier (background delivery of travel order events)

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from travel_api.core.config import settings
from travel_api.infrastructure.travel.lifecycle_notifier import QueuedLifecycleNotifier
from travel_api.infrastructure.travel.tables import create_schema
from travel_api.interfaces.health import router as health_router
from travel_api.interfaces.travel.dependencies import (
    get_db_engine,
    set_lifecycle_notifier,
)
from travel_api.interfaces.travel.router import router as travel_router
from travel_api.shared.errors.handlers import register_error_handlers
from travel_api.shared.logging import configure_logging
from travel_api.shared.security.headers import SecurityHeadersMiddleware
from travel_api.shared.security.rate_limiting import (
    limiter,
    rate_limit_exceeded_handler,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: prepare storage, start/stop the notifier."""
    engine = get_db_engine()
    if settings.auto_create_schema:
        create_schema(engine)

    notifier = QueuedLifecycleNotifier(
        webhook_urls=settings.notification_webhook_urls,
        max_queue_size=settings.notification_queue_size,
        webhook_timeout=settings.notification_webhook_timeout,
    )
    set_lifecycle_notifier(notifier)
    notifier.start()
    logger.info(
        "Lifecycle notifier ready with %d webhook(s)",
        len(settings.notification_webhook_urls),
    )

    yield

    # Shutdown
    notifier.stop()
    set_lifecycle_notifier(None)
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(travel_router, prefix="/api/v1")

    return app


app = create_app()
