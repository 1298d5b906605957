"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring (SRP). Builds the database engine,
the SQL gateway and one OrderLookupService (with its in-process resolution
cache) per process and stores it on app.state; disposes the engine on exit.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from orderlookup.application.services.order_lookup_service import build_order_lookup_service
from orderlookup.core.config import get_settings
from orderlookup.infrastructure.persistence.database import (
    create_engine_from_settings,
    create_session_factory,
)
from orderlookup.infrastructure.persistence.sql_gateway import SqlBackendGateway
from orderlookup.shared.telemetry.logging import setup_logging
from orderlookup.shared.utils.retry import RetryPolicy

logger = logging.getLogger(__name__)


def retry_policy_from_settings() -> RetryPolicy:
    """Gateway retry policy from the gateway_retry_* settings."""
    settings = get_settings()
    return RetryPolicy(
        max_attempts=settings.gateway_retry_attempts,
        initial_delay_ms=settings.gateway_retry_initial_delay_ms,
        max_delay_ms=settings.gateway_retry_max_delay_ms,
        backoff_multiplier=settings.gateway_retry_backoff_multiplier,
    )


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Without database_url no engine is created and app.state.order_lookup_service
    is None (lookup endpoints answer 503 SERVICE_UNAVAILABLE).
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    app.state.db_engine = None
    app.state.order_lookup_service = None
    if settings.database_url:
        engine = create_engine_from_settings(settings)
        gateway = SqlBackendGateway(
            create_session_factory(engine),
            retry_policy=retry_policy_from_settings(),
        )
        app.state.db_engine = engine
        app.state.order_lookup_service = build_order_lookup_service(gateway, settings)
        logger.info("Order lookup service ready")
    else:
        logger.warning("DATABASE_URL not set; order lookup endpoints will answer 503")

    yield

    # ---- Shutdown ----
    if app.state.order_lookup_service is not None:
        app.state.order_lookup_service.clear_all()
        app.state.order_lookup_service = None

    if app.state.db_engine is not None:
        await app.state.db_engine.dispose()
        app.state.db_engine = None
        logger.info("Database engine disposed")
