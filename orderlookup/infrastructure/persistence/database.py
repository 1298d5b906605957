"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

The engine is built from Settings by the application lifespan (not at import
time) and handed to SqlBackendGateway. An empty database_url means no engine
is created and the HTTP layer answers 503 for lookups.

Schema is owned by the system that writes orders; this package only reads.
Base.metadata.create_all is used by tests against SQLite.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from orderlookup.core.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create the async engine for settings.database_url.

    Pool sizing and command_timeout only apply to server databases; SQLite
    (aiosqlite) uses SQLAlchemy's default pool and no driver arguments.

    Raises:
        ValueError: database_url is empty.
    """
    if not settings.database_url:
        raise ValueError("database_url is not set")
    kwargs: dict[str, Any] = {"echo": settings.database_echo}
    if not settings.database_url.startswith("sqlite"):
        kwargs["pool_pre_ping"] = True
        kwargs["pool_recycle"] = 3600
        kwargs["pool_size"] = (
            settings.db_pool_size if settings.db_pool_size is not None else 10
        )
        kwargs["max_overflow"] = (
            settings.db_max_overflow if settings.db_max_overflow is not None else 20
        )
    if "postgresql" in settings.database_url:
        kwargs["connect_args"] = {
            "command_timeout": (
                settings.db_command_timeout
                if settings.db_command_timeout is not None
                else 30
            )
        }
    engine = create_async_engine(settings.database_url, **kwargs)
    logger.info("Database engine created (%s)", engine.url.render_as_string(hide_password=True))
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for read-only gateway sessions (one session per call)."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
