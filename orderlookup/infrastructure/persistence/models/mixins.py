"""SQLAlchemy mixins for common model patterns (DRY).

Provides: UuidMixin, TimestampMixin.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func


def generate_uuid() -> str:
    """Return a new lowercase canonical UUID string."""
    return str(uuid.uuid4())


class UuidMixin:
    """Mixin for models using a UUID string as primary key."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String(36), primary_key=True, default=generate_uuid)


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )
