"""Notification ORM model. related_entity_id points at the order it is about."""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from orderlookup.infrastructure.persistence.database import Base
from orderlookup.infrastructure.persistence.models.mixins import TimestampMixin, UuidMixin


class Notification(UuidMixin, TimestampMixin, Base):
    """User notification. Table: notifications."""

    __tablename__ = "notifications"

    user_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    type: Mapped[str | None] = mapped_column(String, nullable=True)
    related_entity_id: Mapped[str | None] = mapped_column(
        String(36), nullable=True, index=True
    )
    data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
