"""Delivery partner ORM model. user_id links the partner to the acting user."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from orderlookup.infrastructure.persistence.database import Base
from orderlookup.infrastructure.persistence.models.mixins import TimestampMixin, UuidMixin


class DeliveryPartner(UuidMixin, TimestampMixin, Base):
    """Delivery partner. Table: delivery_partners."""

    __tablename__ = "delivery_partners"

    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    name: Mapped[str | None] = mapped_column(String, nullable=True)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
