"""Product ORM model."""

from decimal import Decimal

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from orderlookup.infrastructure.persistence.database import Base
from orderlookup.infrastructure.persistence.models.mixins import TimestampMixin, UuidMixin


class Product(UuidMixin, TimestampMixin, Base):
    """Catalog product. Table: products."""

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
