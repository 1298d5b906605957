"""Profile ORM model: retailers and wholesalers referenced by orders."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from orderlookup.infrastructure.persistence.database import Base
from orderlookup.infrastructure.persistence.models.mixins import TimestampMixin, UuidMixin


class Profile(UuidMixin, TimestampMixin, Base):
    """Business profile. Table: profiles."""

    __tablename__ = "profiles"

    business_name: Mapped[str | None] = mapped_column(String, nullable=True)
    address: Mapped[str | None] = mapped_column(String, nullable=True)
    city: Mapped[str | None] = mapped_column(String, nullable=True)
    state: Mapped[str | None] = mapped_column(String, nullable=True)
    pincode: Mapped[str | None] = mapped_column(String, nullable=True)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
