"""Order and OrderItem ORM models.

reference_number is optional in deployed schemas. The capability probe reads
the live columns, not this model, before any lookup on it.
"""

from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orderlookup.infrastructure.persistence.database import Base
from orderlookup.infrastructure.persistence.models.delivery_partner import DeliveryPartner
from orderlookup.infrastructure.persistence.models.mixins import TimestampMixin, UuidMixin
from orderlookup.infrastructure.persistence.models.product import Product
from orderlookup.infrastructure.persistence.models.profile import Profile


class Order(UuidMixin, TimestampMixin, Base):
    """Order placed by a retailer with a wholesaler. Table: orders."""

    __tablename__ = "orders"

    reference_number: Mapped[str | None] = mapped_column(
        String, nullable=True, unique=True, index=True
    )
    status: Mapped[str] = mapped_column(String, nullable=False, default="pending")
    retailer_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True, index=True
    )
    wholesaler_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True, index=True
    )
    delivery_partner_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("delivery_partners.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    payment_method: Mapped[str | None] = mapped_column(String, nullable=True)
    payment_status: Mapped[str] = mapped_column(String, nullable=False, default="pending")
    delivery_address: Mapped[str | None] = mapped_column(String, nullable=True)
    delivery_city: Mapped[str | None] = mapped_column(String, nullable=True)
    delivery_state: Mapped[str | None] = mapped_column(String, nullable=True)
    delivery_pincode: Mapped[str | None] = mapped_column(String, nullable=True)
    delivery_status: Mapped[str] = mapped_column(String, nullable=False, default="pending")

    retailer: Mapped[Profile | None] = relationship(foreign_keys=[retailer_id])
    wholesaler: Mapped[Profile | None] = relationship(foreign_keys=[wholesaler_id])
    delivery_partner: Mapped[DeliveryPartner | None] = relationship()
    items: Mapped[list["OrderItem"]] = relationship(
        back_populates="order", order_by="OrderItem.id"
    )


class OrderItem(UuidMixin, Base):
    """Line item of an order. Table: order_items."""

    __tablename__ = "order_items"

    order_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("products.id", ondelete="SET NULL"), nullable=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)

    order: Mapped[Order] = relationship(back_populates="items")
    product: Mapped[Product | None] = relationship()
