"""Persistence models: ORM entities and mixins."""

from orderlookup.infrastructure.persistence.models.delivery_partner import DeliveryPartner
from orderlookup.infrastructure.persistence.models.mixins import TimestampMixin, UuidMixin
from orderlookup.infrastructure.persistence.models.notification import Notification
from orderlookup.infrastructure.persistence.models.order import Order, OrderItem
from orderlookup.infrastructure.persistence.models.product import Product
from orderlookup.infrastructure.persistence.models.profile import Profile

__all__ = [
    "DeliveryPartner",
    "Notification",
    "Order",
    "OrderItem",
    "Product",
    "Profile",
    "TimestampMixin",
    "UuidMixin",
]
