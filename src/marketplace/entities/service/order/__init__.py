"""Entity package: Order."""

from .entity import (
    Order,
    OrderItem,
    OrderStatus,
    OrderType,
    PaymentMethod,
    PaymentStatus,
)
from .repository import OrderRepository
from .table import OrderItemTable, OrderTable

__all__ = [
    "Order",
    "OrderItem",
    "OrderItemTable",
    "OrderRepository",
    "OrderStatus",
    "OrderTable",
    "OrderType",
    "PaymentMethod",
    "PaymentStatus",
]
