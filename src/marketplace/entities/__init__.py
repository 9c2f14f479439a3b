"""Entities grouped by business concept.

Each entity package holds:
- entity.py: domain model
- table.py: database persistence model
- repository.py: data access layer

Importing this package registers every table on ``SQLModel.metadata``.
"""

from .core.user import PublicUser, User, UserRepository, UserRole, UserTable
from .service.address import Address, AddressRepository, AddressTable
from .service.notification import (
    Notification,
    NotificationRepository,
    NotificationTable,
    NotificationType,
)
from .service.order import (
    Order,
    OrderItem,
    OrderItemTable,
    OrderRepository,
    OrderStatus,
    OrderTable,
    OrderType,
    PaymentMethod,
    PaymentStatus,
)
from .service.product import Product, ProductRepository, ProductTable
from .service.vendor import (
    BakeryTable,
    RestaurantTable,
    Vendor,
    VendorApprovalStatus,
    VendorKind,
    VendorRepository,
)

__all__ = [
    "Address",
    "AddressRepository",
    "AddressTable",
    "BakeryTable",
    "Notification",
    "NotificationRepository",
    "NotificationTable",
    "NotificationType",
    "Order",
    "OrderItem",
    "OrderItemTable",
    "OrderRepository",
    "OrderStatus",
    "OrderTable",
    "OrderType",
    "PaymentMethod",
    "PaymentStatus",
    "Product",
    "ProductRepository",
    "ProductTable",
    "PublicUser",
    "RestaurantTable",
    "User",
    "UserRepository",
    "UserRole",
    "UserTable",
    "Vendor",
    "VendorApprovalStatus",
    "VendorKind",
    "VendorRepository",
]
