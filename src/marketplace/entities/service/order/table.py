"""Order database table models."""

from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field

from src.marketplace.entities.core._base import EntityTable, SoftDeleteMixin
from src.marketplace.entities.service.order.entity import (
    OrderStatus,
    PaymentStatus,
)


class OrderTable(EntityTable, SoftDeleteMixin, table=True):
    """Database persistence model for orders."""

    __tablename__ = "orders"
    __table_args__ = (
        sa.CheckConstraint(
            "(bakery_id IS NULL) <> (restaurant_id IS NULL)",
            name="ck_orders_single_vendor",
        ),
    )

    order_number: str = Field(unique=True, max_length=64)
    user_id: str = Field(foreign_key="users.id", index=True)
    bakery_id: str | None = Field(default=None, foreign_key="bakeries.id", index=True)
    restaurant_id: str | None = Field(
        default=None, foreign_key="restaurants.id", index=True
    )
    status: str = Field(default=OrderStatus.PENDING.value, max_length=32, index=True)
    order_type: str = Field(max_length=16)
    delivery_address_id: str | None = Field(default=None, foreign_key="addresses.id")
    total_amount: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)
    payment_method: str = Field(max_length=32)
    payment_status: str = Field(default=PaymentStatus.PENDING.value, max_length=16)
    special_instructions: str | None = None
    updated_by: str | None = Field(default=None, foreign_key="users.id")


class OrderItemTable(EntityTable, table=True):
    __tablename__ = "order_items"

    order_id: str = Field(foreign_key="orders.id", index=True)
    product_id: str = Field(foreign_key="products.id")
    quantity: int
    unit_price: Decimal = Field(max_digits=10, decimal_places=2)
    subtotal: Decimal = Field(max_digits=12, decimal_places=2)
    special_instructions: str | None = None
