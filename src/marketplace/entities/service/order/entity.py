"""Entity: Order and its line items."""

from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from pydantic import Field

from src.marketplace.entities.core._base import Entity
from src.marketplace.entities.service.vendor.entity import VendorKind


class OrderStatus(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY_FOR_PICKUP = "ready_for_pickup"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)

    @property
    def customer_cancellable(self) -> bool:
        return self in (OrderStatus.PENDING, OrderStatus.CONFIRMED)


class OrderType(StrEnum):
    PICKUP = "pickup"
    DELIVERY = "delivery"


class PaymentMethod(StrEnum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    CASH_ON_DELIVERY = "cash_on_delivery"
    WALLET = "wallet"


class PaymentStatus(StrEnum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class OrderItem(Entity):
    """One order line with the unit price captured at creation."""

    order_id: str | None = None
    product_id: str
    quantity: int = Field(ge=1)
    unit_price: Decimal = Field(ge=0)
    subtotal: Decimal = Field(ge=0)
    special_instructions: str | None = None


class Order(Entity):
    """Order entity.

    Exactly one of ``bakery_id`` and ``restaurant_id`` is set. Orders are
    created ``pending`` and only change status through the lifecycle engine.
    """

    order_number: str
    user_id: str
    bakery_id: str | None = None
    restaurant_id: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    order_type: OrderType
    delivery_address_id: str | None = None
    total_amount: Decimal = Field(ge=0)
    payment_method: PaymentMethod
    payment_status: PaymentStatus = PaymentStatus.PENDING
    special_instructions: str | None = None
    updated_by: str | None = None
    deleted_at: datetime | None = None
    items: list[OrderItem] = Field(default_factory=list)

    @property
    def vendor_kind(self) -> VendorKind:
        return VendorKind.BAKERY if self.bakery_id else VendorKind.RESTAURANT

    @property
    def vendor_id(self) -> str:
        return self.bakery_id or self.restaurant_id  # type: ignore[return-value]
