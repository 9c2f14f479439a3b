"""Request bodies and result pages for order endpoints."""

from pydantic import Field

from src.marketplace.core.models.base import ApiModel
from src.marketplace.entities.service.order import Order, PaymentMethod


class OrderItemRequest(ApiModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)
    special_instructions: str | None = None


class CreateOrderRequest(ApiModel):
    """Order placement body. ``order_type`` is checked by the service for a precise message."""

    bakery_id: str | None = None
    restaurant_id: str | None = None
    order_type: str | None = None
    delivery_address_id: str | None = None
    items: list[OrderItemRequest] = Field(default_factory=list)
    payment_method: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY
    special_instructions: str | None = None


class OrderStatusUpdate(ApiModel):
    status: str | None = None


class OrderPage(ApiModel):
    orders: list[Order]
    total: int
    page: int
    limit: int
    pages: int
