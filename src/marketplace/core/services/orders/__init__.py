from .creation import OrderCreationService
from .lifecycle import OrderLifecycleEngine
from .models import CreateOrderRequest, OrderItemRequest, OrderPage, OrderStatusUpdate
from .order_number import generate_order_number
from .queries import OrderQueryService

__all__ = [
    "CreateOrderRequest",
    "OrderCreationService",
    "OrderItemRequest",
    "OrderLifecycleEngine",
    "OrderPage",
    "OrderQueryService",
    "OrderStatusUpdate",
    "generate_order_number",
]
