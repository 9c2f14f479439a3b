"""Customer-facing notification text for order events."""

from src.marketplace.entities.service.order import OrderStatus

STATUS_MESSAGES: dict[OrderStatus, tuple[str, str]] = {
    OrderStatus.CONFIRMED: ("Order Confirmed", "Your order #{number} has been confirmed."),
    OrderStatus.PREPARING: (
        "Order Preparation Started",
        "Your order #{number} is now being prepared.",
    ),
    OrderStatus.READY_FOR_PICKUP: (
        "Order Ready for Pickup",
        "Your order #{number} is ready for pickup.",
    ),
    OrderStatus.OUT_FOR_DELIVERY: (
        "Order Out for Delivery",
        "Your order #{number} is out for delivery.",
    ),
    OrderStatus.DELIVERED: ("Order Delivered", "Your order #{number} has been delivered."),
    OrderStatus.COMPLETED: ("Order Completed", "Your order #{number} has been completed."),
    OrderStatus.CANCELLED: ("Order Cancelled", "Your order #{number} has been cancelled."),
}

ORDER_PLACED = ("Order Placed", "Your order #{number} has been placed successfully.")


def status_message(status: OrderStatus, order_number: str) -> tuple[str, str]:
    title, template = STATUS_MESSAGES[status]
    return title, template.format(number=order_number)


def placed_message(order_number: str) -> tuple[str, str]:
    title, template = ORDER_PLACED
    return title, template.format(number=order_number)
