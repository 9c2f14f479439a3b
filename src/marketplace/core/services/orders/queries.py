"""Read access to a customer's own orders."""

from sqlmodel import Session

from src.marketplace.core.exceptions import InputValidationError, NotFoundError
from src.marketplace.core.services.orders.models import OrderPage
from src.marketplace.entities.service.order import Order, OrderRepository, OrderStatus


class OrderQueryService:
    def __init__(self, session: Session) -> None:
        self._orders = OrderRepository(session)

    def list_for_customer(
        self, user_id: str, status: str | None, page: int, limit: int
    ) -> OrderPage:
        status_filter = None
        if status:
            try:
                status_filter = OrderStatus(status)
            except ValueError:
                raise InputValidationError("Invalid status filter") from None

        orders, total = self._orders.list_orders(
            user_id=user_id, status=status_filter, offset=(page - 1) * limit, limit=limit
        )
        return OrderPage(
            orders=orders, total=total, page=page, limit=limit, pages=-(-total // limit)
        )

    def get_for_customer(self, user_id: str, order_id: str) -> Order:
        order = self._orders.get(order_id)
        if order is None or order.user_id != user_id:
            raise NotFoundError("Order not found")
        return order
