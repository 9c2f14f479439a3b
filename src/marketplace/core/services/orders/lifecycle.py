"""Order status transitions, their authorization and notifications."""

from loguru import logger
from sqlmodel import Session

from src.marketplace.core.exceptions import (
    InputValidationError,
    NotFoundError,
    PermissionDeniedError,
)
from src.marketplace.core.services.notifications import NotificationService
from src.marketplace.core.services.orders.messages import status_message
from src.marketplace.core.services.vendor.eligibility import OWNER_ROLE_KINDS
from src.marketplace.entities.core.user import User, UserRole
from src.marketplace.entities.service.notification import NotificationType
from src.marketplace.entities.service.order import Order, OrderRepository, OrderStatus
from src.marketplace.entities.service.vendor import VendorRepository

# pending is only ever an initial state
TARGET_STATUSES = frozenset(OrderStatus) - {OrderStatus.PENDING}

UPDATE_DENIED = "You do not have permission to update this order"
NOT_CANCELLABLE = "Only pending or confirmed orders can be cancelled"


class OrderLifecycleEngine:
    """Validates and applies order status transitions.

    - admins may move any live order;
    - vendor owners may move orders of vendors they own, to any status;
    - the ordering customer may only cancel, and only from pending or confirmed.

    Completed and cancelled orders accept no further transitions. Concurrent
    updates to one order are last-writer-wins.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._orders = OrderRepository(session)
        self._notifications = NotificationService(session)

    @staticmethod
    def parse_status(value: str | None) -> OrderStatus:
        try:
            status = OrderStatus(value)
        except ValueError:
            raise InputValidationError("Valid status is required") from None
        if status not in TARGET_STATUSES:
            raise InputValidationError("Valid status is required")
        return status

    def _owns_vendor(self, actor: User, order: Order) -> bool:
        kind = OWNER_ROLE_KINDS.get(actor.role)
        if kind is None or kind != order.vendor_kind:
            return False
        vendor = VendorRepository(self._session, kind).get(order.vendor_id, include_deleted=True)
        return vendor is not None and vendor.owner_id == actor.id

    def _authorize(self, actor: User, order: Order, status: OrderStatus) -> None:
        if actor.role == UserRole.ADMIN or self._owns_vendor(actor, order):
            return
        if actor.id == order.user_id and status == OrderStatus.CANCELLED:
            if not order.status.customer_cancellable:
                raise InputValidationError(NOT_CANCELLABLE)
            return
        raise PermissionDeniedError(UPDATE_DENIED)

    def transition(self, actor: User, order_id: str, new_status: str | None) -> Order:
        """Move ``order_id`` to ``new_status`` on behalf of ``actor``.

        The status change commits first; the customer notification follows
        in its own unit of work and may fail without undoing it.
        """
        status = self.parse_status(new_status)

        order = self._orders.get(order_id)
        if order is None:
            raise NotFoundError("Order not found")

        self._authorize(actor, order, status)

        if order.status.is_terminal:
            raise InputValidationError(f"Order is already {order.status.value}")

        return self._apply(actor, order, status)

    def cancel(self, actor: User, order_id: str) -> Order:
        """Customer cancellation of one of their own orders."""
        order = self._orders.get(order_id)
        if order is None or order.user_id != actor.id:
            raise NotFoundError("Order not found")
        if not order.status.customer_cancellable:
            raise InputValidationError(NOT_CANCELLABLE)
        return self._apply(actor, order, OrderStatus.CANCELLED)

    def _apply(self, actor: User, order: Order, status: OrderStatus) -> Order:
        try:
            updated = self._orders.update_status(order.id, status, updated_by=actor.id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        if updated is None:
            raise NotFoundError("Order not found")

        logger.info(
            "Order {} moved {} -> {} by {} ({})",
            order.order_number,
            order.status.value,
            status.value,
            actor.id,
            actor.role.value,
        )

        title, message = status_message(status, order.order_number)
        self._notifications.notify(
            order.user_id,
            title,
            message,
            notification_type=NotificationType.ORDER,
            related_id=order.id,
        )
        return updated
