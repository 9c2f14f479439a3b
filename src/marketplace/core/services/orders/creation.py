"""Order placement."""

from decimal import Decimal

from loguru import logger
from sqlmodel import Session

from src.marketplace.core.exceptions import InputValidationError
from src.marketplace.core.services.notifications import NotificationService
from src.marketplace.core.services.orders.messages import placed_message
from src.marketplace.core.services.orders.models import CreateOrderRequest
from src.marketplace.core.services.orders.order_number import generate_order_number
from src.marketplace.entities.core.user import User
from src.marketplace.entities.service.address import AddressRepository
from src.marketplace.entities.service.notification import NotificationType
from src.marketplace.entities.service.order import (
    Order,
    OrderItem,
    OrderRepository,
    OrderType,
)
from src.marketplace.entities.service.product import ProductRepository
from src.marketplace.entities.service.vendor import (
    VendorApprovalStatus,
    VendorKind,
    VendorRepository,
)
from src.marketplace.runtime.context import get_config

MAX_NUMBER_ATTEMPTS = 5


class OrderCreationService:
    """Validates an order request and persists it atomically.

    Validation happens before any write. The order, its items and the
    "Order Placed" notification commit together or not at all.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._orders = OrderRepository(session)
        self._products = ProductRepository(session)
        self._addresses = AddressRepository(session)
        self._notifications = NotificationService(session)

    def _validate_vendor(self, request: CreateOrderRequest) -> tuple[VendorKind, str]:
        if bool(request.bakery_id) == bool(request.restaurant_id):
            raise InputValidationError("Exactly one of bakeryId or restaurantId is required")

        if request.bakery_id:
            kind, vendor_id = VendorKind.BAKERY, request.bakery_id
        else:
            kind, vendor_id = VendorKind.RESTAURANT, request.restaurant_id

        vendor = VendorRepository(self._session, kind).get(vendor_id)
        if vendor is None or vendor.status != VendorApprovalStatus.APPROVED:
            raise InputValidationError(f"{kind.value.capitalize()} is not available")
        return kind, vendor_id

    def _price_items(
        self, request: CreateOrderRequest, kind: VendorKind, vendor_id: str
    ) -> list[OrderItem]:
        products = self._products.get_orderable([item.product_id for item in request.items])

        items = []
        for item in request.items:
            product = products.get(item.product_id)
            if product is None:
                raise InputValidationError("One or more products are not available")
            sold_by = product.bakery_id if kind == VendorKind.BAKERY else product.restaurant_id
            if sold_by != vendor_id:
                raise InputValidationError("One or more products are not available")
            unit_price = Decimal(product.price)
            items.append(
                OrderItem(
                    product_id=product.id,
                    quantity=item.quantity,
                    unit_price=unit_price,
                    subtotal=unit_price * item.quantity,
                    special_instructions=item.special_instructions,
                )
            )
        return items

    def _new_order_number(self) -> str:
        prefix = get_config().orders.number_prefix
        for _ in range(MAX_NUMBER_ATTEMPTS):
            number = generate_order_number(prefix)
            if not self._orders.exists_by_number(number):
                return number
        raise RuntimeError("Could not allocate a unique order number")

    def create(self, actor: User, request: CreateOrderRequest) -> Order:
        if not request.items:
            raise InputValidationError("Order must contain at least one item")

        try:
            order_type = OrderType(request.order_type)
        except ValueError:
            raise InputValidationError(
                "Valid order type (pickup or delivery) is required"
            ) from None

        if order_type == OrderType.DELIVERY and not request.delivery_address_id:
            raise InputValidationError("Delivery address is required for delivery orders")

        kind, vendor_id = self._validate_vendor(request)

        delivery_address_id = None
        if order_type == OrderType.DELIVERY:
            address = self._addresses.get_owned(request.delivery_address_id, actor.id)
            if address is None:
                raise InputValidationError("Delivery address not found")
            delivery_address_id = address.id

        items = self._price_items(request, kind, vendor_id)
        order = Order(
            order_number=self._new_order_number(),
            user_id=actor.id,
            bakery_id=vendor_id if kind == VendorKind.BAKERY else None,
            restaurant_id=vendor_id if kind == VendorKind.RESTAURANT else None,
            order_type=order_type,
            delivery_address_id=delivery_address_id,
            total_amount=sum((item.subtotal for item in items), Decimal("0")),
            payment_method=request.payment_method,
            special_instructions=request.special_instructions,
            items=items,
        )

        try:
            created = self._orders.create(order)
            title, message = placed_message(created.order_number)
            self._notifications.build(
                actor.id,
                title,
                message,
                notification_type=NotificationType.ORDER,
                related_id=created.id,
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "Order {} placed by {} for {} {} (total {})",
            created.order_number,
            actor.id,
            kind.value,
            vendor_id,
            created.total_amount,
        )
        return created
