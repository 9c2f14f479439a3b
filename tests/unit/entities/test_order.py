import itertools
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from src.marketplace.entities import (
    Order,
    OrderItem,
    OrderRepository,
    OrderStatus,
    OrderType,
    PaymentMethod,
)

_numbers = itertools.count(1)


def _order(user_id: str, **vendor) -> Order:
    return Order(
        order_number=f"T-{next(_numbers)}",
        user_id=user_id,
        order_type=OrderType.PICKUP,
        total_amount=Decimal("3.00"),
        payment_method=PaymentMethod.CASH_ON_DELIVERY,
        **vendor,
    )


class TestOrderStatus:
    @pytest.mark.parametrize(
        ("status", "terminal", "cancellable"),
        [
            (OrderStatus.PENDING, False, True),
            (OrderStatus.CONFIRMED, False, True),
            (OrderStatus.PREPARING, False, False),
            (OrderStatus.DELIVERED, False, False),
            (OrderStatus.COMPLETED, True, False),
            (OrderStatus.CANCELLED, True, False),
        ],
    )
    def test_flags(self, status, terminal, cancellable):
        assert status.is_terminal is terminal
        assert status.customer_cancellable is cancellable


class TestOrderRepository:
    def test_create_and_get_with_items(self, session, customer, bakery, bread):
        order = _order(customer.id, bakery_id=bakery.id)
        order.items = [
            OrderItem(
                product_id=bread.id,
                quantity=1,
                unit_price=Decimal("3.00"),
                subtotal=Decimal("3.00"),
            )
        ]
        repo = OrderRepository(session)
        created = repo.create(order)
        session.commit()

        fetched = repo.get(created.id)
        assert fetched.vendor_kind == "bakery"
        assert fetched.vendor_id == bakery.id
        assert [item.order_id for item in fetched.items] == [created.id]

    def test_exactly_one_vendor_is_enforced(self, session, customer, bakery, restaurant):
        repo = OrderRepository(session)
        with pytest.raises(IntegrityError):
            repo.create(_order(customer.id, bakery_id=bakery.id, restaurant_id=restaurant.id))
        session.rollback()

        with pytest.raises(IntegrityError):
            repo.create(_order(customer.id))
        session.rollback()

    def test_list_orders_filters_by_status(self, session, customer, bakery, admin):
        repo = OrderRepository(session)
        first = repo.create(_order(customer.id, bakery_id=bakery.id))
        session.commit()
        repo.update_status(first.id, OrderStatus.CONFIRMED, updated_by=admin.id)
        session.commit()

        confirmed, total = repo.list_orders(user_id=customer.id, status=OrderStatus.CONFIRMED)
        assert total == 1
        assert confirmed[0].status == OrderStatus.CONFIRMED
        assert repo.list_orders(user_id=customer.id, status=OrderStatus.PENDING)[1] == 0
