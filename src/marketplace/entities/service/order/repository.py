"""Order repository."""

from sqlalchemy import func, update
from sqlmodel import Session, col, select

from src.marketplace.entities.core._base import utc_now
from src.marketplace.entities.service.order.entity import (
    Order,
    OrderItem,
    OrderStatus,
)
from src.marketplace.entities.service.order.table import OrderItemTable, OrderTable


class OrderRepository:
    """Data-access layer for orders and their items."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, row: OrderTable) -> Order:
        statement = (
            select(OrderItemTable)
            .where(OrderItemTable.order_id == row.id)
            .order_by(col(OrderItemTable.created_at), col(OrderItemTable.id))
        )
        items = [
            OrderItem.model_validate(item, from_attributes=True)
            for item in self._session.exec(statement)
        ]
        return Order.model_validate({**row.model_dump(), "items": items})

    def get(self, order_id: str) -> Order | None:
        """Return a live order with its items."""
        row = self._session.get(OrderTable, order_id)
        if row is None or row.deleted_at is not None:
            return None
        return self._to_entity(row)

    def create(self, order: Order) -> Order:
        """Insert the order and its items; the caller commits."""
        row = OrderTable.model_validate(order.model_dump(exclude={"items"}))
        self._session.add(row)
        for item in order.items:
            item_row = OrderItemTable.model_validate(
                {**item.model_dump(), "order_id": row.id}
            )
            self._session.add(item_row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def update_status(
        self, order_id: str, status: OrderStatus, updated_by: str
    ) -> Order | None:
        self._session.execute(
            update(OrderTable)
            .where(col(OrderTable.id) == order_id)
            .values(status=status.value, updated_by=updated_by, updated_at=utc_now())
        )
        self._session.flush()
        row = self._session.get(OrderTable, order_id, populate_existing=True)
        if row is None:
            return None
        return self._to_entity(row)

    def list_orders(
        self,
        *,
        user_id: str | None = None,
        status: OrderStatus | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Order], int]:
        """Filtered page of live orders, newest first, plus the total count."""
        conditions = [col(OrderTable.deleted_at).is_(None)]
        if user_id is not None:
            conditions.append(OrderTable.user_id == user_id)
        if status is not None:
            conditions.append(OrderTable.status == status.value)

        total = self._session.exec(
            select(func.count()).select_from(OrderTable).where(*conditions)
        ).one()
        statement = (
            select(OrderTable)
            .where(*conditions)
            .order_by(col(OrderTable.created_at).desc(), col(OrderTable.id))
            .offset(offset)
            .limit(limit)
        )
        return [self._to_entity(row) for row in self._session.exec(statement)], total

    def exists_by_number(self, order_number: str) -> bool:
        statement = select(OrderTable.id).where(OrderTable.order_number == order_number)
        return self._session.exec(statement).first() is not None
