from fastapi import APIRouter, Depends, Query, status

from src.marketplace.api.http.deps import (
    get_current_user,
    get_order_creation,
    get_order_lifecycle,
    get_order_queries,
    require_role,
)
from src.marketplace.core.services import (
    OrderCreationService,
    OrderLifecycleEngine,
    OrderQueryService,
)
from src.marketplace.core.services.orders import (
    CreateOrderRequest,
    OrderPage,
    OrderStatusUpdate,
)
from src.marketplace.entities.core.user import User
from src.marketplace.entities.service.order import Order
from src.marketplace.runtime.context import get_config

router = APIRouter(prefix="/orders", tags=["orders"])


def page_size(limit: int | None = Query(default=None, ge=1)) -> int:
    cfg = get_config().orders
    if limit is None:
        return cfg.page_size_default
    return min(limit, cfg.page_size_max)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Order)
def create_order(
    body: CreateOrderRequest,
    user: User = Depends(require_role("customer")),
    creation: OrderCreationService = Depends(get_order_creation),
) -> Order:
    return creation.create(user, body)


@router.get("", response_model=OrderPage)
def list_orders(
    status_filter: str | None = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
    limit: int = Depends(page_size),
    user: User = Depends(get_current_user),
    queries: OrderQueryService = Depends(get_order_queries),
) -> OrderPage:
    return queries.list_for_customer(user.id, status_filter, page, limit)


@router.get("/{order_id}", response_model=Order)
def get_order(
    order_id: str,
    user: User = Depends(get_current_user),
    queries: OrderQueryService = Depends(get_order_queries),
) -> Order:
    return queries.get_for_customer(user.id, order_id)


@router.put("/{order_id}/status", response_model=Order)
def update_order_status(
    order_id: str,
    body: OrderStatusUpdate,
    user: User = Depends(get_current_user),
    lifecycle: OrderLifecycleEngine = Depends(get_order_lifecycle),
) -> Order:
    return lifecycle.transition(user, order_id, body.status)


@router.post("/{order_id}/cancel", response_model=Order)
def cancel_order(
    order_id: str,
    user: User = Depends(get_current_user),
    lifecycle: OrderLifecycleEngine = Depends(get_order_lifecycle),
) -> Order:
    return lifecycle.cancel(user, order_id)
