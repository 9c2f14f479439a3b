"""Entity: Product."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from src.marketplace.entities.core._base import Entity


class Product(Entity):
    """A catalogue item sold by exactly one bakery or restaurant."""

    bakery_id: str | None = None
    restaurant_id: str | None = None
    name: str = Field(description="Name")
    price: Decimal = Field(ge=0, description="Current unit price")
    is_available: bool = True
    deleted_at: datetime | None = None

    @property
    def is_orderable(self) -> bool:
        return self.is_available and self.deleted_at is None
