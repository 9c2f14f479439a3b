"""Product database table model."""

from decimal import Decimal

from sqlmodel import Field

from src.marketplace.entities.core._base import EntityTable, SoftDeleteMixin


class ProductTable(EntityTable, SoftDeleteMixin, table=True):
    """Database persistence model for products."""

    __tablename__ = "products"

    bakery_id: str | None = Field(default=None, foreign_key="bakeries.id", index=True)
    restaurant_id: str | None = Field(
        default=None, foreign_key="restaurants.id", index=True
    )
    name: str = Field(max_length=255)
    price: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    is_available: bool = Field(default=True)
