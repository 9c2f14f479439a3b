"""Address database table model."""

from sqlmodel import Field

from src.marketplace.entities.core._base import EntityTable, SoftDeleteMixin


class AddressTable(EntityTable, SoftDeleteMixin, table=True):
    __tablename__ = "addresses"

    user_id: str = Field(foreign_key="users.id", index=True)
    label: str | None = Field(default=None, max_length=64)
    address_line1: str = Field(max_length=255)
    city: str = Field(max_length=128)
    is_default: bool = Field(default=False)
