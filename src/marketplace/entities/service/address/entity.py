"""Entity: Address."""

from datetime import datetime

from pydantic import Field

from src.marketplace.entities.core._base import Entity


class Address(Entity):
    """A delivery address saved by a user."""

    user_id: str = Field(description="Owning user id")
    label: str | None = None
    address_line1: str = Field(description="Street address")
    city: str
    is_default: bool = False
    deleted_at: datetime | None = None
