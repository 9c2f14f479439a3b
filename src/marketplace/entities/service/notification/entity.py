"""Entity: Notification."""

from enum import StrEnum

from pydantic import Field

from src.marketplace.entities.core._base import Entity


class NotificationType(StrEnum):
    ORDER = "order"
    SYSTEM = "system"
    PROMOTION = "promotion"
    ACCOUNT = "account"


class Notification(Entity):
    """A persisted message for one recipient. Only ``is_read`` ever changes."""

    user_id: str = Field(description="Recipient user id")
    title: str
    message: str
    type: NotificationType = NotificationType.SYSTEM
    related_id: str | None = Field(default=None, description="Related order id")
    is_read: bool = False
