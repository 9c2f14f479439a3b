"""Notification database table model."""

from sqlmodel import Field

from src.marketplace.entities.core._base import EntityTable
from src.marketplace.entities.service.notification.entity import NotificationType


class NotificationTable(EntityTable, table=True):
    __tablename__ = "notifications"

    user_id: str = Field(foreign_key="users.id", index=True)
    title: str = Field(max_length=255)
    message: str
    type: str = Field(default=NotificationType.SYSTEM.value, max_length=16)
    related_id: str | None = Field(default=None, index=True)
    is_read: bool = Field(default=False, index=True)
