"""Persisted user notifications."""

from loguru import logger
from sqlmodel import Session

from src.marketplace.core.exceptions import NotFoundError
from src.marketplace.core.models.base import ApiModel
from src.marketplace.entities.service.notification import (
    Notification,
    NotificationRepository,
    NotificationType,
)


class NotificationPage(ApiModel):
    notifications: list[Notification]
    total: int
    unread: int
    page: int
    limit: int
    pages: int


class NotificationService:
    def __init__(self, session: Session) -> None:
        self._session = session
        self._repo = NotificationRepository(session)

    def build(
        self,
        user_id: str,
        title: str,
        message: str,
        notification_type: NotificationType = NotificationType.SYSTEM,
        related_id: str | None = None,
    ) -> Notification:
        """Add a notification to the current transaction without committing."""
        return self._repo.create(
            Notification(
                user_id=user_id,
                title=title,
                message=message,
                type=notification_type,
                related_id=related_id,
            )
        )

    def notify(
        self,
        user_id: str,
        title: str,
        message: str,
        notification_type: NotificationType = NotificationType.SYSTEM,
        related_id: str | None = None,
    ) -> Notification | None:
        """Create and commit a notification in its own unit of work.

        Failures are logged and swallowed; callers have already committed
        the change being announced.
        """
        try:
            notification = self.build(user_id, title, message, notification_type, related_id)
            self._session.commit()
            return notification
        except Exception as e:
            self._session.rollback()
            logger.error(
                "Failed to create notification for user {}: {}: {}",
                user_id,
                type(e).__name__,
                e,
            )
            return None

    def list_for_user(
        self, user_id: str, is_read: bool | None, page: int, limit: int
    ) -> NotificationPage:
        notifications, total, unread = self._repo.list_for_user(
            user_id, is_read=is_read, offset=(page - 1) * limit, limit=limit
        )
        return NotificationPage(
            notifications=notifications,
            total=total,
            unread=unread,
            page=page,
            limit=limit,
            pages=-(-total // limit),
        )

    def mark_read(self, notification_id: str, user_id: str) -> Notification:
        if not self._repo.mark_read(notification_id, user_id):
            raise NotFoundError("Notification not found")
        self._session.commit()
        notification = self._repo.get_for_user(notification_id, user_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        return notification

    def mark_all_read(self, user_id: str) -> int:
        count = self._repo.mark_all_read(user_id)
        self._session.commit()
        logger.debug("Marked {} notifications read for user {}", count, user_id)
        return count
