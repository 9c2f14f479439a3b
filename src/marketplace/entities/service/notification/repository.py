"""Notification repository."""

from sqlalchemy import func, update
from sqlmodel import Session, col, select

from src.marketplace.entities.core._base import utc_now
from src.marketplace.entities.service.notification.entity import Notification
from src.marketplace.entities.service.notification.table import NotificationTable


class NotificationRepository:
    """Data-access layer for notifications."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, notification: Notification) -> Notification:
        row = NotificationTable.model_validate(notification.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Notification.model_validate(row, from_attributes=True)

    def get_for_user(self, notification_id: str, user_id: str) -> Notification | None:
        row = self._session.get(NotificationTable, notification_id, populate_existing=True)
        if row is None or row.user_id != user_id:
            return None
        return Notification.model_validate(row, from_attributes=True)

    def list_for_user(
        self,
        user_id: str,
        *,
        is_read: bool | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Notification], int, int]:
        """Return ``(page, total, unread_count)`` for ``user_id``, newest first."""
        conditions = [NotificationTable.user_id == user_id]
        if is_read is not None:
            conditions.append(NotificationTable.is_read == is_read)

        total = self._session.exec(
            select(func.count()).select_from(NotificationTable).where(*conditions)
        ).one()
        unread = self._session.exec(
            select(func.count())
            .select_from(NotificationTable)
            .where(NotificationTable.user_id == user_id)
            .where(col(NotificationTable.is_read).is_(False))
        ).one()
        statement = (
            select(NotificationTable)
            .where(*conditions)
            .order_by(col(NotificationTable.created_at).desc(), col(NotificationTable.id))
            .offset(offset)
            .limit(limit)
        )
        rows = self._session.exec(statement)
        return (
            [Notification.model_validate(row, from_attributes=True) for row in rows],
            total,
            unread,
        )

    def mark_read(self, notification_id: str, user_id: str) -> bool:
        """Mark one notification read; ``False`` when it is not the user's."""
        result = self._session.execute(
            update(NotificationTable)
            .where(col(NotificationTable.id) == notification_id)
            .where(col(NotificationTable.user_id) == user_id)
            .values(is_read=True, updated_at=utc_now())
        )
        self._session.flush()
        return result.rowcount == 1

    def mark_all_read(self, user_id: str) -> int:
        result = self._session.execute(
            update(NotificationTable)
            .where(col(NotificationTable.user_id) == user_id)
            .where(col(NotificationTable.is_read).is_(False))
            .values(is_read=True, updated_at=utc_now())
        )
        self._session.flush()
        return result.rowcount

    def list_for_related(self, related_id: str) -> list[Notification]:
        statement = (
            select(NotificationTable)
            .where(NotificationTable.related_id == related_id)
            .order_by(col(NotificationTable.created_at), col(NotificationTable.id))
        )
        return [
            Notification.model_validate(row, from_attributes=True)
            for row in self._session.exec(statement)
        ]
