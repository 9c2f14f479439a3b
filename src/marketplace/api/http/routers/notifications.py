from fastapi import APIRouter, Depends, Query

from src.marketplace.api.http.deps import get_current_user, get_notification_service
from src.marketplace.core.services import NotificationPage, NotificationService
from src.marketplace.entities.core.user import User
from src.marketplace.entities.service.notification import Notification

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationPage)
def list_notifications(
    is_read: bool | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service),
) -> NotificationPage:
    return notifications.list_for_user(user.id, is_read, page, limit)


@router.put("/read-all")
def mark_all_read(
    user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service),
) -> dict:
    count = notifications.mark_all_read(user.id)
    return {"message": "All notifications marked as read", "updated": count}


@router.put("/{notification_id}/read", response_model=Notification)
def mark_read(
    notification_id: str,
    user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service),
) -> Notification:
    return notifications.mark_read(notification_id, user.id)
