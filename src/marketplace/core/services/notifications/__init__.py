from .notification_service import NotificationPage, NotificationService

__all__ = ["NotificationPage", "NotificationService"]
