# app/services/notification_service.py
import math
from typing import Dict, Any

from sqlalchemy.orm import Session

from app.data.models.notification import NotificationModel
from app.domain.enums import NotificationType
from app.domain.exceptions import ValidationError, NotFoundError
from app.repos.notification_repo import NotificationRepo
from app.tasks.push import send_push_notification_task
from app.utils.logging import get_logger

logger = get_logger(__name__)

MAX_PAGE_SIZE = 100


class NotificationService:
    """
    Per-user notification feed.

    Notifications are append-only; the only mutation is flipping is_read.
    Push delivery is handed to Celery after the row is stored and is best
    effort: a broker outage never loses the notification itself.
    """

    def __init__(self, db: Session):
        self.repo = NotificationRepo(db)

    def create(
        self,
        user_id: str | None,
        type_: str | None,
        title: str | None,
        message: str | None,
        data: dict | None = None,
    ) -> Dict[str, Any]:
        if not user_id:
            raise ValidationError("User ID is required")
        if not type_:
            raise ValidationError("Notification type is required")
        if not title or not str(title).strip():
            raise ValidationError("Title is required")
        if not message or not str(message).strip():
            raise ValidationError("Message is required")
        if type_ not in {t.value for t in NotificationType}:
            raise ValidationError("Invalid notification type", details={"type": type_})

        notification = self.repo.create(
            NotificationModel(
                user_id=user_id,
                type=type_,
                title=str(title).strip(),
                message=str(message).strip(),
                data=data or None,
            )
        )
        logger.info(f"Notification {notification.notification_id} ({type_}) created for user {user_id}")

        self._dispatch_push(notification)
        return self.to_dict(notification)

    def list(
        self,
        user_id: str | None,
        type_: str | None = None,
        unread_only: bool = False,
        page: int = 1,
        limit: int = 20,
    ) -> Dict[str, Any]:
        if not user_id:
            raise ValidationError("User ID is required")

        page = max(int(page or 1), 1)
        limit = min(max(int(limit or 20), 1), MAX_PAGE_SIZE)

        total = self.repo.count_for_user(user_id, type_, unread_only)
        unread = self.repo.count_for_user(user_id, unread_only=True)
        rows = self.repo.list_for_user(user_id, type_, unread_only, (page - 1) * limit, limit)

        return {
            "notifications": [self.to_dict(n) for n in rows],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": math.ceil(total / limit),
            },
            "unreadCount": unread,
        }

    def count_unread(self, user_id: str | None) -> int:
        if not user_id:
            raise ValidationError("User ID is required")
        return self.repo.count_for_user(user_id, unread_only=True)

    def mark_read(self, notification_id: str | None, is_read: bool = True) -> Dict[str, Any]:
        if not notification_id:
            raise ValidationError("Notification ID is required")

        notification = self._resolve(str(notification_id))
        if notification is None:
            raise NotFoundError("Notification not found", details={"notificationId": notification_id})

        updated = self.repo.set_read(notification, bool(is_read))
        logger.info(f"Notification {updated.notification_id} is_read={updated.is_read}")
        return self.to_dict(updated)

    def mark_all_read(self, user_id: str | None) -> int:
        if not user_id:
            raise ValidationError("User ID is required")

        count = self.repo.mark_all_read(user_id)
        logger.info(f"Marked {count} notifications read for user {user_id}")
        return count

    def _resolve(self, notification_id: str) -> NotificationModel | None:
        # business id first, storage id only as a fallback
        notification = self.repo.get_by_business_id(notification_id)
        if notification is None and notification_id.isdigit():
            notification = self.repo.get_by_storage_id(int(notification_id))
        return notification

    def _dispatch_push(self, notification: NotificationModel):
        try:
            send_push_notification_task.delay(
                notification.notification_id,
                notification.user_id,
                notification.title,
            )
        except Exception as e:
            logger.warning(f"Push dispatch failed for notification {notification.notification_id}: {e}")

    @staticmethod
    def to_dict(n: NotificationModel) -> Dict[str, Any]:
        return {
            "notificationId": n.notification_id,
            "userId": n.user_id,
            "type": n.type,
            "title": n.title,
            "message": n.message,
            "data": n.data,
            "isRead": n.is_read,
            "createdAt": n.created_at,
            "updatedAt": n.updated_at,
        }
