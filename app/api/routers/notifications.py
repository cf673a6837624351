# app/api/routers/notifications.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.envelope import envelope
from app.data.database import get_db
from app.domain.schemas import NotificationCreateIn, MarkReadIn, MarkAllReadIn
from app.services.notification_service import NotificationService

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


def get_service(db: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


@router.get("")
def list_notifications(
    user_id: str | None = Query(None, alias="userId"),
    type_: str | None = Query(None, alias="type"),
    unread_only: bool = Query(False, alias="unreadOnly"),
    page: int = Query(1),
    limit: int = Query(20),
    svc: NotificationService = Depends(get_service),
):
    data = svc.list(user_id, type_=type_, unread_only=unread_only, page=page, limit=limit)
    return envelope(200, "Notifications retrieved successfully", data)


@router.post("")
def create_notification(payload: NotificationCreateIn, svc: NotificationService = Depends(get_service)):
    data = svc.create(payload.user_id, payload.type, payload.title, payload.message, payload.data)
    return envelope(201, "Notification created successfully", data)


@router.get("/count")
def unread_count(
    user_id: str | None = Query(None, alias="userId"),
    svc: NotificationService = Depends(get_service),
):
    return envelope(200, "Unread count retrieved successfully", {"total": svc.count_unread(user_id)})


@router.post("/mark-read")
def mark_read(payload: MarkReadIn, svc: NotificationService = Depends(get_service)):
    notification = svc.mark_read(payload.notification_id, payload.is_read)
    message = "Notification marked as read" if notification["isRead"] else "Notification marked as unread"
    return envelope(200, message, {"notification": notification})


@router.post("/mark-all-read")
def mark_all_read(payload: MarkAllReadIn, svc: NotificationService = Depends(get_service)):
    count = svc.mark_all_read(payload.user_id)
    return envelope(200, f"{count} notifications marked as read", {"updatedCount": count})
