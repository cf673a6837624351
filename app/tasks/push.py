# app/tasks/push.py
from app.celery_worker import celery_app
from app.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="app.tasks.push.send_push_notification_task")
def send_push_notification_task(notification_id: str, user_id: str, title: str):
    """
    Delivers a stored notification to the user's devices.
    No push provider is wired in yet, delivery is logged.
    """
    logger.info(f"[PUSH] User {user_id}: notification {notification_id} '{title}'")
    return {"notification_id": notification_id, "user_id": user_id, "status": "sent"}
