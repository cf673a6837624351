# app/repos/notification_repo.py
from sqlalchemy import select, update, func
from sqlalchemy.orm import Session

from app.data.models._common import utcnow
from app.data.models.notification import NotificationModel


class NotificationRepo:
    def __init__(self, db: Session):
        self.db = db

    def create(self, notification: NotificationModel) -> NotificationModel:
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def get_by_business_id(self, notification_id: str) -> NotificationModel | None:
        return self.db.execute(
            select(NotificationModel).where(NotificationModel.notification_id == notification_id)
        ).scalar_one_or_none()

    def get_by_storage_id(self, pk: int) -> NotificationModel | None:
        return self.db.get(NotificationModel, pk)

    def _filtered(self, stmt, user_id: str, type_: str | None, unread_only: bool):
        stmt = stmt.where(NotificationModel.user_id == user_id)
        if type_:
            stmt = stmt.where(NotificationModel.type == type_)
        if unread_only:
            stmt = stmt.where(NotificationModel.is_read.is_(False))
        return stmt

    def list_for_user(
        self,
        user_id: str,
        type_: str | None,
        unread_only: bool,
        offset: int,
        limit: int,
    ) -> list[NotificationModel]:
        stmt = self._filtered(select(NotificationModel), user_id, type_, unread_only)
        stmt = (
            stmt.order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())

    def count_for_user(self, user_id: str, type_: str | None = None, unread_only: bool = False) -> int:
        stmt = self._filtered(select(func.count(NotificationModel.id)), user_id, type_, unread_only)
        return self.db.execute(stmt).scalar_one()

    def set_read(self, notification: NotificationModel, is_read: bool) -> NotificationModel:
        notification.is_read = is_read
        notification.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def mark_all_read(self, user_id: str) -> int:
        # single bulk UPDATE, only rows that are still unread count
        result = self.db.execute(
            update(NotificationModel)
            .where(NotificationModel.user_id == user_id, NotificationModel.is_read.is_(False))
            .values(is_read=True, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount
