from sqlalchemy import Column, Integer, String, Boolean, DateTime, JSON, Index

from app.data.database import Base
from app.data.models._common import new_business_id, utcnow


class NotificationModel(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    notification_id = Column(String(36), nullable=False, unique=True, default=new_business_id)
    user_id = Column(String(36), nullable=False)

    type = Column(String(20), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(String(1000), nullable=False)
    data = Column(JSON, nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("ix_notification_user_created", "user_id", "created_at"),
        Index("ix_notification_user_read", "user_id", "is_read"),
    )
