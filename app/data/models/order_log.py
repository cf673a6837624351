from sqlalchemy import Column, Integer, String, DateTime, Index, UniqueConstraint

from app.data.database import Base
from app.data.models._common import new_business_id, utcnow


class OrderLogModel(Base):
    __tablename__ = "order_logs"

    id = Column(Integer, primary_key=True)
    order_log_id = Column(String(36), nullable=False, unique=True, default=new_business_id)
    order_id = Column(String(64), nullable=False)

    status = Column(String(32), nullable=False)
    level = Column(Integer, nullable=False)
    actor = Column(String(20), nullable=False, default="system")
    actor_id = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        # one entry per status per order
        UniqueConstraint("order_id", "status", name="u_order_log_status"),
        Index("ix_order_log_order_created", "order_id", "created_at"),
    )
