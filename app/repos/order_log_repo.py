# app/repos/order_log_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.order_log import OrderLogModel


class OrderLogRepo:
    def __init__(self, db: Session):
        self.db = db

    def find(self, order_id: str, status: str) -> OrderLogModel | None:
        return self.db.execute(
            select(OrderLogModel).where(
                OrderLogModel.order_id == order_id,
                OrderLogModel.status == status,
            )
        ).scalar_one_or_none()

    def create(self, log: OrderLogModel) -> OrderLogModel:
        self.db.add(log)
        self.db.commit()
        self.db.refresh(log)
        return log

    def list_for_order(self, order_id: str, limit: int) -> list[OrderLogModel]:
        return list(
            self.db.execute(
                select(OrderLogModel)
                .where(OrderLogModel.order_id == order_id)
                .order_by(OrderLogModel.created_at, OrderLogModel.id)
                .limit(limit)
            ).scalars()
        )

    def rollback(self):
        self.db.rollback()
