# app/services/order_log_service.py
from typing import Dict, Any, List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.order_log import OrderLogModel
from app.domain.enums import OrderLogStatus
from app.domain.exceptions import ValidationError
from app.repos.order_log_repo import OrderLogRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)

MAX_LOGS = 200

_ALIASES = {
    "placed": OrderLogStatus.PLACED,
    "confirmed": OrderLogStatus.CONFIRMED,
    "shipped": OrderLogStatus.SHIPPED,
    "dispatched": OrderLogStatus.SHIPPED,
    "delivered": OrderLogStatus.DELIVERED,
}


def normalize_status(label: Any) -> OrderLogStatus | None:
    """Maps 'shipped', 'Order Shipped', 'out for delivery'... onto a tracking step."""
    if not label:
        return None
    text = str(label).strip().lower()
    if text in _ALIASES:
        return _ALIASES[text]
    if "out" in text and "delivery" in text:
        return OrderLogStatus.OUT_FOR_DELIVERY
    for status in OrderLogStatus:
        if status.value.lower() == text:
            return status
    return None


class OrderLogService:
    """
    Append-only tracking timeline per order.

    Each status appears at most once per order; re-posting a status returns
    the entry that is already there.
    """

    def __init__(self, db: Session):
        self.repo = OrderLogRepo(db)

    def append(self, order_id: str | None, status: Any, actor_id: str | None = None) -> Tuple[Dict[str, Any], bool]:
        if not order_id:
            raise ValidationError("orderId is required")
        if not status:
            raise ValidationError("status is required")

        normalized = normalize_status(status)
        if normalized is None:
            raise ValidationError(
                "Invalid status",
                details={"allowed": [s.value for s in OrderLogStatus]},
            )

        existing = self.repo.find(order_id, normalized.value)
        if existing:
            return self.to_dict(existing), False

        try:
            log = self.repo.create(
                OrderLogModel(
                    order_id=order_id,
                    status=normalized.value,
                    level=normalized.level,
                    actor="admin" if actor_id else "system",
                    actor_id=actor_id,
                )
            )
        except IntegrityError:
            # a concurrent request logged the same step
            self.repo.rollback()
            return self.to_dict(self.repo.find(order_id, normalized.value)), False

        logger.info(f"Order {order_id}: {normalized.value} logged by {log.actor}")
        return self.to_dict(log), True

    def list(self, order_id: str | None, limit: int = 50) -> List[Dict[str, Any]]:
        if not order_id:
            raise ValidationError("orderId is required")
        limit = min(max(int(limit or 50), 1), MAX_LOGS)
        return [self.to_dict(log) for log in self.repo.list_for_order(order_id, limit)]

    @staticmethod
    def to_dict(log: OrderLogModel) -> Dict[str, Any]:
        return {
            "orderLogId": log.order_log_id,
            "orderId": log.order_id,
            "status": log.status,
            "level": log.level,
            "actor": log.actor,
            "actorId": log.actor_id,
            "createdAt": log.created_at,
        }
