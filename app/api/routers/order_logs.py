# app/api/routers/order_logs.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import current_auth
from app.api.envelope import envelope
from app.data.database import get_db
from app.domain.schemas import OrderLogIn
from app.services.auth_guard import AuthResult
from app.services.order_log_service import OrderLogService

router = APIRouter(prefix="/api/order-logs", tags=["order-logs"])


def get_service(db: Session = Depends(get_db)) -> OrderLogService:
    return OrderLogService(db)


@router.get("")
def list_logs(
    order_id: str | None = Query(None, alias="orderId"),
    limit: int = Query(50),
    svc: OrderLogService = Depends(get_service),
):
    return envelope(200, "Logs fetched", svc.list(order_id, limit))


@router.post("")
def append_log(
    payload: OrderLogIn,
    auth: AuthResult = Depends(current_auth),
    svc: OrderLogService = Depends(get_service),
):
    # anonymous callers are the system; a valid session marks an admin
    actor_id = auth.user_id if auth.authenticated else None
    log, created = svc.append(payload.order_id, payload.status, actor_id)
    if created:
        return envelope(201, "Log created", log)
    return envelope(200, "Log already recorded", log)
