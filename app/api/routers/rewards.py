# app/api/routers/rewards.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import require_user
from app.api.envelope import envelope
from app.data.database import get_db
from app.domain.exceptions import ValidationError
from app.domain.schemas import RewardActionIn, RewardAdjustIn
from app.services.reward_service import RewardService

router = APIRouter(prefix="/api/rewards", tags=["rewards"])
admin_router = APIRouter(prefix="/api/admin/rewards", tags=["admin"])


def get_service(db: Session = Depends(get_db)) -> RewardService:
    return RewardService(db)


@router.get("")
def get_rewards(
    user_id: str | None = Query(None, alias="userId"),
    svc: RewardService = Depends(get_service),
):
    if not user_id:
        raise ValidationError("User ID is required")
    return envelope(200, "Rewards retrieved successfully", svc.get_summary(user_id))


@router.post("")
def reward_action(
    payload: RewardActionIn,
    action: str | None = Query(None),
    svc: RewardService = Depends(get_service),
):
    if not payload.user_id:
        raise ValidationError("User ID is required")

    name = (payload.action or action or "").lower()
    if name == "calculate":
        data = svc.calculate_for_order(payload.user_id, payload.cart_total)
        return envelope(200, "Reward points calculated", data)
    if name == "redeem":
        data = svc.redeem_for_discount(payload.user_id, payload.points, payload.order_id)
        return envelope(200, data["message"], data)

    raise ValidationError("Invalid action. Use calculate or redeem", details={"action": name})


@admin_router.post("/adjust")
def adjust_rewards(
    payload: RewardAdjustIn,
    admin_id: str = Depends(require_user),
    svc: RewardService = Depends(get_service),
):
    if not payload.user_id:
        raise ValidationError("User ID is required")

    tx = svc.adjust(payload.user_id, payload.amount, payload.reason)
    return envelope(
        200,
        "Reward balance adjusted",
        {"transaction": svc.transaction_to_dict(tx), "newBalance": tx.balance_after, "adjustedBy": admin_id},
    )
