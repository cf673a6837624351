# app/services/reward_service.py
import math
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models._common import utcnow
from app.data.models.reward import RewardModel
from app.data.models.reward_transaction import RewardTransactionModel
from app.domain.enums import RewardTransactionType
from app.domain.exceptions import (
    ValidationError,
    InsufficientBalanceError,
    ConcurrencyConflict,
    ServerError,
)
from app.repos.reward_repo import RewardRepo
from app.utils import settings
from app.utils.retry import conflict_retry
from app.utils.logging import get_logger

logger = get_logger(__name__)


class RewardService:
    """
    Reward ledger: a per-user point balance backed by an append-only list
    of transactions.

    Every balance change goes through _apply(), which issues one
    compare-and-set UPDATE on the reward row (guarded by its version) and
    inserts exactly one transaction stamped with the resulting balance,
    both inside the same database transaction. A writer that loses the
    race rolls back and retries from a fresh read, so
    balance == lifetime_earned - lifetime_redeemed always holds and every
    balance_after matches the balance it produced.
    """

    def __init__(self, db: Session):
        self.repo = RewardRepo(db)

    # queries
    def get_or_create(self, user_id: str) -> RewardModel:
        return self.repo.get_or_create(user_id)

    def get_balance(self, user_id: str) -> int:
        return self.repo.get_or_create(user_id).balance

    def get_summary(self, user_id: str, limit: int = 20) -> Dict[str, Any]:
        reward = self.repo.get_or_create(user_id)
        transactions = self.repo.list_transactions(user_id, limit=limit)
        return {
            "rewardId": reward.reward_id,
            "balance": reward.balance,
            "lifetimeEarned": reward.lifetime_earned,
            "lifetimeRedeemed": reward.lifetime_redeemed,
            "isActive": reward.is_active,
            "transactions": [self.transaction_to_dict(t) for t in transactions],
        }

    def get_config(self) -> Dict[str, Any]:
        """Active reward configuration, falling back to the settings defaults."""
        config = self.repo.get_active_config()
        if config is None:
            return {
                "pointsPerOrder": settings.REWARD_POINTS_PER_ORDER,
                "pointsPerRupee": Decimal(str(settings.REWARD_POINTS_PER_RUPEE)),
                "minOrderForReward": Decimal(str(settings.REWARD_MIN_ORDER)),
                "redemptionRate": settings.REWARD_REDEMPTION_RATE,
                "minRedemptionPoints": settings.REWARD_MIN_REDEMPTION_POINTS,
                "maxRedemptionPercent": settings.REWARD_MAX_REDEMPTION_PERCENT,
                "eligibilityAfterOrders": settings.REWARD_ELIGIBILITY_AFTER_ORDERS,
            }
        return {
            "pointsPerOrder": config.points_per_order,
            "pointsPerRupee": Decimal(config.points_per_rupee),
            "minOrderForReward": Decimal(config.min_order_for_reward),
            "redemptionRate": config.redemption_rate,
            "minRedemptionPoints": config.min_redemption_points,
            "maxRedemptionPercent": config.max_redemption_percent,
            "eligibilityAfterOrders": config.eligibility_after_orders,
        }

    def calculate_for_order(self, user_id: str, order_total: Any) -> Dict[str, Any]:
        total = self._positive_decimal(order_total, "Valid cart total is required")
        config = self.get_config()

        if total < config["minOrderForReward"]:
            return {
                "eligible": False,
                "points": 0,
                "reason": f"Minimum order value of ₹{config['minOrderForReward']} required to earn rewards",
            }

        points = config["pointsPerOrder"] + math.floor(total * config["pointsPerRupee"])
        logger.info(f"User {user_id} eligible for {points} points on order total {total}")
        return {"eligible": True, "points": points, "reason": None}

    # commands
    @conflict_retry()
    def record_earn(
        self,
        user_id: str,
        amount: int,
        order_id: str | None = None,
        description: str | None = None,
    ) -> RewardTransactionModel:
        amount = self._positive_points(amount)
        reward = self.repo.get_or_create(user_id)

        return self._apply(
            reward,
            tx_type=RewardTransactionType.EARNED,
            new_balance=reward.balance + amount,
            earned=amount,
            redeemed=0,
            tx_amount=amount,
            order_id=order_id,
            description=description or f"Earned {amount} points",
        )

    @conflict_retry()
    def record_redeem(
        self,
        user_id: str,
        amount: int,
        order_id: str | None = None,
        description: str | None = None,
    ) -> RewardTransactionModel:
        amount = self._positive_points(amount)
        reward = self.repo.get_or_create(user_id)

        if amount > reward.balance:
            raise InsufficientBalanceError(user_id, amount, reward.balance)

        return self._apply(
            reward,
            tx_type=RewardTransactionType.REDEEMED,
            new_balance=reward.balance - amount,
            earned=0,
            redeemed=amount,
            tx_amount=-amount,
            order_id=order_id,
            description=description or f"Redeemed {amount} points",
        )

    @conflict_retry()
    def adjust(self, user_id: str, amount: int, reason: str | None) -> RewardTransactionModel:
        """Admin correction. Negative adjustments are capped at the current balance."""
        if amount is None or int(amount) == 0:
            raise ValidationError("Adjustment amount must be a non-zero integer")
        if not reason or not str(reason).strip():
            raise ValidationError("Adjustment reason is required")

        amount = int(amount)
        reward = self.repo.get_or_create(user_id)
        new_balance = max(0, reward.balance + amount)
        applied = new_balance - reward.balance

        return self._apply(
            reward,
            tx_type=RewardTransactionType.ADJUSTED,
            new_balance=new_balance,
            earned=max(applied, 0),
            redeemed=max(-applied, 0),
            tx_amount=applied,
            order_id=None,
            description=str(reason).strip(),
        )

    def redeem_for_discount(self, user_id: str, points: int, order_id: str | None = None) -> Dict[str, Any]:
        points = self._positive_points(points, "Valid points amount is required")
        config = self.get_config()

        # balance is checked before the redemption minimum
        balance = self.get_balance(user_id)
        if points > balance:
            raise InsufficientBalanceError(user_id, points, balance)

        if points < config["minRedemptionPoints"]:
            raise ValidationError(
                f"Minimum {config['minRedemptionPoints']} points required for redemption",
                details={"minRedemptionPoints": config["minRedemptionPoints"]},
            )

        discount = points // config["redemptionRate"]
        tx = self.record_redeem(
            user_id,
            points,
            order_id=order_id,
            description=f"Redeemed {points} points for ₹{discount} discount",
        )

        return {
            "discountAmount": discount,
            "pointsRedeemed": points,
            "newBalance": tx.balance_after,
            "message": f"Successfully redeemed {points} points for ₹{discount} discount",
        }

    # ledger core
    def _apply(
        self,
        reward: RewardModel,
        tx_type: RewardTransactionType,
        new_balance: int,
        earned: int,
        redeemed: int,
        tx_amount: int,
        order_id: str | None,
        description: str,
    ) -> RewardTransactionModel:
        reward_pk = reward.id
        reward_id = reward.reward_id
        user_id = reward.user_id
        old_version = reward.version

        try:
            rowcount = self.repo.compare_and_set(
                reward_pk,
                old_version,
                {
                    "balance": new_balance,
                    "lifetime_earned": reward.lifetime_earned + earned,
                    "lifetime_redeemed": reward.lifetime_redeemed + redeemed,
                    "version": old_version + 1,
                    "updated_at": utcnow(),
                },
            )
            if rowcount == 0:
                self.repo.rollback()
                logger.warning(f"Reward {reward_id} changed concurrently (version {old_version}), retrying")
                raise ConcurrencyConflict(
                    "Reward balance was modified by another operation",
                    details={"rewardId": reward_id},
                )

            tx = self.repo.add_transaction(
                RewardTransactionModel(
                    reward_id=reward_id,
                    user_id=user_id,
                    type=tx_type.value,
                    amount=tx_amount,
                    balance_after=new_balance,
                    order_id=order_id,
                    description=description,
                )
            )
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Reward ledger write failed for {reward_id}: {e}", exc_info=True)
            raise ServerError("Failed to update reward balance") from e

        logger.info(
            f"Reward {reward_id}: {tx_type.value} {tx_amount} points, balance now {new_balance}"
        )
        return tx

    @staticmethod
    def transaction_to_dict(tx: RewardTransactionModel) -> Dict[str, Any]:
        return {
            "transactionId": tx.transaction_id,
            "rewardId": tx.reward_id,
            "userId": tx.user_id,
            "type": tx.type,
            "amount": tx.amount,
            "balanceAfter": tx.balance_after,
            "orderId": tx.order_id,
            "description": tx.description,
            "createdAt": tx.created_at,
        }

    @staticmethod
    def _positive_points(amount: Any, message: str = "Amount must be a positive number of points") -> int:
        # points are whole numbers; 2.5 or True are not amounts
        if isinstance(amount, bool) or (isinstance(amount, float) and not amount.is_integer()):
            raise ValidationError(message)
        try:
            value = int(amount)
        except (TypeError, ValueError):
            raise ValidationError(message)
        if value <= 0:
            raise ValidationError(message)
        return value

    @staticmethod
    def _positive_decimal(value: Any, message: str) -> Decimal:
        try:
            parsed = Decimal(str(value))
        except (ArithmeticError, ValueError):
            raise ValidationError(message)
        if value is None or not parsed.is_finite() or parsed <= 0:
            raise ValidationError(message)
        return parsed
