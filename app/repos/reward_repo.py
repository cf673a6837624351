# app/repos/reward_repo.py
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.reward import RewardModel
from app.data.models.reward_transaction import RewardTransactionModel
from app.data.models.reward_config import RewardConfigModel


class RewardRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_user(self, user_id: str) -> RewardModel | None:
        return self.db.execute(
            select(RewardModel).where(RewardModel.user_id == user_id)
        ).scalar_one_or_none()

    def get_or_create(self, user_id: str) -> RewardModel:
        reward = self.get_by_user(user_id)
        if reward:
            return reward
        try:
            reward = RewardModel(user_id=user_id)
            self.db.add(reward)
            self.db.commit()
        except IntegrityError:
            # another request created it first
            self.db.rollback()
            return self.get_by_user(user_id)
        self.db.refresh(reward)
        return reward

    def refresh(self, reward: RewardModel) -> RewardModel:
        self.db.refresh(reward)
        return reward

    def compare_and_set(self, reward_pk: int, old_version: int, new_data: dict) -> int:
        result = self.db.execute(
            update(RewardModel)
            .where(RewardModel.id == reward_pk, RewardModel.version == old_version)
            .values(**new_data)
        )
        return result.rowcount

    def add_transaction(self, tx: RewardTransactionModel) -> RewardTransactionModel:
        self.db.add(tx)
        self.db.flush()
        return tx

    def list_transactions(self, user_id: str, limit: int = 20) -> list[RewardTransactionModel]:
        return list(
            self.db.execute(
                select(RewardTransactionModel)
                .where(RewardTransactionModel.user_id == user_id)
                .order_by(RewardTransactionModel.created_at.desc(), RewardTransactionModel.id.desc())
                .limit(limit)
            ).scalars()
        )

    def get_active_config(self) -> RewardConfigModel | None:
        return self.db.execute(
            select(RewardConfigModel).where(RewardConfigModel.is_active.is_(True)).limit(1)
        ).scalar_one_or_none()

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
