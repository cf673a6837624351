from sqlalchemy import Column, Integer, String, Boolean, DateTime, CheckConstraint

from app.data.database import Base
from app.data.models._common import new_business_id, utcnow


class RewardModel(Base):
    __tablename__ = "rewards"

    id = Column(Integer, primary_key=True)
    reward_id = Column(String(36), nullable=False, unique=True, default=new_business_id)
    user_id = Column(String(36), nullable=False, unique=True, index=True)

    balance = Column(Integer, nullable=False, default=0)
    lifetime_earned = Column(Integer, nullable=False, default=0)
    lifetime_redeemed = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    # bumped by every balance change, guards the compare-and-set update
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_reward_balance"),
        CheckConstraint("lifetime_earned >= 0", name="ck_reward_lifetime_earned"),
        CheckConstraint("lifetime_redeemed >= 0", name="ck_reward_lifetime_redeemed"),
    )
