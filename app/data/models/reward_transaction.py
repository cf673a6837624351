from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index

from app.data.database import Base
from app.data.models._common import new_business_id, utcnow


class RewardTransactionModel(Base):
    """Ledger entry. Rows are inserted once and never updated."""

    __tablename__ = "reward_transactions"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(String(36), nullable=False, unique=True, default=new_business_id)
    reward_id = Column(String(36), ForeignKey("rewards.reward_id"), nullable=False)
    user_id = Column(String(36), nullable=False)

    type = Column(String(10), nullable=False)
    amount = Column(Integer, nullable=False)
    balance_after = Column(Integer, nullable=False)
    order_id = Column(String(64), nullable=True)
    description = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("ix_reward_tx_user_created", "user_id", "created_at"),
    )
