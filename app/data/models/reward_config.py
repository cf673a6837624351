from sqlalchemy import Column, Integer, String, Boolean, Numeric

from app.data.database import Base
from app.data.models._common import new_business_id


class RewardConfigModel(Base):
    __tablename__ = "reward_configs"

    id = Column(Integer, primary_key=True)
    config_id = Column(String(36), nullable=False, unique=True, default=new_business_id)
    name = Column(String(100), nullable=False)

    points_per_order = Column(Integer, nullable=False, default=10)
    points_per_rupee = Column(Numeric(6, 2), nullable=False, default=1)
    min_order_for_reward = Column(Numeric(10, 2), nullable=False, default=500)
    redemption_rate = Column(Integer, nullable=False, default=10)
    min_redemption_points = Column(Integer, nullable=False, default=100)
    max_redemption_percent = Column(Integer, nullable=False, default=50)
    eligibility_after_orders = Column(Integer, nullable=False, default=1)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
