from sqlalchemy import Column, Integer, String, Boolean, DateTime

from app.data.database import Base
from app.data.models._common import new_business_id, utcnow
from app.domain.enums import RecordStatus


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), nullable=False, unique=True, default=new_business_id)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(10), nullable=False, unique=True)

    is_active = Column(Boolean, nullable=False, default=True)
    status = Column(String(10), nullable=False, default=RecordStatus.ACTIVE.value)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
