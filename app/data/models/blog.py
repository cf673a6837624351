from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON

from app.data.database import Base
from app.data.models._common import new_business_id, utcnow
from app.domain.enums import RecordStatus


class BlogModel(Base):
    __tablename__ = "blogs"

    id = Column(Integer, primary_key=True)
    blog_id = Column(String(36), nullable=False, unique=True, default=new_business_id)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(String(500), nullable=True)
    author = Column(String(100), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    images = Column(JSON, nullable=False, default=list)

    is_published = Column(Boolean, nullable=False, default=False)
    published_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(10), nullable=False, default=RecordStatus.ACTIVE.value)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
