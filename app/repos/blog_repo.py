# app/repos/blog_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.blog import BlogModel
from app.domain.enums import RecordStatus


class BlogRepo:
    def __init__(self, db: Session):
        self.db = db

    def _live(self):
        return select(BlogModel).where(BlogModel.status == RecordStatus.ACTIVE.value)

    def get_by_business_id(self, blog_id: str) -> BlogModel | None:
        return self.db.execute(
            self._live().where(BlogModel.blog_id == blog_id)
        ).scalar_one_or_none()

    def get_by_storage_id(self, pk: int) -> BlogModel | None:
        return self.db.execute(
            self._live().where(BlogModel.id == pk)
        ).scalar_one_or_none()

    def list(self, published_only: bool = True) -> list[BlogModel]:
        stmt = self._live()
        if published_only:
            stmt = stmt.where(BlogModel.is_published.is_(True))
        stmt = stmt.order_by(BlogModel.created_at.desc(), BlogModel.id.desc())
        return list(self.db.execute(stmt).scalars())

    def create(self, blog: BlogModel) -> BlogModel:
        self.db.add(blog)
        self.db.commit()
        self.db.refresh(blog)
        return blog
