# app/services/blog_service.py
from typing import Dict, Any, List

from sqlalchemy.orm import Session

from app.data.models.blog import BlogModel
from app.domain.exceptions import ValidationError, NotFoundError
from app.repos.blog_repo import BlogRepo


class BlogService:
    def __init__(self, db: Session):
        self.repo = BlogRepo(db)

    def get(self, blog_id: str | None) -> Dict[str, Any]:
        """
        Resolves a blog by business id, then by storage id.

        Deleted posts are invisible to both stages.
        """
        if not blog_id or not str(blog_id).strip():
            raise ValidationError("Blog id is required")

        blog_id = str(blog_id).strip()
        blog = self.repo.get_by_business_id(blog_id)
        if blog is None and blog_id.isdigit():
            blog = self.repo.get_by_storage_id(int(blog_id))
        if blog is None:
            raise NotFoundError("Blog not found", details={"id": blog_id})
        return self.to_dict(blog)

    def list(self, published_only: bool = True) -> List[Dict[str, Any]]:
        return [self.to_dict(b) for b in self.repo.list(published_only)]

    @staticmethod
    def to_dict(blog: BlogModel) -> Dict[str, Any]:
        return {
            "id": blog.id,
            "blogId": blog.blog_id,
            "title": blog.title,
            "content": blog.content,
            "excerpt": blog.excerpt,
            "author": blog.author,
            "tags": blog.tags or [],
            "images": blog.images or [],
            "isPublished": blog.is_published,
            "publishedDate": blog.published_date,
            "createdAt": blog.created_at,
        }
