# app/api/routers/blogs.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.envelope import envelope
from app.data.database import get_db
from app.services.blog_service import BlogService

router = APIRouter(prefix="/api/blogs", tags=["blogs"])


@router.get("")
def list_blogs(db: Session = Depends(get_db)):
    blogs = BlogService(db).list()
    return envelope(200, "Blogs retrieved successfully", {"blogs": blogs, "count": len(blogs)})


@router.get("/{blog_id}")
def get_blog(blog_id: str, db: Session = Depends(get_db)):
    return envelope(200, "Blog retrieved successfully", BlogService(db).get(blog_id))
