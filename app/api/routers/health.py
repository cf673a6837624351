# app/api/routers/health.py
from fastapi import APIRouter

from app.api.envelope import envelope

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return envelope(200, "ok", {"status": "healthy"})
