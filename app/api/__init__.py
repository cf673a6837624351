# app/api/__init__.py
from fastapi import FastAPI

from app.api.routers import auth, blogs, cart, health, notifications, order_logs, reference, rewards, wishlist


def include_routers(app: FastAPI):
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(cart.router)
    app.include_router(wishlist.router)
    app.include_router(rewards.router)
    app.include_router(rewards.admin_router)
    app.include_router(notifications.router)
    app.include_router(order_logs.router)
    app.include_router(blogs.router)
    app.include_router(reference.router)
