# app/main.py
from fastapi import FastAPI
import uvicorn

from app.api import include_routers
from app.api.cors import StorefrontCORSMiddleware
from app.api.errors import register_exception_handlers
from app.data.database import Base, engine
from app.utils.logging import get_logger

# every model has to be registered on Base before create_all
from app.data import models  # noqa: F401

logger = get_logger(__name__)


def init_db():
    logger.info(f"Creating tables: {sorted(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=engine)


def create_app(create_tables: bool = True) -> FastAPI:
    if create_tables:
        init_db()

    app = FastAPI(
        title="Storefront API",
        version="1.0.0",
    )

    app.add_middleware(StorefrontCORSMiddleware)
    register_exception_handlers(app)
    include_routers(app)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
