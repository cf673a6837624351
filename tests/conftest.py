"""
Pytest configuration and shared fixtures.

The environment is pinned before any app module is imported: settings are
read once at import time, so the engine, Celery and the auth helpers all
pick up the test values.
"""

import os
from unittest.mock import MagicMock

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["ENVIRONMENT"] = "test"
os.environ["OTP_ECHO"] = "true"
os.environ["ALLOWED_ORIGINS"] = ""
os.environ["JWT_SECRET"] = "test-signing-secret-not-for-production-use"

import fakeredis
import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_credential_store, get_product_client
from app.data.database import Base, SessionLocal, engine, get_db
from app.domain.exceptions import NotFoundError
from app.main import create_app
from app.services.auth_guard import issue_token
from app.services.credential_store import RedisCredentialStore
from app.services.product_client import ProductClient

KNOWN_PRODUCTS = {"turmeric-powder", "garam-masala", "cumin-seeds"}


@pytest.fixture
def db():
    """Fresh schema per test on the shared in-memory engine."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def product_client():
    """Catalogue stub: a handful of known products, NotFoundError for the rest."""
    client = MagicMock(spec=ProductClient)

    def fetch(product_id):
        if product_id not in KNOWN_PRODUCTS:
            raise NotFoundError("Product not found", details={"productId": product_id})
        return {"productId": product_id}

    client.fetch_product.side_effect = fetch
    return client


@pytest.fixture
def fake_redis():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def credential_store(fake_redis):
    return RedisCredentialStore(client=fake_redis)


@pytest.fixture
def app(db, product_client, credential_store):
    application = create_app(create_tables=False)

    def override_get_db():
        yield db

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_product_client] = lambda: product_client
    application.dependency_overrides[get_credential_store] = lambda: credential_store
    return application


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def user_id():
    return "user-123"


@pytest.fixture
def auth_headers(user_id):
    return {"Authorization": f"Bearer {issue_token(user_id, 'shopper@example.com')}"}
