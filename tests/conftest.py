import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Ensure the test database URL is set before importing the app.
# "sqlite://" is an in-memory database shared across connections.
os.environ["DATABASE_URL"] = os.getenv("TEST_DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["STORAGE_BACKEND"] = "sql"

from casedesk.config import settings  # noqa: E402
from casedesk.database import Base, SessionLocal, engine  # noqa: E402
from casedesk.main import app  # noqa: E402
from casedesk.stores import reset_memory_stores  # noqa: E402
from casedesk.stores.memory import (  # noqa: E402
    MemoryCaseStore,
    MemoryClientStore,
    MemoryUserStore,
)

ADMIN_EMAIL = settings.default_admin_email
ADMIN_PASSWORD = settings.default_admin_password


@pytest.fixture(autouse=True)
def clean_db():
    """Reset schema and in-memory stores for each test for isolation."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    reset_memory_stores()
    yield
    reset_memory_stores()


@pytest.fixture()
def client(clean_db) -> Generator[TestClient, None, None]:
    """FastAPI test client that also triggers startup/shutdown hooks."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def memory_client(clean_db, monkeypatch) -> Generator[TestClient, None, None]:
    """Same app, served from the in-process stores instead of the database."""
    monkeypatch.setattr(settings, "storage_backend", "memory")
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db_session(client):
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def admin_client(client):
    """Test client with the seeded admin logged in."""
    resp = client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert resp.status_code == 200
    return client


@pytest.fixture()
def user_store():
    return MemoryUserStore()


@pytest.fixture()
def case_store():
    return MemoryCaseStore()


@pytest.fixture()
def client_store():
    return MemoryClientStore()
