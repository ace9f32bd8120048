import os
import tempfile

# Set environment variables BEFORE any app imports;
# app.config.settings is loaded at import time.
_TEST_DB_PATH = os.path.join(tempfile.gettempdir(), "test_raas.db")
_TEST_STORAGE_DIR = tempfile.mkdtemp(prefix="raas-storage-")
os.environ["SECRET_KEY"] = "test-secret-key-1234567890"
os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{_TEST_DB_PATH}"
os.environ["ENVIRONMENT"] = "test"
os.environ["API_V1_STR"] = "/api"
os.environ["STORAGE_DIR"] = _TEST_STORAGE_DIR
os.environ["DEFAULT_ADMIN_PASSWORD"] = "admin-pass-123"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app import models  # noqa: F401
from app.database import Base, get_db, engine as app_engine
from app.main import app
from app.services.auth import seed_defaults

TEST_ENGINE = app_engine

TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=TEST_ENGINE, future=True
)

ADMIN_PASSWORD = "admin-pass-123"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function", autouse=True)
def setup_test_database():
    """Fresh schema for every test; test-specific dependency overrides are dropped afterwards."""
    original_overrides = dict(app.dependency_overrides)

    Base.metadata.drop_all(bind=TEST_ENGINE)
    Base.metadata.create_all(bind=TEST_ENGINE)

    yield

    app.dependency_overrides.clear()
    app.dependency_overrides.update(original_overrides)
    Base.metadata.drop_all(bind=TEST_ENGINE)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seeded(db_session):
    seed_defaults(db_session)
    return db_session


def login(client, username, password):
    r = client.post("/api/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


def bearer(token_pair):
    return {"Authorization": f"Bearer {token_pair['access_token']}"}


@pytest.fixture
def admin_headers(client, seeded):
    return bearer(login(client, "admin", ADMIN_PASSWORD))


@pytest.fixture
def user_headers(client, seeded):
    """A plain account registered through the public endpoint (USER role only)."""
    r = client.post(
        "/api/auth/register",
        json={"username": "jdoe", "email": "jdoe@example.com", "password": "secret123"},
    )
    assert r.status_code == 201, r.text
    return bearer(r.json())
