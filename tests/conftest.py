"""Pytest configuration and fixtures.

Every test runs against a fresh in-memory SQLite database and a fresh token
blacklist, wired into the app through dependency overrides.
"""

import os
import tempfile
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app modules
os.environ["ACCESS_SECRET"] = "test-access-secret"
os.environ["REFRESH_SECRET"] = "test-refresh-secret"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DATA_DIR"] = tempfile.mkdtemp(prefix="fm-data-")
os.environ["UPLOAD_PATH"] = tempfile.mkdtemp(prefix="fm-uploads-")
os.environ["RUN_MIGRATIONS"] = "false"
os.environ["SEED_DEMO_DATA"] = "false"

import app.models  # noqa: E402,F401
from app.core.blacklist import InMemoryTokenBlacklist, get_token_blacklist  # noqa: E402
from app.core.security import hash_password  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import api  # noqa: E402
from app.models.user import User  # noqa: E402

TEST_PASSWORD = "password123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def blacklist() -> InMemoryTokenBlacklist:
    return InMemoryTokenBlacklist()


@pytest.fixture
def client(session_factory, blacklist) -> Generator[TestClient, None, None]:
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    api.dependency_overrides[get_db] = override_get_db
    api.dependency_overrides[get_token_blacklist] = lambda: blacklist
    with TestClient(api) as test_client:
        yield test_client
    api.dependency_overrides.clear()


def make_user(db: Session, email: str, *, role: str = "technician", name: str = "Test User",
              password: str = TEST_PASSWORD, is_active: bool = True) -> User:
    user = User(
        email=email,
        name=name,
        role=role,
        password_hash=hash_password(password),
        is_active=is_active,
        profile={},
        refresh_tokens=[],
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db) -> User:
    return make_user(db, "admin@company.com", role="admin", name="Admin User")


@pytest.fixture
def tech_user(db) -> User:
    return make_user(db, "tech@company.com", name="Tech User")


def login(client: TestClient, email: str, password: str = TEST_PASSWORD) -> dict:
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["tokens"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client, admin_user) -> dict:
    return bearer(login(client, admin_user.email)["access_token"])


@pytest.fixture
def tech_headers(client, tech_user) -> dict:
    return bearer(login(client, tech_user.email)["access_token"])
