# server/tests/conftest.py

"""
Shared fixtures: a fresh SQLite database per test, a FastAPI test client,
and helpers for creating users and session tokens.
"""

import os

# Must be set before any application module reads its configuration.
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-testing-only")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SUPPORTED_LOCALES"] = "en,es"
os.environ["DEFAULT_LOCALE"] = "en"
os.environ["CORS_ORIGINS"] = "*"

import pytest
from fastapi.testclient import TestClient

import database
from core.passwords import hash_password
from core.sessions import get_session_issuer, reset_session_issuer
from models.user import User


TEST_PASSWORD = "password123"


@pytest.fixture(autouse=True)
def test_database(tmp_path):
    """Point the process-wide engine at an empty database for each test."""
    database.reset_engine(f"sqlite:///{tmp_path / 'test.db'}")
    database.init_db()
    reset_session_issuer()
    yield
    reset_session_issuer()
    database.reset_engine()


@pytest.fixture
def db():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db):
    """Factory that stores a user and returns it."""

    def _make_user(
        username: str = "testuser",
        email: str = "test@example.com",
        password: str | None = TEST_PASSWORD,
        completed_onboarding: bool = False,
        image: str | None = None,
    ) -> User:
        user = User(
            username=username,
            email=email,
            hashed_password=hash_password(password) if password else None,
            completed_onboarding=completed_onboarding,
            image=image,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def issue_token():
    def _issue(user: User) -> str:
        return get_session_issuer().issue(user)

    return _issue


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
