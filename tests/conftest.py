"""
Pytest configuration and fixtures for SocialFeed API tests.
"""
import os
import tempfile

# Settings are cached on first import, so the environment must be ready before app is imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="socialfeed-uploads-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.limiter import limiter
from app.main import app
from app.auth import issue_token
from app.services import posts as feed
from app.services import users

# Disable rate limiting for tests
limiter.enabled = False

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Global session for sharing across requests
_test_session = None


def get_test_db():
    """Get the shared test database session."""
    yield _test_session


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    global _test_session

    Base.metadata.create_all(bind=engine)
    _test_session = TestingSessionLocal()
    app.dependency_overrides[get_db] = get_test_db

    yield _test_session

    app.dependency_overrides.clear()
    _test_session.close()
    _test_session = None
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def test_user(db):
    """Create a test user."""
    user, _ = users.register(db, "testuser", "test@example.com", "testpassword123", "testpassword123")
    return user


@pytest.fixture(scope="function")
def other_user(db):
    """Create a second user for likes and comments."""
    user, _ = users.register(db, "otheruser", "other@example.com", "otherpassword", "otherpassword")
    return user


@pytest.fixture(scope="function")
def auth_headers(test_user):
    """Get auth headers for the test user."""
    return {"Authorization": f"Bearer {issue_token(test_user.id)}"}


@pytest.fixture(scope="function")
def other_headers(other_user):
    return {"Authorization": f"Bearer {issue_token(other_user.id)}"}


@pytest.fixture(scope="function")
def test_post(db, test_user):
    """A text post by the test user."""
    return feed.create_post(db, test_user.id, text="hi")


@pytest.fixture(scope="function")
def session_factory(db):
    """Sessions independent of the shared request session, on the same engine."""
    return TestingSessionLocal
