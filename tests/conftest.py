"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.database import Base, get_db
from src.main import app


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id, email and username."""

    def __init__(
        self,
        *args,
        user_id: str | None = None,
        email: str = "",
        username: str = "",
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.username = username


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL", "").startswith("postgresql"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").rsplit("/", 1)[0] + "/blog_test"
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """Factory that registers a user and returns auth headers for it."""

    def _register(email: str, username: str, password: str = "testpass123") -> AuthHeaders:
        response = client.post(
            "/api/auth/register",
            json={"email": email, "username": username, "password": password},
        )
        assert response.status_code == 201, response.text
        data = response.json()
        return AuthHeaders(
            {"Authorization": f"Bearer {data['token']}"},
            user_id=data["user"]["id"],
            email=email,
            username=username,
        )

    return _register


@pytest.fixture
def auth_headers(register_user):
    """Create a user and return auth headers with user info."""
    return register_user("test@example.com", "testuser")


@pytest.fixture
def other_auth_headers(register_user):
    """A second user who does not own the first user's posts."""
    return register_user("other@example.com", "otheruser")
