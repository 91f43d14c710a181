"""Pytest configuration and fixtures."""

import os
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import update
from sqlalchemy.orm import sessionmaker

from postershelf.api.dependencies import get_credential_codec
from postershelf.database import Base, get_db, make_engine
from postershelf.main import app
from postershelf.models.collection import Collection
from postershelf.services.auth import CredentialCodec
from postershelf.services.collections import CollectionService
from postershelf.services.users import UserService

TEST_SECRET = "test-secret"  # noqa: S105


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL", "").startswith("postgresql"):
    _base_url, _, _db_name = os.getenv("DATABASE_URL").rpartition("/")
    SQLALCHEMY_DATABASE_URL = f"{_base_url}/{_db_name}_test"
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = make_engine(SQLALCHEMY_DATABASE_URL)
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


@pytest.fixture
def codec():
    return CredentialCodec(TEST_SECRET, algorithm="HS256", expiration_minutes=60)


@pytest.fixture
def users(db):
    return UserService(db)


@pytest.fixture
def collections(db):
    return CollectionService(db)


@pytest.fixture(scope="function")
def client(db, codec):
    """Create a test client with database and codec overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_credential_codec] = lambda: codec
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _signup(client, email: str, password: str = "testpass123") -> AuthHeaders:
    response = client.post("/api/v1/auth/signup", json={"email": email, "password": password})
    assert response.status_code == 201
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['access_token']}"},
        user_id=data["user"]["id"],
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return _signup(client, "alice@example.com")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return _signup(client, "bob@example.com")


@pytest.fixture
def rewind_updated_at(db):
    """Move a collection's updated_at into the past and return the stored value.

    SQLite's CURRENT_TIMESTAMP has one-second resolution, so two writes in the
    same second store equal timestamps there. PostgreSQL's now() does not tie.
    """

    def rewind(collection: Collection) -> datetime:
        db.execute(
            update(Collection)
            .where(Collection.id == collection.id)
            .values(updated_at=datetime(2000, 1, 1, tzinfo=UTC))
        )
        db.commit()
        db.refresh(collection)
        return collection.updated_at

    return rewind
