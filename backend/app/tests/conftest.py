"""
Shared fixtures: in-memory SQLite database and a TestClient bound to it.
"""
import os

# Configure before the app is imported: no MySQL, cheap bcrypt rounds.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.security import get_password_hash  # noqa: E402
from app.core.utils import utcnow  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import User  # noqa: E402

# In-memory SQLite database shared across connections via StaticPool.
engine_test = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine_test)


@pytest.fixture()
def db_session():
    """Fresh schema and session for every test."""
    Base.metadata.drop_all(bind=engine_test)
    Base.metadata.create_all(bind=engine_test)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db_session):
    """TestClient whose requests use the test session."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture()
def user_payload():
    """Valid create-user request body."""
    return {
        "email": "john.doe@example.com",
        "username": "johndoe",
        "password": "password123",
        "firstName": "John",
        "lastName": "Doe",
    }


@pytest.fixture()
def user_factory(db_session):
    """Create users directly in the database, bypassing the API."""

    def _create_user(
        email: str,
        username: str,
        first_name: str = "Test",
        last_name: str = "User",
        password: str = "password123",
        is_active: bool = True,
    ) -> User:
        now = utcnow()
        user = User(
            email=email,
            username=username,
            password=get_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _create_user
