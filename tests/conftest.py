"""
Pytest configuration and fixtures for backend tests.
"""

import os
import tempfile
from decimal import Decimal

# Must be set before the application modules read their settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SESSION_BACKEND", "database")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="sportsbar-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from shared.infrastructure.db import get_db
from rest_api.models import Base, MenuCategory, MenuItem, User
from shared.config.constants import Roles
from shared.security.password import hash_password


TEST_PASSWORD = "testpass123"

# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _make_user(db_session, username: str, role: str, **fields) -> User:
    user = User(
        username=username,
        password=hash_password(TEST_PASSWORD),
        role=role,
        **fields,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def seed_admin_user(db_session):
    """Admin account."""
    return _make_user(db_session, "admin", Roles.ADMIN, email="admin@test.com")


@pytest.fixture
def seed_staff_user(db_session):
    """Staff account."""
    return _make_user(db_session, "staff", Roles.STAFF, email="staff@test.com")


@pytest.fixture
def seed_regular_user(db_session):
    """Account with the default `user` role."""
    return _make_user(db_session, "regular", Roles.USER)


def login(test_client: TestClient, username: str, password: str = TEST_PASSWORD) -> TestClient:
    """Log a client in; the session cookie stays in its cookie jar."""
    response = test_client.post(
        "/api/auth/login",
        json={"username": username, "password": password},
    )
    assert response.status_code == 200, f"Login failed: {response.json()}"
    return test_client


@pytest.fixture
def admin_client(client, seed_admin_user):
    """Client logged in as admin."""
    return login(client, seed_admin_user.username)


@pytest.fixture
def staff_client(client, seed_staff_user):
    """Client logged in as staff."""
    return login(client, seed_staff_user.username)


@pytest.fixture
def user_client(client, seed_regular_user):
    """Client logged in with the plain `user` role."""
    return login(client, seed_regular_user.username)


@pytest.fixture
def seed_category(db_session):
    category = MenuCategory(name="Wings", description="Buffalo and BBQ wings", order=3)
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def seed_menu_item(db_session, seed_category):
    item = MenuItem(
        category_id=seed_category.id,
        name="Buffalo Wings",
        description="Ten wings, house buffalo sauce",
        price=Decimal("12.99"),
        tags=["spicy"],
        spicy_level=3,
    )
    db_session.add(item)
    db_session.commit()
    db_session.refresh(item)
    return item
