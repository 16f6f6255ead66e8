"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from src.config import Settings
from src.database import Base, create_db_engine, create_session_factory, get_db
from src.main import create_app
from src.models.enums import UserRole
from src.services.auth import create_user


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/trustme", "/trustme_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="session")
def settings(tmp_path_factory):
    """Settings for the application under test."""
    return Settings(
        database_url=SQLALCHEMY_DATABASE_URL,
        environment="test",
        jwt_secret="test-secret",
        upload_dir=str(tmp_path_factory.mktemp("uploads")),
        max_file_size=1024,
    )


@pytest.fixture(scope="session")
def engine(settings):
    engine = create_db_engine(settings)
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function", autouse=True)
def db(engine):
    """Create a fresh database session for each test with cleanup."""
    session = create_session_factory(engine)()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="session")
def app(settings):
    return create_app(settings)


@pytest.fixture(scope="function")
def client(app, db):
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


def register(client, email: str, name: str = "Test User", password: str = "testpass123"):
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "name": name},
    )
    assert response.status_code == 201
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=email,
    )


def make_admin(client, db: Session, email: str, name: str) -> AuthHeaders:
    create_user(db, email, "adminpass123", name, role=UserRole.ADMIN)
    response = client.post("/api/auth/login", json={"email": email, "password": "adminpass123"})
    assert response.status_code == 200
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register(client, "test@example.com")


@pytest.fixture
def other_headers(client):
    """A second regular user."""
    return register(client, "other@example.com", name="Other User")


@pytest.fixture
def admin_headers(client, db):
    """Create an administrator and return auth headers."""
    return make_admin(client, db, "admin@example.com", "Admin One")


@pytest.fixture
def second_admin_headers(client, db):
    return make_admin(client, db, "admin2@example.com", "Admin Two")


def image(name: str = "photo.jpg", content_type: str = "image/jpeg", size: int = 64):
    """A multipart file tuple for the images field."""
    return ("images", (name, b"\xff" * size, content_type))


@pytest.fixture
def create_item(client):
    """Factory that submits an item and returns the response JSON item."""

    def _create(headers, images=None, **fields):
        data = {"title": "Air Jordan 1", "brand": "Nike", "model": "AJ1"}
        data.update(fields)
        response = client.post("/api/items", headers=headers, data=data, files=images or [])
        assert response.status_code == 201, response.text
        return response.json()["item"]

    return _create
