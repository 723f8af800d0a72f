"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from src.config import Settings
from src.database import Database
from src.main import create_app
from src.services.auth import build_password_context

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "testpass123"


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite database, with cheap bcrypt."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        bcrypt_rounds=4,
        session_secret="test-secret",
        environment="test",
    )


@pytest.fixture
def pwd_context():
    return build_password_context(rounds=4)


@pytest.fixture
def database(settings):
    """An open database for tests that use the services directly."""
    database = Database(settings.database_url)
    database.open()
    yield database
    database.close()


@pytest.fixture
def db(database):
    """Create a database session for each test."""
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Create a test client; entering it runs the app lifespan."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client):
    """A client that registered a user and holds its session cookie."""
    response = client.post(
        "/api/auth/register",
        json={"email": TEST_EMAIL, "password": TEST_PASSWORD, "name": "Test User"},
    )
    assert response.status_code == 200
    client.user_id = response.json()["user"]["id"]
    client.email = TEST_EMAIL
    client.password = TEST_PASSWORD
    return client
