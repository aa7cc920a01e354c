"""
Shared fixtures.

Every test gets its own storage and app, so nothing leaks between tests.
Password hashing runs with few iterations to keep the suite fast.
"""

import pytest
from fastapi.testclient import TestClient

from finflow.api.app import create_app
from finflow.auth.context import AuthContext
from finflow.auth.jwt import TokenService
from finflow.auth.passwords import PasswordHasher
from finflow.config import Settings
from finflow.container import Container
from finflow.storage import InMemoryMetadataStorage

TEST_SECRET = "test-secret-0123456789abcdef0123456789abcdef"


@pytest.fixture
def settings():
    return Settings(
        environment="test",
        jwt_secret=TEST_SECRET,
        app_system_user="system",
        sentry_dsn="",
        _env_file=None,
    )


@pytest.fixture
def passwords():
    return PasswordHasher(iterations=1_000)


@pytest.fixture
def storage():
    return InMemoryMetadataStorage()


@pytest.fixture
def container(settings, storage, passwords):
    return Container.build(settings, storage, passwords=passwords)


@pytest.fixture
def tokens(settings):
    return TokenService.from_settings(settings)


@pytest.fixture
def app(settings, storage, passwords):
    return create_app(settings=settings, storage=storage, passwords=passwords)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def alice():
    return AuthContext(user_id="u1")


@pytest.fixture
def bob():
    return AuthContext(user_id="u2")


@pytest.fixture
def auth_headers(tokens):
    """Build an Authorization header for a user id."""

    def build(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {tokens.issue(user_id)}"}

    return build
