import pytest
from fastapi.testclient import TestClient

from food_ordering.core.config import Settings
from food_ordering.core.dependencies import require_token
from food_ordering.main import create_app


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://:memory:",
        AUTH0_DOMAIN="tenant.auth0.test",
        AUTH0_CLIENT_ID="client-123",
        AUTH0_CLIENT_SECRET="secret",
    )


@pytest.fixture
def app(settings):
    # The lifespan (and with it the database) only runs when the client is
    # used as a context manager; see test_database_lifespan.py.
    application = create_app(settings)
    application.dependency_overrides[require_token] = lambda: {"sub": "auth0|tester"}
    return application


@pytest.fixture
def client(app):
    return TestClient(app)

