"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from query_token_auth.config import Settings, get_settings
from query_token_auth.core.app_factory import create_app
from query_token_auth.models.context import AuthenticationContext
from query_token_auth.routers import session_router
from query_token_auth.services.token_extractor import parse_query

TEST_API_KEY = "test-api-key"


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with empty rate limit counters."""
    session_router.limiter.reset()
    yield


@pytest.fixture
def mock_settings():
    """Settings instance with test values, ignoring any local .env file."""
    return Settings(_env_file=None, api_host="127.0.0.1", api_key=TEST_API_KEY)


@pytest.fixture
def app(mock_settings):
    """Application wired with the test settings."""
    application = create_app(mock_settings)
    application.dependency_overrides[get_settings] = lambda: mock_settings
    return application


@pytest.fixture
def test_client(app):
    """FastAPI test client with lifespan context."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_context():
    """Build an AuthenticationContext from a raw query string."""

    def _make(query_string: str | None = None, headers: dict[str, str] | None = None) -> AuthenticationContext:
        return AuthenticationContext(query=parse_query(query_string), headers=headers)

    return _make
