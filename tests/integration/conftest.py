"""Fixtures for exercising the HTTP application."""

import pytest
from fastapi.testclient import TestClient

from api.src.main import app


@pytest.fixture
def client():
    """TestClient running the application lifespan."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
