"""API test fixtures.

The app is used without entering its lifespan (no ``with TestClient``), so
no tables are created and the cleanup job never starts; every route under
test gets its handler through app.dependency_overrides.
"""

import pytest
from fastapi.testclient import TestClient

from src.main import app


@pytest.fixture
def client():
    """Create TestClient for API tests using real app."""
    return TestClient(app, raise_server_exceptions=False)
