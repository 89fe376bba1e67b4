"""
Test configuration and fixtures for the redirect shortener.
Each test gets its own storage and its own application instance.
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from shortener_app.storage.strategies import InMemoryRedirectStorage


@pytest.fixture(scope="function")
def storage():
    """Fresh, empty in-memory storage"""
    return InMemoryRedirectStorage(lock_timeout=1.0)


@pytest.fixture(scope="function")
def app(storage):
    """Application wired to the test's storage"""
    return create_app(storage=storage)


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for the per-test application.
    This is the main fixture that tests will use.
    """
    with TestClient(app) as test_client:
        yield test_client
