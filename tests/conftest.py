"""
Global test fixtures for Instance Admin.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor) for the credential store and instances
- A FastAPI app wired to the mocks
- Test user data
"""

import sys
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest.fixture
def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.

    This provides an in-memory MongoDB that behaves like the real thing
    for testing purposes.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
    except ImportError:
        pytest.skip("mongomock-motor not installed")
    client = AsyncMongoMockClient()
    yield client
    client.close()


@pytest_asyncio.fixture
async def mock_auth_db(mock_async_mongo_client):
    """Provide the mock credential database with its indexes."""
    from instance_admin.database.databases import auth_db

    db = mock_async_mongo_client["data"]
    await auth_db.create_auth_indexes(db)
    yield db


@pytest.fixture
def instance_client_factory():
    """
    Client factory that hands out a fresh in-memory client per registration.

    Every client built is kept in ``factory.created`` so tests can inspect them.
    """
    mongomock_motor = pytest.importorskip("mongomock_motor")

    created = []

    def factory(connection_string: str):
        client = mongomock_motor.AsyncMongoMockClient()
        created.append(client)
        return client

    factory.created = created
    return factory


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def test_user_data() -> dict:
    """Basic test user data for signup."""
    return {
        "email": "a@x.com",
        "password": "p1",
    }


@pytest.fixture
def other_user_data() -> dict:
    return {
        "email": "testuser@example.com",
        "password": "SecurePassword123!",
    }


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app(mock_async_mongo_client, instance_client_factory):
    """
    Create a FastAPI app for testing.

    The credential store is the mongomock client and every registered
    instance gets its own in-memory client.
    """
    from instance_admin.database.connections import get_auth_database
    from instance_admin.main import create_app

    async def _auth_db():
        return mock_async_mongo_client["data"]

    application = create_app(client_factory=instance_client_factory)
    application.dependency_overrides[get_auth_database] = _auth_db

    with patch("instance_admin.main.get_auth_database", _auth_db):
        yield application


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.

    Redirects are not followed so tests can assert on them.
    """
    with TestClient(app, follow_redirects=False) as c:
        yield c


@pytest.fixture
def logged_in_client(client, test_user_data) -> TestClient:
    """A client holding a valid session cookie for ``test_user_data``."""
    response = client.post("/signup", json=test_user_data)
    assert response.status_code == 200

    response = client.post("/login", data=test_user_data)
    assert response.status_code == 302
    assert response.headers["location"] == "/admin"
    return client
