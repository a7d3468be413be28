"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with helpers for testing
services, the instance registry and error responses.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def authenticator(mock_auth_db):
    """A PasswordAuthenticator over the mock credential database."""
    from instance_admin.services.auth_service import PasswordAuthenticator

    return PasswordAuthenticator(mock_auth_db)


@pytest.fixture
def session_service(mock_auth_db):
    """A SessionService over the mock credential database."""
    from instance_admin.services.session_service import SessionService

    return SessionService(mock_auth_db)


@pytest.fixture
def registry(instance_client_factory):
    """An empty registry handing out in-memory clients."""
    from instance_admin.database.registry import InstanceRegistry

    return InstanceRegistry(client_factory=instance_client_factory)


@pytest.fixture
def instance_service(registry, authenticator):
    """InstanceService wired to the in-memory registry and credential store."""
    from instance_admin.services.instance_service import InstanceService

    return InstanceService(registry, authenticator, timeout_seconds=1.0)


@pytest.fixture
def mock_motor_client():
    """
    A MagicMock shaped like a motor client.

    Async driver methods are AsyncMock so failures can be injected:

        mock_motor_client.drop_database.side_effect = OperationFailure("boom")
    """
    client = MagicMock()
    client.list_database_names = AsyncMock(return_value=["admin", "local"])
    client.drop_database = AsyncMock()
    database = MagicMock()
    database.create_collection = AsyncMock()
    database.list_collection_names = AsyncMock(return_value=[])
    client.__getitem__.return_value = database
    return client


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, message_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert "message" in data
        if message_contains:
            assert message_contains.lower() in data["message"].lower()
    return _assert
