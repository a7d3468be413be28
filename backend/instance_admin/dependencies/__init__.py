"""
Dependencies for dependency injection in routes.
"""
from instance_admin.dependencies.auth import (
    get_authenticator,
    get_current_user,
    get_optional_user,
    get_session_service,
    require_instance_access,
)
from instance_admin.dependencies.instances import get_instance_registry, get_instance_service

__all__ = [
    "get_authenticator",
    "get_current_user",
    "get_optional_user",
    "get_session_service",
    "require_instance_access",
    "get_instance_registry",
    "get_instance_service",
]
