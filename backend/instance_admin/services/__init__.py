"""
Service layer for business logic.
"""
from instance_admin.services.auth_service import Authenticator, PasswordAuthenticator
from instance_admin.services.instance_service import InstanceService
from instance_admin.services.session_service import SessionService

__all__ = [
    "Authenticator",
    "PasswordAuthenticator",
    "InstanceService",
    "SessionService",
]
