"""
Error taxonomy shared by services and routers.

Each error carries the HTTP status it is rendered with by the
application-level exception handler in ``instance_admin.main``.
"""
from fastapi import status


class InstanceAdminError(Exception):
    """Base class for all errors raised by this service."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# ==================== Authentication ====================


class DuplicateEmail(InstanceAdminError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already exists"


class InvalidCredentials(InstanceAdminError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class UserNotFound(InstanceAdminError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "User not found"


class InvalidSession(InstanceAdminError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Session is invalid or expired"


class NotAuthenticated(InstanceAdminError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


# ==================== Instances ====================


class UnknownInstance(InstanceAdminError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, instance_name: str):
        self.instance_name = instance_name
        super().__init__(f"Instance {instance_name} not found")


class InstanceConflict(InstanceAdminError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, instance_name: str):
        self.instance_name = instance_name
        super().__init__(f"Instance {instance_name} already exists")


class BackendError(InstanceAdminError):
    """Any failure surfaced by the MongoDB driver during an instance operation."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Database backend error"


class DatabaseNotFound(BackendError):
    def __init__(self, database_name: str):
        self.database_name = database_name
        super().__init__(f"Database {database_name} does not exist")
