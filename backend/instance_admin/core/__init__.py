"""
Core module - Security, errors, and logging utilities.
"""
from instance_admin.core.errors import (
    BackendError,
    DatabaseNotFound,
    DuplicateEmail,
    InstanceAdminError,
    InstanceConflict,
    InvalidCredentials,
    InvalidSession,
    NotAuthenticated,
    UnknownInstance,
    UserNotFound,
)
from instance_admin.core.security import (
    hash_password,
    verify_password,
    create_session_token,
    decode_session_token,
)

__all__ = [
    "BackendError",
    "DatabaseNotFound",
    "DuplicateEmail",
    "InstanceAdminError",
    "InstanceConflict",
    "InvalidCredentials",
    "InvalidSession",
    "NotAuthenticated",
    "UnknownInstance",
    "UserNotFound",
    "hash_password",
    "verify_password",
    "create_session_token",
    "decode_session_token",
]
