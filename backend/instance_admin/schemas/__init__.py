"""
Request and response schemas for API endpoints.
"""
from instance_admin.schemas.auth import LoginRequest, MessageResponse, SignupRequest
from instance_admin.schemas.instance import (
    AddEntryRequest,
    AddInstanceRequest,
    CreateDatabaseRequest,
    InstanceSummary,
)

__all__ = [
    # Auth
    "LoginRequest",
    "MessageResponse",
    "SignupRequest",
    # Instances
    "AddEntryRequest",
    "AddInstanceRequest",
    "CreateDatabaseRequest",
    "InstanceSummary",
]
