"""
Pydantic models for database documents and in-memory registrations.
"""
from instance_admin.models.instance import InstanceHandle
from instance_admin.models.user import User

__all__ = [
    "InstanceHandle",
    "User",
]
