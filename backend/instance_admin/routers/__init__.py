"""
API Routers module.
"""
from instance_admin.routers import auth, health, instances

__all__ = ["auth", "health", "instances"]
