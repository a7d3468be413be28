"""
Instance registry and operations dependencies.
"""
from typing import Annotated

from fastapi import Depends, Request

from instance_admin.config import Settings, get_settings
from instance_admin.database.registry import InstanceRegistry
from instance_admin.dependencies.auth import get_authenticator
from instance_admin.services.auth_service import PasswordAuthenticator
from instance_admin.services.instance_service import InstanceService


def get_instance_registry(request: Request) -> InstanceRegistry:
    """The registry owned by the running application."""
    return request.app.state.instance_registry


async def get_instance_service(
    registry: Annotated[InstanceRegistry, Depends(get_instance_registry)],
    authenticator: Annotated[PasswordAuthenticator, Depends(get_authenticator)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> InstanceService:
    """Dependency to get InstanceService instance."""
    return InstanceService(registry, authenticator, settings.backend_timeout_seconds)
