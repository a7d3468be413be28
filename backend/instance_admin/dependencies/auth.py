"""
Authentication dependencies for route protection.
"""
from typing import Annotated, Optional

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from instance_admin.config import Settings, get_settings
from instance_admin.core.errors import InstanceAdminError, NotAuthenticated
from instance_admin.database.connections import get_auth_database
from instance_admin.models.user import User
from instance_admin.services.auth_service import PasswordAuthenticator
from instance_admin.services.session_service import SessionService


async def get_authenticator(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_auth_database)],
) -> PasswordAuthenticator:
    """Dependency to get the password authenticator."""
    return PasswordAuthenticator(db)


async def get_session_service(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_auth_database)],
) -> SessionService:
    """Dependency to get the session service."""
    return SessionService(db)


async def get_current_user(
    request: Request,
    authenticator: Annotated[PasswordAuthenticator, Depends(get_authenticator)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> User:
    """
    Dependency to get the user bound to the session cookie.

    Raises:
        NotAuthenticated: If there is no session cookie
        InvalidSession: If the cookie does not name a live session
        UserNotFound: If the session's user no longer exists
    """
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise NotAuthenticated()

    user_id = await sessions.resolve(token)
    return await authenticator.deserialize(user_id)


async def get_optional_user(
    request: Request,
    authenticator: Annotated[PasswordAuthenticator, Depends(get_authenticator)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Optional[User]:
    """Like ``get_current_user`` but yields None for anonymous or stale sessions."""
    try:
        return await get_current_user(request, authenticator, sessions, settings)
    except InstanceAdminError:
        return None


async def require_instance_access(
    request: Request,
    authenticator: Annotated[PasswordAuthenticator, Depends(get_authenticator)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Optional[User]:
    """
    Gate for instance routes.

    Any authenticated user may operate on any instance. When
    ``instances_require_auth`` is off the routes are open.
    """
    if not settings.instances_require_auth:
        return None
    return await get_current_user(request, authenticator, sessions, settings)
