"""
Authentication router: signup, login, logout and the admin landing page.
"""
import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from pydantic import ValidationError

from instance_admin.config import Settings, get_settings
from instance_admin.core.errors import InvalidCredentials
from instance_admin.dependencies.auth import (
    get_authenticator,
    get_optional_user,
    get_session_service,
)
from instance_admin.models.user import User
from instance_admin.schemas.auth import LoginRequest, MessageResponse, SignupRequest
from instance_admin.services.auth_service import PasswordAuthenticator
from instance_admin.services.session_service import SessionService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])

LOGIN_PROMPT = "Please login"
ADMIN_WELCOME = "Welcome to Admin Panel"


async def read_login_credentials(request: Request) -> Optional[LoginRequest]:
    """
    Parse email/password from a form post or a JSON body; None if unusable.

    The email is normalized the same way as at signup.

    Raises:
        InvalidCredentials: If the email is present but not a valid address
    """
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            data = await request.json()
        else:
            data = await request.form()
    except ValueError:
        return None

    if not hasattr(data, "get"):
        return None

    try:
        return LoginRequest(email=data.get("email"), password=data.get("password"))
    except ValidationError as e:
        if any(err["loc"] == ("email",) and err["type"] != "missing" for err in e.errors()):
            raise InvalidCredentials("Incorrect email.") from None
        return None


def login_failure(settings: Settings, message: str) -> RedirectResponse:
    """Redirect back to the login page with a flashed message."""
    response = RedirectResponse("/login", status_code=302)
    response.set_cookie(
        settings.flash_cookie_name,
        message,
        max_age=60,
        httponly=True,
        samesite="lax",
    )
    return response


@router.post(
    "/signup",
    response_model=MessageResponse,
    summary="Register a new user",
)
async def signup(
    body: SignupRequest,
    authenticator: Annotated[PasswordAuthenticator, Depends(get_authenticator)],
):
    """
    Register a new user account.

    - **email**: Email address (must be unique)
    - **password**: Password, stored only as a bcrypt hash
    """
    await authenticator.register(body.email, body.password)
    return MessageResponse(message="User created successfully")


@router.post(
    "/login",
    summary="Login with email and password",
    response_class=RedirectResponse,
)
async def login(
    request: Request,
    authenticator: Annotated[PasswordAuthenticator, Depends(get_authenticator)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """
    Authenticate with `email` and `password` form fields (JSON also accepted).

    On success a session cookie is set and the client is redirected to
    `/admin`; on failure it is redirected back to `/login`.
    """
    try:
        credentials = await read_login_credentials(request)
        if credentials is None:
            return login_failure(settings, "Missing credentials.")
        user_id = await authenticator.authenticate(credentials.email, credentials.password)
    except InvalidCredentials as e:
        logger.info("Failed login attempt: %s", e.message)
        return login_failure(settings, e.message)

    token = await sessions.create(user_id)

    response = RedirectResponse("/admin", status_code=302)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    response.delete_cookie(settings.flash_cookie_name)
    return response


@router.get(
    "/login",
    response_class=PlainTextResponse,
    summary="Login prompt",
)
async def login_page(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Login prompt; shows and clears any flashed message."""
    message = request.cookies.get(settings.flash_cookie_name)
    if not message:
        return PlainTextResponse(LOGIN_PROMPT)

    response = PlainTextResponse(f"{LOGIN_PROMPT}\n{message}")
    response.delete_cookie(settings.flash_cookie_name)
    return response


@router.api_route(
    "/logout",
    methods=["GET", "POST"],
    response_class=RedirectResponse,
    summary="End the current session",
)
async def logout(
    request: Request,
    sessions: Annotated[SessionService, Depends(get_session_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Destroy the session and clear its cookie."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        await sessions.destroy(token)

    response = RedirectResponse("/login", status_code=302)
    response.delete_cookie(settings.session_cookie_name)
    return response


@router.get(
    "/admin",
    response_class=PlainTextResponse,
    summary="Admin panel",
)
async def admin(
    request: Request,
    user: Annotated[Optional[User], Depends(get_optional_user)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Admin landing page; anonymous or stale sessions go back to `/login`."""
    if user is None:
        response = RedirectResponse("/login", status_code=302)
        if settings.session_cookie_name in request.cookies:
            response.delete_cookie(settings.session_cookie_name)
        return response

    return PlainTextResponse(ADMIN_WELCOME)
