"""
Server-side login sessions.

The cookie holds a signed token naming a session document; the document
binds the session to a user and can be revoked by deleting it.
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone

from jose import JWTError
from motor.motor_asyncio import AsyncIOMotorDatabase

from instance_admin.config import get_settings
from instance_admin.core.errors import InvalidSession
from instance_admin.core.security import create_session_token, decode_session_token
from instance_admin.database.databases import auth_db

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # MongoDB hands back naive datetimes that are already UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SessionService:
    """Create, resolve and destroy login sessions."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.sessions = db[auth_db.Collections.SESSIONS]
        self.settings = get_settings()

    async def create(self, user_id: str) -> str:
        """Open a session for ``user_id`` and return the cookie token."""
        session_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        lifetime = timedelta(minutes=self.settings.session_expire_minutes)

        await self.sessions.insert_one({
            "_id": session_id,
            "user_id": user_id,
            "created_at": now,
            "expires_at": now + lifetime,
        })
        logger.info("Opened session for user %s", user_id)
        return create_session_token(session_id, user_id, expires_delta=lifetime)

    async def resolve(self, token: str) -> str:
        """
        Return the user id bound to a session token.

        Raises:
            InvalidSession: If the token is bad or the session is gone or expired
        """
        try:
            payload = decode_session_token(token)
        except JWTError:
            raise InvalidSession() from None

        session_doc = await self.sessions.find_one({"_id": payload["sid"]})
        if not session_doc or session_doc.get("user_id") != payload["sub"]:
            raise InvalidSession()

        if _as_utc(session_doc["expires_at"]) <= datetime.now(timezone.utc):
            await self.sessions.delete_one({"_id": payload["sid"]})
            raise InvalidSession()

        return session_doc["user_id"]

    async def destroy(self, token: str) -> None:
        """Delete the session behind ``token``; unknown tokens are ignored."""
        try:
            payload = decode_session_token(token)
        except JWTError:
            return
        await self.sessions.delete_one({"_id": payload["sid"]})
        logger.info("Closed session for user %s", payload["sub"])
