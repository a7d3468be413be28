"""
Authentication service: user registration and password verification.
"""
import logging
from datetime import datetime, timezone
from typing import Protocol

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from instance_admin.core.errors import DuplicateEmail, InvalidCredentials, UserNotFound
from instance_admin.core.security import hash_password, verify_password
from instance_admin.database.databases import auth_db
from instance_admin.models.user import User

logger = logging.getLogger(__name__)


class Authenticator(Protocol):
    """
    Capabilities the HTTP layer needs from an identity provider.

    ``PasswordAuthenticator`` is the only implementation; token based or
    federated variants would provide the same methods.
    """

    async def register(self, email: str, password: str) -> str: ...

    async def authenticate(self, email: str, password: str) -> str: ...

    def serialize(self, user: User) -> str: ...

    async def deserialize(self, user_id: str) -> User: ...


class PasswordAuthenticator:
    """Email/password authentication backed by the ``users`` collection."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with the credential database."""
        self.db = db
        self.users_collection = db[auth_db.Collections.USERS]

    async def register(self, email: str, password: str) -> str:
        """
        Register a new user.

        Args:
            email: Email address, must not be registered yet
            password: Plain password; only its bcrypt hash is stored

        Returns:
            The new user's id

        Raises:
            DuplicateEmail: If the email is already registered
        """
        existing = await self.users_collection.find_one({"email": email})
        if existing:
            raise DuplicateEmail()

        user_doc = {
            "email": email,
            "hashed_password": hash_password(password),
            "created_at": datetime.now(timezone.utc),
        }

        try:
            result = await self.users_collection.insert_one(user_doc)
        except DuplicateKeyError:
            # Lost a race against a concurrent signup; the unique index caught it
            raise DuplicateEmail() from None

        user_id = str(result.inserted_id)
        logger.info("Registered user %s", user_id)
        return user_id

    async def authenticate(self, email: str, password: str) -> str:
        """
        Verify an email/password pair.

        Returns:
            The user's id, for binding to a session

        Raises:
            InvalidCredentials: If no user has this email or the password is wrong
        """
        user_doc = await self.users_collection.find_one({"email": email})

        if not user_doc:
            raise InvalidCredentials("Incorrect email.")

        if not verify_password(password, user_doc["hashed_password"]):
            raise InvalidCredentials("Incorrect password.")

        return str(user_doc["_id"])

    def serialize(self, user: User) -> str:
        """Reduce a user to the id stored in the session."""
        return user.id

    async def deserialize(self, user_id: str) -> User:
        """
        Load the user a session points at.

        Raises:
            UserNotFound: If the id is malformed or no longer resolves
        """
        try:
            object_id = ObjectId(user_id)
        except (InvalidId, TypeError):
            raise UserNotFound() from None

        user_doc = await self.users_collection.find_one({"_id": object_id})
        if not user_doc:
            raise UserNotFound()

        user_doc["_id"] = str(user_doc["_id"])
        return User(**user_doc)

    async def count_users(self) -> int:
        """Number of registered users."""
        return await self.users_collection.count_documents({})
