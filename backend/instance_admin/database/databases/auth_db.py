"""
Auth database configuration.
Stores user identity and login sessions.
"""
from motor.motor_asyncio import AsyncIOMotorDatabase

from instance_admin.config import get_settings


class Collections:
    """Collection names in the auth database."""
    USERS = "users"
    SESSIONS = "sessions"

    # Index definitions for each collection
    INDEXES = {
        "users": [
            {"keys": [("email", 1)], "unique": True},
        ],
        "sessions": [
            {"keys": [("user_id", 1)]},
            # TTL index: MongoDB purges sessions once expires_at is reached
            {"keys": [("expires_at", 1)], "expireAfterSeconds": 0},
        ],
    }


def db_name() -> str:
    """Name of the credential database (``data`` unless configured)."""
    return get_settings().auth_db_name


async def create_auth_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create indexes for auth database collections."""
    for collection_name, indexes in Collections.INDEXES.items():
        collection = db[collection_name]
        for index_def in indexes:
            keys = index_def["keys"]
            kwargs = {k: v for k, v in index_def.items() if k != "keys"}
            await collection.create_index(keys, **kwargs)
