"""
Database connection management for MongoDB.

Holds the credential store client and builds clients for managed instances.
"""
import logging
from typing import Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from instance_admin.config import get_settings
from instance_admin.core.security import mask_connection_string
from instance_admin.database.databases import auth_db

logger = logging.getLogger(__name__)

# Global connection instance for the credential store
_mongo_client: Optional[AsyncIOMotorClient] = None

ClientFactory = Callable[[str], AsyncIOMotorClient]


def _timeout_options() -> dict:
    timeout_ms = get_settings().backend_timeout_ms
    return {
        "serverSelectionTimeoutMS": timeout_ms,
        "connectTimeoutMS": timeout_ms,
        "socketTimeoutMS": timeout_ms,
    }


async def get_mongo_client() -> AsyncIOMotorClient:
    """Get or create the credential store MongoDB client."""
    global _mongo_client
    if _mongo_client is None:
        settings = get_settings()
        logger.info("Connecting credential store at %s", mask_connection_string(settings.mongo_uri))
        _mongo_client = AsyncIOMotorClient(settings.mongo_uri, **_timeout_options())
    return _mongo_client


async def get_auth_database() -> AsyncIOMotorDatabase:
    """Get the credential database (users and sessions)."""
    client = await get_mongo_client()
    return client[auth_db.db_name()]


async def close_connections():
    """Close the credential store connection."""
    global _mongo_client

    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None


def create_instance_client(connection_string: str) -> AsyncIOMotorClient:
    """
    Build a client for a managed instance.

    Motor connects lazily, so this only parses and validates the URI;
    pymongo raises ``InvalidURI``/``ConfigurationError`` for bad input.
    """
    return AsyncIOMotorClient(connection_string, **_timeout_options())
