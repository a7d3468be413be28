"""
Database module - MongoDB connections, database definitions and the instance registry.
"""
from instance_admin.database.connections import (
    get_mongo_client,
    get_auth_database,
    close_connections,
    create_instance_client,
)
from instance_admin.database.databases import auth_db, instance_db
from instance_admin.database.registry import InstanceRegistry

__all__ = [
    "get_mongo_client",
    "get_auth_database",
    "close_connections",
    "create_instance_client",
    "auth_db",
    "instance_db",
    "InstanceRegistry",
]
