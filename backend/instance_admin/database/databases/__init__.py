"""
Database definitions and collection constants.
"""
from instance_admin.database.databases import auth_db, instance_db

__all__ = ["auth_db", "instance_db"]
