"""
Instance and database management request/response schemas.

Field names follow the camelCase wire format of the HTTP API.
"""
from typing import Any

from pydantic import BaseModel, Field


class AddInstanceRequest(BaseModel):
    """Register a MongoDB instance under a name."""
    instanceName: str = Field(..., min_length=1, description="Unique instance name")
    connectionString: str = Field(..., min_length=1, description="MongoDB connection URI")


class CreateDatabaseRequest(BaseModel):
    """Create a database on a registered instance."""
    databaseName: str = Field(..., min_length=1, description="Database name")


class AddEntryRequest(BaseModel):
    """Insert one entry into a database's entries collection."""
    entry: dict[str, Any] = Field(..., description="Arbitrary document to insert")


class InstanceSummary(BaseModel):
    """Summary line for one registered instance."""
    instanceName: str = Field(..., description="Instance name")
    databases: int = Field(..., description="Number of databases on the instance")
    users: int = Field(
        ...,
        description="Users in this service's credential store (global, not per instance)"
    )
