"""
Instance registration model.
"""
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class InstanceHandle(BaseModel):
    """
    A registered MongoDB instance and the client that talks to it.

    Lives only in the in-memory registry; never persisted.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(..., description="Unique instance name")
    connection_string: str = Field(..., description="URI the client was built from")
    client: Any = Field(..., description="Motor client owned by this registration")
    added_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Registration timestamp"
    )

    def close(self) -> None:
        """Release the underlying client."""
        self.client.close()
