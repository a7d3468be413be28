"""
In-memory registry of managed MongoDB instances.

The registry is owned by the application (``app.state.instance_registry``)
and handed to services through dependencies. Entries live for the process
lifetime; restarting loses every registration.
"""
import asyncio
import logging
from typing import Literal, Optional

from pymongo.errors import PyMongoError

from instance_admin.core.errors import BackendError, InstanceConflict, UnknownInstance
from instance_admin.core.security import mask_connection_string
from instance_admin.database.connections import ClientFactory, create_instance_client
from instance_admin.models.instance import InstanceHandle

logger = logging.getLogger(__name__)

OverwritePolicy = Literal["replace", "reject"]


class InstanceRegistry:
    """Lock-guarded map from instance name to its client handle."""

    def __init__(
        self,
        client_factory: Optional[ClientFactory] = None,
        overwrite_policy: OverwritePolicy = "replace",
    ):
        self._client_factory = client_factory or create_instance_client
        self._overwrite_policy = overwrite_policy
        self._instances: dict[str, InstanceHandle] = {}
        self._lock = asyncio.Lock()

    async def add(self, name: str, connection_string: str) -> InstanceHandle:
        """
        Open a client for ``connection_string`` and register it under ``name``.

        With the ``replace`` policy an existing registration is swapped out
        and its client closed. With ``reject`` the new client is closed and
        ``InstanceConflict`` is raised.

        Raises:
            BackendError: If the driver refuses the connection string
            InstanceConflict: If the name exists and the policy is ``reject``
        """
        try:
            # SRV URIs resolve DNS in the client constructor
            client = await asyncio.to_thread(self._client_factory, connection_string)
        except (PyMongoError, ValueError) as e:
            raise BackendError(f"Could not open instance {name}: {e}") from e

        handle = InstanceHandle(name=name, connection_string=connection_string, client=client)

        async with self._lock:
            previous = self._instances.get(name)
            if previous is not None and self._overwrite_policy == "reject":
                handle.close()
                raise InstanceConflict(name)
            self._instances[name] = handle

        if previous is not None:
            logger.info("Replacing instance %s, closing previous client", name)
            previous.close()

        logger.info(
            "Registered instance %s at %s", name, mask_connection_string(connection_string)
        )
        return handle

    def get(self, name: str) -> InstanceHandle:
        """
        Look up a registered instance.

        Raises:
            UnknownInstance: If nothing is registered under ``name``
        """
        try:
            return self._instances[name]
        except KeyError:
            raise UnknownInstance(name) from None

    def list(self) -> list[tuple[str, InstanceHandle]]:
        """Snapshot of registrations in insertion order."""
        return list(self._instances.items())

    async def close_all(self) -> None:
        """Close every client and empty the registry."""
        async with self._lock:
            handles = list(self._instances.values())
            self._instances.clear()
        for handle in handles:
            handle.close()
        if handles:
            logger.info("Closed %d instance client(s)", len(handles))

    def __contains__(self, name: object) -> bool:
        return name in self._instances

    def __len__(self) -> int:
        return len(self._instances)
