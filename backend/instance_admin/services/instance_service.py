"""
Instance operations service: administrative actions against registered instances.
"""
import asyncio
import logging
from typing import Any, Awaitable, TypeVar

from bson.errors import BSONError
from pymongo.errors import PyMongoError

from instance_admin.core.errors import BackendError, DatabaseNotFound
from instance_admin.database.databases import instance_db
from instance_admin.database.registry import InstanceRegistry
from instance_admin.schemas.instance import InstanceSummary
from instance_admin.services.auth_service import PasswordAuthenticator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InstanceService:
    """
    Database administration on registered MongoDB instances.

    Every driver call is bounded by ``timeout_seconds``; driver failures and
    timeouts surface as ``BackendError``. Unregistered names surface as
    ``UnknownInstance`` from the registry.
    """

    def __init__(
        self,
        registry: InstanceRegistry,
        authenticator: PasswordAuthenticator,
        timeout_seconds: float = 5.0,
    ):
        self.registry = registry
        self.authenticator = authenticator
        self.timeout_seconds = timeout_seconds

    async def _call(self, action: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("%s timed out after %ss", action, self.timeout_seconds)
            raise BackendError(f"{action} timed out") from None
        except (PyMongoError, BSONError, OverflowError) as e:
            # Encoding errors surface here too, e.g. ints wider than 8 bytes
            logger.warning("%s failed: %s", action, e)
            raise BackendError(f"{action} failed: {e}") from e

    # ==================== Listing ====================

    async def list_databases(self, instance_name: str) -> InstanceSummary:
        """
        Summarize one instance.

        ``users`` is the global number of users in this service's credential
        store, not a count taken from the instance.
        """
        handle = self.registry.get(instance_name)
        names = await self._call(
            f"Listing databases on {instance_name}",
            handle.client.list_database_names(),
        )
        users = await self._call("Counting users", self.authenticator.count_users())
        return InstanceSummary(instanceName=instance_name, databases=len(names), users=users)

    async def list_instances(self) -> list[InstanceSummary]:
        """Summarize every registered instance."""
        return [await self.list_databases(name) for name, _ in self.registry.list()]

    # ==================== Database CRUD ====================

    async def create_database(self, instance_name: str, database_name: str) -> None:
        """
        Create ``database_name`` by creating its entries collection.

        Raises:
            UnknownInstance: If the instance is not registered
            BackendError: If creation fails, e.g. the database already exists
        """
        handle = self.registry.get(instance_name)
        db = handle.client[database_name]
        await self._call(
            f"Creating database {database_name} on {instance_name}",
            db.create_collection(instance_db.Collections.ENTRIES),
        )
        logger.info("Created database %s on %s", database_name, instance_name)

    async def insert_entry(
        self, instance_name: str, database_name: str, entry: dict[str, Any]
    ) -> str:
        """
        Insert ``entry`` into the database's entries collection.

        MongoDB would silently create a missing database on insert, so the
        entries collection has to exist first.

        Returns:
            The inserted document id

        Raises:
            UnknownInstance: If the instance is not registered
            DatabaseNotFound: If the database was never created or was dropped
            BackendError: If the insert fails
        """
        handle = self.registry.get(instance_name)
        db = handle.client[database_name]
        collections = await self._call(
            f"Listing collections of {database_name} on {instance_name}",
            db.list_collection_names(),
        )
        if instance_db.Collections.ENTRIES not in collections:
            raise DatabaseNotFound(database_name)

        # insert_one mutates its argument with the generated _id
        result = await self._call(
            f"Inserting entry into {database_name} on {instance_name}",
            db[instance_db.Collections.ENTRIES].insert_one(dict(entry)),
        )
        return str(result.inserted_id)

    async def drop_database(self, instance_name: str, database_name: str) -> None:
        """
        Drop ``database_name``. Irreversible.

        Raises:
            UnknownInstance: If the instance is not registered
            BackendError: If the drop fails
        """
        handle = self.registry.get(instance_name)
        await self._call(
            f"Dropping database {database_name} on {instance_name}",
            handle.client.drop_database(database_name),
        )
        logger.info("Dropped database %s on %s", database_name, instance_name)
