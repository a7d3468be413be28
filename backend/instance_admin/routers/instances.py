"""
Instances router for registering MongoDB instances and managing their databases.
"""
from typing import Annotated

from fastapi import APIRouter, Depends

from instance_admin.database.registry import InstanceRegistry
from instance_admin.dependencies.auth import require_instance_access
from instance_admin.dependencies.instances import get_instance_registry, get_instance_service
from instance_admin.schemas.auth import MessageResponse
from instance_admin.schemas.instance import (
    AddEntryRequest,
    AddInstanceRequest,
    CreateDatabaseRequest,
    InstanceSummary,
)
from instance_admin.services.instance_service import InstanceService

router = APIRouter(tags=["Instances"], dependencies=[Depends(require_instance_access)])


# ==================== Registry ====================


@router.post(
    "/add-instance",
    response_model=MessageResponse,
    summary="Register an instance",
)
async def add_instance(
    body: AddInstanceRequest,
    registry: Annotated[InstanceRegistry, Depends(get_instance_registry)],
):
    """
    Register a MongoDB instance under `instanceName`.

    Re-using a name replaces the previous connection (or is rejected with 409
    when the service runs with the `reject` overwrite policy).
    """
    await registry.add(body.instanceName, body.connectionString)
    return MessageResponse(message=f"{body.instanceName} instance added successfully")


@router.get(
    "/instances",
    response_model=list[InstanceSummary],
    summary="List instances",
)
async def list_instances(
    service: Annotated[InstanceService, Depends(get_instance_service)],
):
    """
    List registered instances with their database count.

    `users` is the number of users of this service, the same for every instance.
    """
    return await service.list_instances()


@router.get(
    "/instances/{instanceName}",
    response_model=InstanceSummary,
    summary="Describe one instance",
)
async def get_instance(
    instanceName: str,
    service: Annotated[InstanceService, Depends(get_instance_service)],
):
    """Database count for a single registered instance."""
    return await service.list_databases(instanceName)


# ==================== Databases ====================


@router.post(
    "/create-database/{instanceName}",
    response_model=MessageResponse,
    summary="Create a database",
)
async def create_database(
    instanceName: str,
    body: CreateDatabaseRequest,
    service: Annotated[InstanceService, Depends(get_instance_service)],
):
    """Create `databaseName` on the instance."""
    await service.create_database(instanceName, body.databaseName)
    return MessageResponse(message=f"Database {body.databaseName} created successfully")


@router.post(
    "/add-entry/{instanceName}/{databaseName}",
    response_model=MessageResponse,
    summary="Insert an entry",
)
async def add_entry(
    instanceName: str,
    databaseName: str,
    body: AddEntryRequest,
    service: Annotated[InstanceService, Depends(get_instance_service)],
):
    """Insert `entry` into the database's entries collection."""
    await service.insert_entry(instanceName, databaseName, body.entry)
    return MessageResponse(message=f"Entry added to {databaseName} successfully")


@router.delete(
    "/remove-database/{instanceName}/{databaseName}",
    response_model=MessageResponse,
    summary="Drop a database",
)
async def remove_database(
    instanceName: str,
    databaseName: str,
    service: Annotated[InstanceService, Depends(get_instance_service)],
):
    """
    Drop the database. This cannot be undone and asks for no confirmation.
    """
    await service.drop_database(instanceName, databaseName)
    return MessageResponse(message=f"Database {databaseName} removed successfully")
