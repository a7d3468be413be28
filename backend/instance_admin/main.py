"""
Instance Admin - FastAPI Application

Session-authenticated admin service for registering MongoDB instances and
managing databases on them.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from instance_admin.config import get_settings
from instance_admin.core.errors import InstanceAdminError
from instance_admin.core.logging_config import configure_logging
from instance_admin.database.connections import (
    ClientFactory,
    close_connections,
    get_auth_database,
)
from instance_admin.database.databases import auth_db
from instance_admin.database.registry import InstanceRegistry
from instance_admin.routers import auth, health, instances

logger = logging.getLogger("instance_admin")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Connect the credential store
    - Create indexes

    Shutdown:
    - Close every registered instance client
    - Close the credential store connection
    """
    logger.info("Starting up Instance Admin...")

    try:
        db = await get_auth_database()
        await auth_db.create_auth_indexes(db)
        logger.info("Credential store indexes created")
    except Exception as e:
        logger.warning("Database initialization warning: %s", e)

    yield

    logger.info("Shutting down Instance Admin...")
    await app.state.instance_registry.close_all()
    await close_connections()
    logger.info("Database connections closed")


async def instance_admin_error_handler(request: Request, exc: InstanceAdminError):
    """Render service errors as ``{"message": ...}`` with their mapped status."""
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error"},
    )


def create_app(client_factory: Optional[ClientFactory] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        client_factory: Builds a client from a connection string for each
            registered instance; defaults to a motor client with timeouts
    """
    settings = get_settings()

    app = FastAPI(
        title="Instance Admin API",
        description="""
## MongoDB Instance Administration API

### Features
- **Authentication**: email/password signup and login with session cookies
- **Instances**: register MongoDB instances by name (kept in memory)
- **Databases**: create databases, insert entries and drop databases

### Authentication
Log in with `POST /login` (form fields `email` and `password`). The session
cookie it sets is required by every instance route.
        """,
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.instance_registry = InstanceRegistry(
        client_factory=client_factory,
        overwrite_policy=settings.instance_overwrite_policy,
    )

    app.add_exception_handler(InstanceAdminError, instance_admin_error_handler)
    # PyMongoError outside an instance operation (credential store) is a plain 500
    app.add_exception_handler(PyMongoError, unexpected_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(instances.router)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Instance Admin API",
            "version": "0.1.0",
            "docs": "/docs",
            "health": "/health",
        }

    return app


configure_logging(get_settings().log_level)

app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured port."""
    settings = get_settings()
    logger.info("Server running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
