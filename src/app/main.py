import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.app.api.v1 import (
    clients,
    contract_templates,
    contracts,
    documents,
    notary_offices,
    properties,
    property_documents,
)
from src.app.containers import API_MODULES, Container
from src.app.logging import configure_logging

# Configure logging at module load time
configure_logging()

logger = logging.getLogger(__name__)

ROUTERS = [
    clients.router,
    documents.router,
    notary_offices.router,
    properties.router,
    property_documents.router,
    contract_templates.router,
    contracts.router,
]


@asynccontextmanager
async def default_lifespan(app: FastAPI):
    """Create the database tables and the S3 bucket on startup."""
    container: Container = app.state.container
    logger.info("Starting Escritura API...")

    db = container.database()
    await db.create_tables()
    logger.info("Database initialized successfully")

    s3_storage = container.s3_storage()
    await s3_storage.ensure_bucket_exists()
    logger.info("S3 bucket '%s' initialized successfully", s3_storage.settings.bucket_name)

    yield

    logger.info("Shutting down Escritura API...")
    await db.dispose()


def create_app(container: Container, lifespan=default_lifespan) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        container: DI container the routers resolve their services from.
        lifespan: Lifespan context manager; tests pass one that skips startup work.

    Returns:
        Configured FastAPI application.
    """
    container.wire(modules=API_MODULES)

    config = container.config()

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        lifespan=lifespan,
    )

    # Attach container to app state for access in lifespan and routes
    app.state.container = container

    for router in ROUTERS:
        app.include_router(router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {"message": "Welcome to Escritura API"}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


container = Container()
app = create_app(container=container)
