"""Shared test fixtures and utilities for all tests."""
from contextlib import asynccontextmanager
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from dependency_injector import providers
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.app.containers import API_MODULES, Container
from src.client import EscrituraClient
from src.shared.auth import StaticTokenAuthProvider
from src.shared.blob_storage.s3_blober import S3BlobStorage
from src.shared.database.database import Database, DatabaseSettings
from src.shared.database.unit_of_work import UnitOfWork

TEST_TOKEN = "test-token"
TEST_USER_ID = "back-office-tester"
PRESIGNED_URL = "https://s3.test/escritura-documents/signed"


@pytest_asyncio.fixture(scope="function")
async def db(tmp_path):
    """
    SQLite database file with all tables created.
    Function-scoped for test isolation.
    """
    db_settings = DatabaseSettings(db_url=f"sqlite+aiosqlite:///{tmp_path / 'escritura.db'}")
    db = Database(db_settings)
    await db.create_tables()
    yield db
    await db.drop_tables()
    await db.dispose()


@pytest.fixture
def s3_storage():
    """Blob store double; its async methods are AsyncMocks."""
    storage = MagicMock(spec=S3BlobStorage)
    storage.upload_bytes.side_effect = lambda key, *args, **kwargs: key
    storage.generate_presigned_url.return_value = PRESIGNED_URL
    return storage


@pytest.fixture(scope="function")
def test_container(db, s3_storage):
    """
    Container with the database, blob store and auth provider overridden.
    Function-scoped to ensure each test gets a fresh container.
    """
    container = Container()
    container.database.override(providers.Object(db))
    container.s3_storage.override(providers.Object(s3_storage))
    container.auth_provider.override(
        providers.Object(StaticTokenAuthProvider({TEST_TOKEN: TEST_USER_ID}))
    )

    container.wire(modules=API_MODULES)
    yield container
    container.unwire()
    container.reset_override()


@pytest_asyncio.fixture(scope="function")
async def test_app(test_container):
    """Application whose lifespan skips table and bucket creation."""
    from src.app.api.v1 import (
        clients,
        contract_templates,
        contracts,
        documents,
        notary_offices,
        properties,
        property_documents,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield

    config = test_container.config()
    app = FastAPI(title=config.app_name, version=config.app_version, lifespan=lifespan)
    app.state.container = test_container
    for module in (clients, documents, notary_offices, properties, property_documents, contract_templates, contracts):
        app.include_router(module.router, prefix="/api/v1")
    yield app


@pytest_asyncio.fixture
async def escritura_client(test_app):
    """Authenticated SDK client talking to the app in-process."""
    transport = ASGITransport(app=test_app)
    http_client = AsyncClient(transport=transport, base_url="http://test")
    client = EscrituraClient(base_url="http://test", client=http_client, token=TEST_TOKEN)

    async with client:
        yield client
    await http_client.aclose()


@pytest_asyncio.fixture
async def http_client(test_app):
    """Raw httpx client without credentials."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# =========================================================================
# Common repository fixtures (available to all test directories)
# =========================================================================

@pytest.fixture
def client_repository(test_container):
    return test_container.client_repository()


@pytest.fixture
def notary_office_repository(test_container):
    return test_container.notary_office_repository()


@pytest.fixture
def property_repository(test_container):
    return test_container.property_repository()


@pytest.fixture
def client_document_repository(test_container):
    return test_container.client_document_repository()


@pytest.fixture
def property_document_repository(test_container):
    return test_container.property_document_repository()


@pytest.fixture
def contract_template_repository(test_container):
    return test_container.contract_template_repository()


@pytest.fixture
def contract_repository(test_container):
    return test_container.contract_repository()


@pytest.fixture
def unit_of_work(db, test_container) -> UnitOfWork:
    """UnitOfWork using the container's entity_mapper singleton."""
    return UnitOfWork(db, test_container.entity_mapper())


# =========================================================================
# Common service fixtures (available to all test directories)
# =========================================================================

@pytest.fixture
def client_service(test_container):
    return test_container.client_service()


@pytest.fixture
def notary_office_service(test_container):
    return test_container.notary_office_service()


@pytest.fixture
def property_service(test_container):
    return test_container.property_service()


@pytest.fixture
def client_document_service(test_container):
    return test_container.client_document_service()


@pytest.fixture
def property_document_service(test_container):
    return test_container.property_document_service()


@pytest.fixture
def contract_template_service(test_container):
    return test_container.contract_template_service()


@pytest.fixture
def contract_service(test_container):
    return test_container.contract_service()
