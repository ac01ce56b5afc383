"""Integration test fixtures backed by real PostgreSQL and LocalStack containers.

Most fixtures are inherited from tests/conftest.py. The ``db`` and
``s3_storage`` fixtures here override the SQLite database and the mocked
blob store. Every test in this directory is skipped when Docker is not
reachable.
"""
import asyncio
from pathlib import Path

import docker
import pytest
import pytest_asyncio
from docker.errors import DockerException
from sqlalchemy.exc import DBAPIError
from testcontainers.core.container import DockerContainer
from testcontainers.core.waiting_utils import wait_for_logs
from testcontainers.postgres import PostgresContainer

from src.shared.blob_storage.s3_blober import S3BlobStorage, S3BlobStorageSettings
from src.shared.database.database import Database, DatabaseSettings

INTEGRATION_DIR = Path(__file__).parent
TEST_BUCKET = "escritura-test-documents"


def pytest_collection_modifyitems(config, items):
    for item in items:
        if INTEGRATION_DIR in item.path.parents:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="session")
def docker_available():
    try:
        docker.from_env().ping()
    except DockerException as e:
        pytest.skip(f"Docker is not available: {e}")


@pytest.fixture(scope="module")
def postgres_container(docker_available):
    """Start a PostgreSQL container. Module-scoped for reuse."""
    with PostgresContainer("postgres:16-alpine") as postgres:
        yield postgres


@pytest.fixture(scope="module")
def async_db_url(postgres_container):
    connection_url = postgres_container.get_connection_url()
    return connection_url.replace("postgresql+psycopg2://", "postgresql+asyncpg://")


@pytest.fixture(scope="module")
def localstack_container(docker_available):
    """
    Start a LocalStack container for testing S3.
    Module-scoped for reuse across tests.
    """
    container = (
        DockerContainer("localstack/localstack:latest")
        .with_exposed_ports(4566)
        .with_env("SERVICES", "s3")
        .with_env("DEFAULT_REGION", "us-east-1")
        .with_env("AWS_ACCESS_KEY_ID", "test")
        .with_env("AWS_SECRET_ACCESS_KEY", "test")
    )

    with container:
        wait_for_logs(container, "Ready.", timeout=30)
        yield container


@pytest.fixture(scope="module")
def s3_endpoint_url(localstack_container):
    host = localstack_container.get_container_host_ip()
    port = localstack_container.get_exposed_port(4566)
    return f"http://{host}:{port}"


async def wait_till_db_ready(db: Database, max_attempts: int = 20):
    """
    Wait for database to accept connections.

    Raises:
        RuntimeError: If database is not ready after max_attempts
    """
    for _ in range(max_attempts):
        try:
            async with db._engine.begin():
                return
        except (OSError, DBAPIError):
            await asyncio.sleep(0.2)
    raise RuntimeError(f"Database not ready after {max_attempts} attempts")


@pytest_asyncio.fixture(scope="function")
async def db(async_db_url):
    """
    PostgreSQL database with all tables created.
    Function-scoped for test isolation.
    """
    db = Database(DatabaseSettings(db_url=async_db_url))
    await wait_till_db_ready(db)
    await db.create_tables()
    yield db
    await db.drop_tables()
    await db.dispose()


@pytest.fixture
def s3_storage(s3_endpoint_url):
    """Blob store talking to LocalStack."""
    return S3BlobStorage(S3BlobStorageSettings(
        bucket_name=TEST_BUCKET,
        endpoint_url=s3_endpoint_url,
        region_name="us-east-1",
        aws_access_key_id="test",
        aws_secret_access_key="test",
    ))
