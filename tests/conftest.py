import asyncpg
import pytest
import pytest_asyncio
from testcontainers.postgres import PostgresContainer

from blog_entities.db_context import DatabaseManager
from blog_entities.schema import create_schema, truncate_all
from tests.sample_entities import TEST_POOL


@pytest.fixture(scope="session")
def postgres_container():
    """Start a PostgreSQL test container for the session."""
    with PostgresContainer("postgres:17") as postgres:
        yield postgres


@pytest_asyncio.fixture
async def test_db_pool(postgres_container):
    """Create a database pool connected to the test container for each test."""
    host = postgres_container.get_container_host_ip()
    port = postgres_container.get_exposed_port(5432)
    dsn = f"postgresql://{postgres_container.username}:{postgres_container.password}@{host}:{port}/{postgres_container.dbname}"

    # Create a new pool for each test to avoid event loop issues
    pool = await asyncpg.create_pool(dsn, min_size=1, max_size=5)

    async with pool.acquire() as conn:
        await create_schema(conn)
        await create_schema(conn, db_schema="app")

    await DatabaseManager.add_pool(TEST_POOL, pool)

    yield pool

    async with pool.acquire() as conn:
        await truncate_all(conn)
        await truncate_all(conn, db_schema="app")

    await DatabaseManager.close(TEST_POOL)
