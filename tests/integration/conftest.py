"""Integration test fixtures for the SQL document store.

These fixtures require external resources (PostgreSQL database).
"""

import asyncio
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy import delete, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from src.chancery.backend import LocalAuthProvider, SQLDocumentStore
from src.chancery.core import db
from src.chancery.core.config import get_settings
from src.chancery.core.db import run_migrations_sync
from src.chancery.models.document import StoredDocument


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create test database engine and ensure migrations are applied."""
    await db.dispose_engine()

    settings = get_settings()
    test_engine = create_async_engine(settings.database_url, poolclass=NullPool)
    try:
        async with test_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except OperationalError:
        await test_engine.dispose()
        pytest.skip("PostgreSQL not reachable at DATABASE_URL")

    await asyncio.to_thread(run_migrations_sync)

    yield test_engine

    # Each test starts from an empty documents table
    async with test_engine.begin() as conn:
        await conn.execute(delete(StoredDocument))
    await test_engine.dispose()


@pytest.fixture
def sql_store(engine: AsyncEngine) -> SQLDocumentStore:
    return SQLDocumentStore(engine)


@pytest.fixture
def sql_auth_provider(sql_store: SQLDocumentStore) -> LocalAuthProvider:
    return LocalAuthProvider(sql_store)
