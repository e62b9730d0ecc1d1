"""Fixtures for repository tests against a throwaway SQLite database."""

import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from txaggregator.infrastructure.persistence.sqlalchemy import (
    ImportBatchRepositorySQLAlchemy,
    TransactionRepositorySQLAlchemy,
    create_session_maker,
    create_tables,
)


@pytest_asyncio.fixture
async def async_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(async_engine):
    return create_session_maker(async_engine)


@pytest_asyncio.fixture
async def batch_repository(session_maker):
    return ImportBatchRepositorySQLAlchemy(session_maker)


@pytest_asyncio.fixture
async def transaction_repository(session_maker):
    return TransactionRepositorySQLAlchemy(session_maker)
