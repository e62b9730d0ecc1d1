"""Fixtures running the full pipeline on a temporary SQLite database."""

import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from txaggregator.bootstrap import build_pipeline
from txaggregator_config import Settings


@pytest_asyncio.fixture
async def pipeline(tmp_path):
    db_url = f"sqlite+aiosqlite:///{tmp_path / 'e2e.db'}"
    settings = Settings(
        _env_file=None,
        db_url=db_url,
        import_pool_core_size=2,
        import_pool_max_size=4,
        import_queue_capacity=4,
        import_chunk_size=2,
    )
    engine = create_async_engine(db_url, poolclass=NullPool)

    pipeline = build_pipeline(settings, engine=engine)
    await pipeline.create_schema()
    yield pipeline
    await pipeline.close()
