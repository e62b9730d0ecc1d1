"""Integration fixtures: PostgreSQL via testcontainers."""

from tests.shared.fixtures.database import (  # noqa: F401
    pg_engine,
    pg_session_maker,
    postgres_async_url,
    postgres_container,
)
