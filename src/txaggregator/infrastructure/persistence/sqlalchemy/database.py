"""Async engine and session maker construction."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

if TYPE_CHECKING:
    from txaggregator_config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async database engine for the configured database.

    The engine manages the connection pool and is shared by every
    repository of one pipeline.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.db_echo,
        pool_pre_ping=True,  # Verify connections before use
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


def display_url(database_url: str) -> str:
    """Strip credentials from a database URL for printing."""
    return database_url.split("@")[-1] if "@" in database_url else database_url
