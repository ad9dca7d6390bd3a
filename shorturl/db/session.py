"""
Database Session Management

This module builds async engines and session factories for the SQL registry.
Uses the database abstraction layer so the registry code stays
database-agnostic.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from shorturl.db.sqlite_adapter import get_database_adapter


def create_engine(database_url: str) -> AsyncEngine:
    """Create an async engine configured by the adapter matching the URL."""
    db_adapter = get_database_adapter(database_url)
    return db_adapter.create_engine(database_url)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create an async session factory bound to `engine`.

    Sessions keep loaded objects usable after commit (expire_on_commit=False).
    """
    return async_sessionmaker(
        engine,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,  # Prevents SQLAlchemy from expiring objects after commit
        autoflush=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables registered on SQLModel.metadata if missing."""
    # Import models so they're registered with SQLModel.metadata
    from shorturl.db import models  # noqa: F401

    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
