"""
Database Adapters

SQLiteAdapter is the default: file-based, no server required, a good fit for
a single-instance service. ServerDatabaseAdapter covers server databases such
as PostgreSQL (postgresql+asyncpg://...).
"""

from typing import Any, Optional
from sqlalchemy.engine import make_url
from sqlalchemy.pool import NullPool, Pool

from shorturl.db.interface import DatabaseAdapter


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite database adapter implementation.

    SQLite-specific configuration:
    - NullPool: file-based database doesn't benefit from connection pooling
    - check_same_thread=False: required for async SQLite operations
    """

    def get_pool_class(self) -> type[NullPool]:
        return NullPool

    def get_connect_args(self) -> dict[str, Any]:
        return {
            "check_same_thread": False
        }

    def get_engine_kwargs(self) -> dict[str, Any]:
        return {
            "echo": False  # Set to True only for SQL debugging in development
        }


class ServerDatabaseAdapter(DatabaseAdapter):
    """Adapter for client/server databases using SQLAlchemy's default pool."""

    def get_pool_class(self) -> Optional[type[Pool]]:
        return None

    def get_connect_args(self) -> dict[str, Any]:
        return {}

    def get_engine_kwargs(self) -> dict[str, Any]:
        return {
            "echo": False,
            "pool_pre_ping": True,
        }


def get_database_adapter(database_url: str) -> DatabaseAdapter:
    """
    Factory function to get the database adapter for a connection string.

    Returns:
        SQLiteAdapter for sqlite URLs, ServerDatabaseAdapter otherwise
    """
    dialect_name = make_url(database_url).get_backend_name()
    if dialect_name == "sqlite":
        return SQLiteAdapter()
    return ServerDatabaseAdapter()
