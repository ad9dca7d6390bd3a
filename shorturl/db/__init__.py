"""
Database module with abstraction layer.

This module provides:
- DatabaseAdapter interface: Abstract base class for database implementations
- SQLiteAdapter: SQLite-specific implementation (default)
- Engine/session helpers used by the SQL registry backend
"""

from shorturl.db.interface import DatabaseAdapter
from shorturl.db.session import create_engine, create_session_maker, create_tables

__all__ = [
    "DatabaseAdapter",
    "create_engine",
    "create_session_maker",
    "create_tables",
]
