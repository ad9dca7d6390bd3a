"""
Database Models for the SQL Registry

This module defines the SQLModel table backing SQLRegistry:
- ShortURL: Stores the mapping between numeric short URLs and original URLs

Design Decisions:
- The autoincrement primary key is the short URL identifier itself
- Unique constraint on original_url enforces exact-string deduplication at
  the database level as well as in the registry lock
"""

from sqlmodel import SQLModel, Field, Column
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import DateTime, Text


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ShortURL(SQLModel, table=True):
    """
    Main table storing URL shortening mappings.

    Fields:
    - id: Auto-incrementing primary key, returned to clients as short_url
    - original_url: The URL exactly as it was submitted
    - created_at: Timestamp when the URL was registered
    """
    __tablename__ = "short_urls"

    id: Optional[int] = Field(default=None, primary_key=True)
    original_url: str = Field(
        sa_column=Column(Text, nullable=False, unique=True, index=True)
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
