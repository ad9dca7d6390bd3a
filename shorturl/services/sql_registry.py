"""
SQL Registry

Registry backend storing records in the `short_urls` table through
SQLModel/SQLAlchemy async sessions.

Design Decisions:
- The table's autoincrement primary key is the short URL id
- get_or_create runs select-then-insert under the registry lock; the unique
  constraint on original_url is the last line of defence, and an
  IntegrityError is resolved by re-reading the existing row
- Each operation opens its own short-lived session
"""

import asyncio
import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from shorturl.core.exceptions import DatabaseError
from shorturl.core.validators import MAX_SHORT_URL_ID
from shorturl.db.models import ShortURL
from shorturl.services.registry import Registry, UrlRecord

logger = logging.getLogger(__name__)


def _to_record(row: ShortURL) -> UrlRecord:
    return UrlRecord(id=row.id, original_url=row.original_url)


class SQLRegistry(Registry):
    """Registry backed by a SQL database."""

    def __init__(self, session_maker: async_sessionmaker, engine: Optional[AsyncEngine] = None):
        """
        Args:
            session_maker: Factory producing async sessions
            engine: Engine to dispose on close (optional)
        """
        self.session_maker = session_maker
        self.engine = engine
        self._lock = asyncio.Lock()

    async def _find_by_url(self, session: AsyncSession, original_url: str) -> Optional[ShortURL]:
        statement = select(ShortURL).where(ShortURL.original_url == original_url).limit(1)
        result = await session.execute(statement)
        return result.scalars().first()

    async def get_or_create(self, original_url: str) -> UrlRecord:
        async with self._lock:
            async with self.session_maker() as session:
                try:
                    existing = await self._find_by_url(session, original_url)
                    if existing:
                        return _to_record(existing)

                    row = ShortURL(original_url=original_url)
                    session.add(row)
                    await session.flush()
                    await session.commit()
                    await session.refresh(row)

                except IntegrityError as e:
                    await session.rollback()
                    existing = await self._find_by_url(session, original_url)
                    if existing:
                        return _to_record(existing)
                    raise DatabaseError(
                        "Failed to register URL: database constraint violation",
                        original_error=e
                    )
                except SQLAlchemyError as e:
                    await session.rollback()
                    logger.error(f"Failed to register {original_url}: {e}", exc_info=True)
                    raise DatabaseError(f"Failed to register URL: {e}", original_error=e)

        logger.info(f"Registered short_url={row.id} for {original_url}")
        return _to_record(row)

    async def lookup(self, short_url: int) -> Optional[UrlRecord]:
        # Out of the INTEGER column range, so no row can match
        if not 1 <= short_url <= MAX_SHORT_URL_ID:
            return None

        try:
            async with self.session_maker() as session:
                row = await session.get(ShortURL, short_url)
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up short_url={short_url}: {e}", exc_info=True)
            raise DatabaseError(f"Failed to look up short URL: {e}", original_error=e)
        return _to_record(row) if row else None

    async def size(self) -> int:
        async with self.session_maker() as session:
            result = await session.execute(select(func.count()).select_from(ShortURL))
            return result.scalar_one()

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
