"""
Short URL Registry

The registry owns the id <-> URL mappings and the next-id counter:
- get_or_create: returns the record for an exact URL string, or appends one
- lookup: finds the record for an id

Invariants every backend keeps:
- original_url values are pairwise distinct (exact string comparison, so
  "http://example.com" and "http://example.com/" are different URLs)
- ids start at 1, increase by 1 per insertion and are never reused

Design Decisions:
- One registry instance per process, created at startup and injected into
  request handlers (see core/registry_manager.py)
- get_or_create is a critical section guarded by an asyncio.Lock; callers
  must finish any network I/O (hostname checks) before entering it
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UrlRecord:
    """A registered URL and its numeric short URL identifier."""
    id: int
    original_url: str


class Registry(ABC):
    """
    Abstract base class for registry backends.

    To add a new backend:
    1. Create a new class inheriting from Registry
    2. Implement all abstract methods
    3. Select it in core/registry_manager.py
    """

    @abstractmethod
    async def get_or_create(self, original_url: str) -> UrlRecord:
        """
        Return the record for `original_url`, creating it if needed.

        Args:
            original_url: A URL that already passed validation and the
                hostname check

        Returns:
            The existing record (same id as before) or a freshly numbered one
        """
        pass

    @abstractmethod
    async def lookup(self, short_url: int) -> Optional[UrlRecord]:
        """
        Find the record with id `short_url`.

        Returns:
            UrlRecord if found, None otherwise (never raises for unknown ids)
        """
        pass

    @abstractmethod
    async def size(self) -> int:
        """Number of registered URLs."""
        pass

    async def close(self) -> None:
        """Release backend resources. Nothing to do by default."""
        return None


class InMemoryRegistry(Registry):
    """
    Registry kept in process memory.

    Records are appended to a list in id order; two dicts index them by URL
    and by id so both operations are O(1). State is lost on restart.
    """

    def __init__(self):
        self._records: List[UrlRecord] = []
        self._by_url: Dict[str, UrlRecord] = {}
        self._by_id: Dict[int, UrlRecord] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    @property
    def next_id(self) -> int:
        return self._next_id

    async def get_or_create(self, original_url: str) -> UrlRecord:
        async with self._lock:
            existing = self._by_url.get(original_url)
            if existing is not None:
                return existing

            record = UrlRecord(id=self._next_id, original_url=original_url)
            self._next_id += 1
            self._records.append(record)
            self._by_url[original_url] = record
            self._by_id[record.id] = record

        logger.info(f"Registered short_url={record.id} for {original_url}")
        return record

    async def lookup(self, short_url: int) -> Optional[UrlRecord]:
        # No lock: the critical section above never awaits, so readers on the
        # event loop only ever see fully applied inserts.
        return self._by_id.get(short_url)

    async def size(self) -> int:
        return len(self._records)

    def records(self) -> List[UrlRecord]:
        """Snapshot of all records in id order."""
        return list(self._records)
