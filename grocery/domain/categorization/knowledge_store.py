"""
Knowledge Store - In-memory knowledge cache with write-through persistence

Holds one KnowledgeRecord per normalized item name. Reads are synchronous
dictionary lookups so the classifier can consult the cache without awaiting.
Writes are serialized per key and go through to the repository before the
in-memory map changes.

Tracks which names have an enrichment in flight so callers can show
"looking up..." state and tests can observe scheduling.
"""
import asyncio
from collections import Counter
from typing import Dict, Iterable, List, Optional

import structlog

from grocery.common.knowledge_repository import InMemoryKnowledgeRepository, KnowledgeRepository
from grocery.common.schemas.grocery import Category, KnowledgeRecord, KnowledgeSource, utcnow

logger = structlog.get_logger()


class KnowledgeStore:
    """
    Shared knowledge cache.

    Usage:
        store = KnowledgeStore(repository=SqlKnowledgeRepository(sessionmanager.session))
        await store.load()
        record = store.get("milk")
    """

    def __init__(self, repository: Optional[KnowledgeRepository] = None):
        self.repository = repository or InMemoryKnowledgeRepository()
        self._records: Dict[str, KnowledgeRecord] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._pending: Counter = Counter()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def get(self, name: str) -> Optional[KnowledgeRecord]:
        """Point lookup by normalized name (no lock, no I/O)"""
        return self._records.get(name)

    def _lock_for(self, name: str) -> asyncio.Lock:
        lock = self._locks.get(name)
        if lock is None:
            lock = self._locks[name] = asyncio.Lock()
        return lock

    async def upsert(
        self,
        name: str,
        category: Category,
        storage_advice: Optional[str],
        shelf_life_min: Optional[int],
        shelf_life_max: Optional[int],
        source: KnowledgeSource,
    ) -> KnowledgeRecord:
        """
        Insert or overwrite the record for a normalized name.

        All fields are replaced and updated_at is set to now, regardless of
        the previous record's source.

        Args:
            name: Normalized item name
            category: Category to store
            storage_advice: Storage advice text, if known
            shelf_life_min: Minimum shelf life in days, if known
            shelf_life_max: Maximum shelf life in days, if known
            source: Who produced this knowledge

        Returns:
            The stored record
        """
        record = KnowledgeRecord(
            normalized_name=name,
            category=category,
            storage_advice=storage_advice,
            shelf_life_days_min=shelf_life_min,
            shelf_life_days_max=shelf_life_max,
            source=source,
            updated_at=utcnow(),
        )

        async with self._lock_for(name):
            previous = self._records.get(name)
            await self.repository.upsert(record)
            self._records[name] = record

        logger.info("knowledge_upserted",
                   normalized_name=name,
                   category=category.value,
                   source=source.value,
                   replaced_source=previous.source.value if previous else None)

        return record

    async def load(self) -> int:
        """
        Hydrate the in-memory map from the repository.

        Returns:
            Number of records loaded
        """
        records = await self.repository.fetch_all()
        for record in records:
            self._records[record.normalized_name] = record

        logger.info("knowledge_store_loaded", record_count=len(records))
        return len(records)

    async def seed_if_empty(self, records: Iterable[KnowledgeRecord]) -> int:
        """
        Insert seed records when the store holds nothing yet.

        Returns:
            Number of records seeded (0 if the store was already populated)
        """
        if self._records:
            return 0

        count = 0
        for record in records:
            await self.upsert(
                record.normalized_name,
                record.category,
                record.storage_advice,
                record.shelf_life_days_min,
                record.shelf_life_days_max,
                KnowledgeSource.SEED,
            )
            count += 1

        logger.info("knowledge_store_seeded", record_count=count)
        return count

    # Pending enrichment bookkeeping

    def mark_pending(self, name: str) -> None:
        self._pending[name] += 1

    def clear_pending(self, name: str) -> None:
        if self._pending[name] <= 1:
            del self._pending[name]
        else:
            self._pending[name] -= 1

    def is_pending(self, name: str) -> bool:
        return self._pending[name] > 0

    def pending_names(self) -> List[str]:
        return [name for name, count in self._pending.items() if count > 0]
