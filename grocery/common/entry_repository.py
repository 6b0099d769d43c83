"""
Grocery Entry Repository - Batch persistence for ingested entries

An ingestion event commits all of its entries in a single write. Entries
updated later (background enrichment, user edits) are written with an
update-only statement, so a removed entry is never re-inserted.
"""
from typing import Dict, List, Optional, Protocol
from uuid import UUID

import structlog
from sqlalchemy import text

from grocery.common.knowledge_repository import SessionFactory
from grocery.common.schemas.grocery import GroceryEntry

logger = structlog.get_logger()


class EntryRepository(Protocol):
    """Persistence contract for grocery entries"""

    async def save_entries(self, entries: List[GroceryEntry]) -> int:
        ...

    async def update_entry(self, entry: GroceryEntry) -> bool:
        ...

    async def delete_entry(self, entry_id: UUID) -> bool:
        ...


class InMemoryEntryRepository:
    """Process-local repository, used when no database is configured"""

    def __init__(self) -> None:
        self._rows: Dict[UUID, GroceryEntry] = {}
        self.batches: List[List[UUID]] = []

    async def save_entries(self, entries: List[GroceryEntry]) -> int:
        self._rows.update({entry.id: entry for entry in entries})
        self.batches.append([entry.id for entry in entries])
        return len(entries)

    async def update_entry(self, entry: GroceryEntry) -> bool:
        if entry.id not in self._rows:
            return False
        self._rows[entry.id] = entry
        return True

    async def delete_entry(self, entry_id: UUID) -> bool:
        return self._rows.pop(entry_id, None) is not None

    def get(self, entry_id: UUID) -> Optional[GroceryEntry]:
        return self._rows.get(entry_id)


class SqlEntryRepository:
    """Repository for the grocery_entries table"""

    def __init__(self, session_factory: SessionFactory):
        self._session = session_factory

    async def save_entries(self, entries: List[GroceryEntry]) -> int:
        """
        Insert or update a batch of entries in one transaction.

        Args:
            entries: Entries to write

        Returns:
            Number of entries written
        """
        if not entries:
            return 0

        query = text("""
            INSERT INTO grocery_entries (
                id,
                name,
                normalized_name,
                quantity,
                category,
                storage_advice,
                shelf_life_days_min,
                shelf_life_days_max,
                shelf_life_source,
                created_at,
                updated_at
            ) VALUES (
                :id,
                :name,
                :normalized_name,
                :quantity,
                :category,
                :storage_advice,
                :shelf_life_days_min,
                :shelf_life_days_max,
                :shelf_life_source,
                :created_at,
                :updated_at
            )
            ON CONFLICT (id) DO UPDATE SET
                category = EXCLUDED.category,
                storage_advice = EXCLUDED.storage_advice,
                shelf_life_days_min = EXCLUDED.shelf_life_days_min,
                shelf_life_days_max = EXCLUDED.shelf_life_days_max,
                shelf_life_source = EXCLUDED.shelf_life_source,
                updated_at = EXCLUDED.updated_at
        """)

        params = [
            {
                "id": entry.id,
                "name": entry.name,
                "normalized_name": entry.normalized_name,
                "quantity": entry.quantity,
                "category": entry.category.value,
                "storage_advice": entry.storage_advice,
                "shelf_life_days_min": entry.shelf_life_days_min,
                "shelf_life_days_max": entry.shelf_life_days_max,
                "shelf_life_source": entry.shelf_life_source,
                "created_at": entry.created_at,
                "updated_at": entry.updated_at,
            }
            for entry in entries
        ]

        async with self._session() as db:
            await db.execute(query, params)

        logger.info("entries_saved", entry_count=len(entries))
        return len(entries)

    async def update_entry(self, entry: GroceryEntry) -> bool:
        """
        Write knowledge fields of an existing entry; never inserts.

        Returns:
            False if the row is gone (entry removed in the meantime)
        """
        query = text("""
            UPDATE grocery_entries SET
                category = :category,
                storage_advice = :storage_advice,
                shelf_life_days_min = :shelf_life_days_min,
                shelf_life_days_max = :shelf_life_days_max,
                shelf_life_source = :shelf_life_source,
                updated_at = :updated_at
            WHERE id = :id
        """)

        async with self._session() as db:
            result = await db.execute(query, {
                "id": entry.id,
                "category": entry.category.value,
                "storage_advice": entry.storage_advice,
                "shelf_life_days_min": entry.shelf_life_days_min,
                "shelf_life_days_max": entry.shelf_life_days_max,
                "shelf_life_source": entry.shelf_life_source,
                "updated_at": entry.updated_at,
            })

        updated = result.rowcount > 0
        logger.debug("entry_updated", entry_id=str(entry.id), updated=updated)
        return updated

    async def delete_entry(self, entry_id: UUID) -> bool:
        query = text("DELETE FROM grocery_entries WHERE id = :id")

        async with self._session() as db:
            result = await db.execute(query, {"id": entry_id})

        deleted = result.rowcount > 0
        logger.info("entry_deleted", entry_id=str(entry_id), deleted=deleted)
        return deleted
