"""
Item Knowledge Repository - Durable storage for learned item knowledge

One row per normalized item name, holding category, storage advice and
shelf-life range. Rows are overwritten in place (last writer wins) and never
deleted automatically.

Cache Strategy:
1. First time seeing a name → deterministic rules → background AI lookup → stored here
2. Next time → KnowledgeStore (in memory, hydrated from here) → instant
3. User edits overwrite AI rows, and later AI rows overwrite user rows
"""
from contextlib import AbstractAsyncContextManager
from typing import Any, Callable, Dict, List, Optional, Protocol

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from grocery.common.schemas.grocery import Category, KnowledgeRecord, KnowledgeSource

logger = structlog.get_logger()

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class KnowledgeRepository(Protocol):
    """Persistence contract for knowledge records (get/upsert keyed by normalized name)"""

    async def fetch_all(self) -> List[KnowledgeRecord]:
        ...

    async def get(self, normalized_name: str) -> Optional[KnowledgeRecord]:
        ...

    async def upsert(self, record: KnowledgeRecord) -> None:
        ...


class InMemoryKnowledgeRepository:
    """Process-local repository, used when no database is configured"""

    def __init__(self) -> None:
        self._rows: Dict[str, KnowledgeRecord] = {}

    async def fetch_all(self) -> List[KnowledgeRecord]:
        return list(self._rows.values())

    async def get(self, normalized_name: str) -> Optional[KnowledgeRecord]:
        return self._rows.get(normalized_name)

    async def upsert(self, record: KnowledgeRecord) -> None:
        self._rows[record.normalized_name] = record


class SqlKnowledgeRepository:
    """
    Repository for the item_knowledge table.

    Opens one session per call so it can be used from background
    enrichment tasks as well as request handlers.
    """

    _COLUMNS = """
        normalized_name,
        category,
        storage_advice,
        shelf_life_days_min,
        shelf_life_days_max,
        source,
        updated_at
    """

    def __init__(self, session_factory: SessionFactory):
        """
        Args:
            session_factory: Zero-arg callable returning an async session context
                             (e.g., sessionmanager.session)
        """
        self._session = session_factory

    @staticmethod
    def _to_record(row: Dict[str, Any]) -> KnowledgeRecord:
        return KnowledgeRecord(
            normalized_name=row["normalized_name"],
            category=Category.from_label(row["category"], default=Category.OTHER),
            storage_advice=row["storage_advice"],
            shelf_life_days_min=row["shelf_life_days_min"],
            shelf_life_days_max=row["shelf_life_days_max"],
            source=KnowledgeSource(row["source"]),
            updated_at=row["updated_at"],
        )

    async def fetch_all(self) -> List[KnowledgeRecord]:
        query = text(f"SELECT {self._COLUMNS} FROM item_knowledge")

        async with self._session() as db:
            result = await db.execute(query)
            rows = result.fetchall()

        records = [self._to_record(dict(row._mapping)) for row in rows]
        logger.info("knowledge_loaded", record_count=len(records))
        return records

    async def get(self, normalized_name: str) -> Optional[KnowledgeRecord]:
        query = text(f"""
            SELECT {self._COLUMNS}
            FROM item_knowledge
            WHERE normalized_name = :normalized_name
        """)

        async with self._session() as db:
            result = await db.execute(query, {"normalized_name": normalized_name})
            row = result.fetchone()

        if row is None:
            logger.debug("knowledge_row_missing", normalized_name=normalized_name)
            return None

        return self._to_record(dict(row._mapping))

    async def upsert(self, record: KnowledgeRecord) -> None:
        """Insert or fully overwrite the row for record.normalized_name"""
        query = text("""
            INSERT INTO item_knowledge (
                normalized_name,
                category,
                storage_advice,
                shelf_life_days_min,
                shelf_life_days_max,
                source,
                updated_at
            ) VALUES (
                :normalized_name,
                :category,
                :storage_advice,
                :shelf_life_days_min,
                :shelf_life_days_max,
                :source,
                :updated_at
            )
            ON CONFLICT (normalized_name) DO UPDATE SET
                category = EXCLUDED.category,
                storage_advice = EXCLUDED.storage_advice,
                shelf_life_days_min = EXCLUDED.shelf_life_days_min,
                shelf_life_days_max = EXCLUDED.shelf_life_days_max,
                source = EXCLUDED.source,
                updated_at = EXCLUDED.updated_at
        """)

        async with self._session() as db:
            await db.execute(query, {
                "normalized_name": record.normalized_name,
                "category": record.category.value,
                "storage_advice": record.storage_advice,
                "shelf_life_days_min": record.shelf_life_days_min,
                "shelf_life_days_max": record.shelf_life_days_max,
                "source": record.source.value,
                "updated_at": record.updated_at,
            })

        logger.info("knowledge_row_upserted",
                   normalized_name=record.normalized_name,
                   category=record.category.value,
                   source=record.source.value)
