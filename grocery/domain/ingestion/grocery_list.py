"""
Grocery List - In-memory entry management layer

Owns the live GroceryEntry objects. The orchestrator adds entries in whole
batches; background enrichment never touches entries directly and instead
sends a KnowledgeUpdate that is applied here, if the entry still exists.
"""
from typing import Dict, Iterable, List, Optional
from uuid import UUID

import structlog

from grocery.common.schemas.grocery import (
    AisleGroup,
    GroceryEntry,
    KnowledgeUpdate,
    group_by_aisle,
)

logger = structlog.get_logger()


class GroceryList:
    """Ordered id → entry map"""

    def __init__(self) -> None:
        self._entries: Dict[UUID, GroceryEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def add_batch(self, entries: Iterable[GroceryEntry]) -> List[GroceryEntry]:
        """
        Add all entries of one ingestion event, or none of them.

        Raises:
            ValueError: An entry id is already present (or repeated in the batch)
        """
        batch = list(entries)
        seen = set()
        for entry in batch:
            if entry.id in self._entries or entry.id in seen:
                raise ValueError(f"Duplicate grocery entry id: {entry.id}")
            seen.add(entry.id)

        for entry in batch:
            self._entries[entry.id] = entry

        logger.debug("entries_added", entry_count=len(batch), list_size=len(self._entries))
        return batch

    def get(self, entry_id: UUID) -> Optional[GroceryEntry]:
        return self._entries.get(entry_id)

    def remove(self, entry_id: UUID) -> Optional[GroceryEntry]:
        return self._entries.pop(entry_id, None)

    def entries(self) -> List[GroceryEntry]:
        """Entries in insertion order"""
        return list(self._entries.values())

    def entries_named(self, normalized_name: str) -> List[GroceryEntry]:
        return [e for e in self._entries.values() if e.normalized_name == normalized_name]

    def grouped(self) -> List[AisleGroup]:
        return group_by_aisle(self.entries())

    def apply(self, update: KnowledgeUpdate) -> Optional[GroceryEntry]:
        """
        Apply enrichment results to one entry.

        Returns:
            The replaced entry, or None if it was removed in the meantime
        """
        current = self._entries.get(update.entry_id)
        if current is None:
            logger.debug("knowledge_update_dropped",
                        entry_id=str(update.entry_id),
                        normalized_name=update.normalized_name)
            return None

        updated = current.with_knowledge(update.record)
        self._entries[update.entry_id] = updated
        return updated
