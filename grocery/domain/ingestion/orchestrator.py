"""
Ingestion Orchestrator - Raw text → categorized grocery entries

Flow:
1. Parse: InputParser splits the text into ingredients
2. Classify: normalize + rule cascade (cache first), no network I/O
3. Create: one GroceryEntry per ingredient, yielded as soon as it exists
4. Commit: the whole event goes into the list and repository in one batch
5. Enrich: every cache miss gets one background AI lookup; when it lands,
   the knowledge store is updated and the entry is refreshed

Example:
- Input: "milk, dragon fruit"
- "milk" → cache hit (seeded) → Dairy, "Refrigerate at 40°F or below", 5-7 days
- "dragon fruit" → keyword "fruit" → Produce → background AI lookup
  → "Refrigerate when ripe", 5-7 days → entry updated, knowledge cached
- Next time "dragon fruit" is added: cache hit, no AI call
"""
import asyncio
from dataclasses import dataclass, field
from typing import AsyncIterator, List, Optional, Set
from uuid import UUID

import structlog

from grocery.common import metrics
from grocery.common.entry_repository import EntryRepository, InMemoryEntryRepository
from grocery.common.errors import CapabilityError
from grocery.common.schemas.grocery import (
    Category,
    GroceryEntry,
    KnowledgeRecord,
    KnowledgeSource,
    KnowledgeUpdate,
    ParsedIngredient,
)
from grocery.domain.categorization.classifier import Classification, ItemClassifier
from grocery.domain.categorization.knowledge_store import KnowledgeStore
from grocery.domain.categorization.normalizer import normalize
from grocery.domain.categorization.storage_enricher import Enricher
from grocery.domain.ingestion.grocery_list import GroceryList
from grocery.parsers.input_parser import InputParser

logger = structlog.get_logger()


@dataclass
class IngestionResult:
    """
    Result of one ingestion event.

    Attributes:
        entries: Created entries, in input order
        enrichment_tasks: Background enrichment tasks scheduled for cache misses
    """
    entries: List[GroceryEntry]
    enrichment_tasks: List["asyncio.Task[Optional[KnowledgeUpdate]]"] = field(default_factory=list)


class IngestionOrchestrator:
    """
    Coordinates parsing, classification, entry creation and enrichment.

    Usage:
        orchestrator = IngestionOrchestrator(store=store, grocery_list=grocery_list)
        async for entry in orchestrator.stream("milk, eggs"):
            print(entry.name, entry.category.value)
    """

    def __init__(
        self,
        store: KnowledgeStore,
        grocery_list: GroceryList,
        parser: Optional[InputParser] = None,
        enricher: Optional[Enricher] = None,
        entry_repository: Optional[EntryRepository] = None,
        classifier: Optional[ItemClassifier] = None,
    ):
        """
        Args:
            store: Shared knowledge store
            grocery_list: Entry management layer receiving committed entries
            parser: Input parser (deterministic-only parser by default)
            enricher: Storage enrichment capability (None disables enrichment)
            entry_repository: Entry persistence (in-memory by default)
            classifier: Classifier (defaults to the static tables over `store`)
        """
        self.store = store
        self.grocery_list = grocery_list
        self.parser = parser or InputParser()
        self.enricher = enricher
        self.entry_repository = entry_repository or InMemoryEntryRepository()
        self.classifier = classifier or ItemClassifier(knowledge=store)

        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    async def stream(self, text: str) -> AsyncIterator[GroceryEntry]:
        """
        Ingest raw text, yielding each entry as soon as it is created.

        The batch commit and enrichment scheduling happen once the caller
        has consumed every entry.

        Raises:
            EmptyInput: Text is blank
        """
        async for entry in self._run(text, scheduled=None):
            yield entry

    async def ingest(self, text: str) -> IngestionResult:
        """
        Ingest raw text and return all created entries.

        Raises:
            EmptyInput: Text is blank
        """
        scheduled: List[asyncio.Task] = []
        entries = [entry async for entry in self._run(text, scheduled=scheduled)]
        return IngestionResult(entries=entries, enrichment_tasks=scheduled)

    async def _run(self, text: str, scheduled: Optional[List[asyncio.Task]]) -> AsyncIterator[GroceryEntry]:
        ingredients = await self.parser.parse(text)
        metrics.INGESTION_EVENTS.inc()

        created: List[GroceryEntry] = []
        misses: List[GroceryEntry] = []

        for ingredient in ingredients:
            normalized = normalize(ingredient.name)
            classification = self.classifier.classify_with_tier(normalized)
            entry = self._build_entry(ingredient, normalized, classification)

            metrics.ENTRIES_CREATED.labels(tier=classification.tier.value).inc()
            if classification.is_cache_hit:
                logger.debug("cache_hit", normalized_name=normalized, category=entry.category.value)
            else:
                misses.append(entry)

            created.append(entry)
            yield entry

        await self.entry_repository.save_entries(created)
        self.grocery_list.add_batch(created)

        if self.enricher is not None:
            for entry in misses:
                task = self._schedule_enrichment(entry)
                if scheduled is not None:
                    scheduled.append(task)

        logger.info("ingestion_complete",
                   entry_count=len(created),
                   cache_hits=len(created) - len(misses),
                   enrichment_scheduled=len(misses) if self.enricher is not None else 0)

    @staticmethod
    def _build_entry(
        ingredient: ParsedIngredient,
        normalized: str,
        classification: Classification,
    ) -> GroceryEntry:
        entry = GroceryEntry(
            name=ingredient.name,
            normalized_name=normalized,
            quantity=ingredient.quantity,
            category=classification.category,
        )
        if classification.knowledge is not None:
            entry = entry.with_knowledge(classification.knowledge)
        return entry

    def _schedule_enrichment(self, entry: GroceryEntry) -> "asyncio.Task[Optional[KnowledgeUpdate]]":
        self.store.mark_pending(entry.normalized_name)
        task = asyncio.create_task(
            self._enrich(entry.id, entry.normalized_name, entry.category),
            name=f"enrich:{entry.normalized_name}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

        logger.info("enrichment_scheduled",
                   entry_id=str(entry.id),
                   normalized_name=entry.normalized_name)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        # Already logged in _enrich; mark it retrieved for callers that never await
        if not task.cancelled():
            task.exception()

    async def _enrich(self, entry_id: UUID, normalized: str, hint: Category) -> Optional[KnowledgeUpdate]:
        """Background enrichment for one entry; the key is already marked pending"""
        try:
            try:
                result = await self.enricher.enrich(normalized, hint)
            except CapabilityError as e:
                metrics.ENRICHMENT_RESULTS.labels(outcome="failed").inc()
                logger.warning("enrichment_failed",
                              entry_id=str(entry_id),
                              normalized_name=normalized,
                              error=str(e),
                              error_type=type(e).__name__)
                return None

            record = await self.store.upsert(
                normalized,
                result.category,
                result.storage_advice,
                result.shelf_life_days_min,
                result.shelf_life_days_max,
                KnowledgeSource.AI,
            )

            update = KnowledgeUpdate(entry_id=entry_id, normalized_name=normalized, record=record)
            updated = self.grocery_list.apply(update)
            if updated is not None:
                await self.entry_repository.update_entry(updated)

            metrics.ENRICHMENT_RESULTS.labels(outcome="success").inc()
            logger.info("enrichment_complete",
                       entry_id=str(entry_id),
                       normalized_name=normalized,
                       category=record.category.value,
                       entry_updated=updated is not None)
            return update

        except Exception:
            metrics.ENRICHMENT_RESULTS.labels(outcome="error").inc()
            logger.error("enrichment_task_error",
                        entry_id=str(entry_id),
                        normalized_name=normalized,
                        exc_info=True)
            raise

        finally:
            self.store.clear_pending(normalized)

    async def wait_for_enrichment(self) -> None:
        """Wait for every in-flight enrichment task to finish"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def record_user_knowledge(
        self,
        name: str,
        category: Category,
        storage_advice: Optional[str] = None,
        shelf_life_min: Optional[int] = None,
        shelf_life_max: Optional[int] = None,
    ) -> KnowledgeRecord:
        """
        Store a user's correction and apply it to live entries with that name.

        Args:
            name: Item name (normalized here)
            category: Corrected category
            storage_advice: Storage advice, if provided
            shelf_life_min: Minimum shelf life in days
            shelf_life_max: Maximum shelf life in days

        Returns:
            Stored record (source=User)
        """
        normalized = normalize(name)
        record = await self.store.upsert(
            normalized,
            category.canonical,
            storage_advice,
            shelf_life_min,
            shelf_life_max,
            KnowledgeSource.USER,
        )

        updated = [
            self.grocery_list.apply(
                KnowledgeUpdate(entry_id=entry.id, normalized_name=normalized, record=record)
            )
            for entry in self.grocery_list.entries_named(normalized)
        ]
        updated = [entry for entry in updated if entry is not None]
        for entry in updated:
            await self.entry_repository.update_entry(entry)

        logger.info("user_knowledge_recorded",
                   normalized_name=normalized,
                   category=record.category.value,
                   entries_updated=len(updated))
        return record

    async def remove_entry(self, entry_id: UUID) -> bool:
        """Remove an entry; a late enrichment for it becomes a no-op"""
        removed = self.grocery_list.remove(entry_id)
        if removed is None:
            return False
        await self.entry_repository.delete_entry(entry_id)
        return True
