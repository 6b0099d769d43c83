"""
Pipeline wiring for the API

Builds the knowledge store, grocery list, parser and orchestrator from
settings, and exposes them to routers via FastAPI dependencies.
"""
from dataclasses import dataclass

import structlog
from fastapi import Request

from grocery.common.config import Settings
from grocery.common.database import sessionmanager
from grocery.common.entry_repository import InMemoryEntryRepository, SqlEntryRepository
from grocery.common.knowledge_repository import InMemoryKnowledgeRepository, SqlKnowledgeRepository
from grocery.domain.categorization.knowledge_store import KnowledgeStore
from grocery.domain.categorization.seed_data import seed_records
from grocery.domain.categorization.storage_enricher import ClaudeStorageEnricher
from grocery.domain.ingestion.grocery_list import GroceryList
from grocery.domain.ingestion.orchestrator import IngestionOrchestrator
from grocery.parsers.freeform_parser import ClaudeFreeformParser
from grocery.parsers.input_parser import InputParser

logger = structlog.get_logger()


@dataclass
class Pipeline:
    """Everything one API process shares across requests"""
    store: KnowledgeStore
    grocery_list: GroceryList
    parser: InputParser
    orchestrator: IngestionOrchestrator
    uses_database: bool = False


async def build_pipeline(settings: Settings) -> Pipeline:
    """
    Build and hydrate the pipeline.

    Uses SQL repositories when DATABASE_URL is set, in-memory otherwise.
    AI capabilities are only wired when enabled and an API key exists.
    """
    uses_database = bool(settings.database_url)
    if uses_database:
        await sessionmanager.init(settings.database_url)
        knowledge_repository = SqlKnowledgeRepository(sessionmanager.session)
        entry_repository = SqlEntryRepository(sessionmanager.session)
    else:
        knowledge_repository = InMemoryKnowledgeRepository()
        entry_repository = InMemoryEntryRepository()

    store = KnowledgeStore(repository=knowledge_repository)
    await store.load()
    if settings.seed_knowledge:
        await store.seed_if_empty(seed_records())

    freeform = None
    if settings.freeform_available:
        freeform = ClaudeFreeformParser(
            api_key=settings.anthropic_api_key,
            model=settings.freeform_model,
            timeout_seconds=settings.enrichment_timeout_seconds,
        )

    enricher = None
    if settings.enrichment_available:
        enricher = ClaudeStorageEnricher(
            api_key=settings.anthropic_api_key,
            model=settings.enrichment_model,
            timeout_seconds=settings.enrichment_timeout_seconds,
        )

    parser = InputParser(freeform=freeform, length_threshold=settings.freeform_length_threshold)
    grocery_list = GroceryList()
    orchestrator = IngestionOrchestrator(
        store=store,
        grocery_list=grocery_list,
        parser=parser,
        enricher=enricher,
        entry_repository=entry_repository,
    )

    logger.info("pipeline_ready",
               uses_database=uses_database,
               knowledge_records=len(store),
               enrichment_enabled=enricher is not None,
               freeform_enabled=freeform is not None)

    return Pipeline(
        store=store,
        grocery_list=grocery_list,
        parser=parser,
        orchestrator=orchestrator,
        uses_database=uses_database,
    )


async def close_pipeline(pipeline: Pipeline) -> None:
    """Let in-flight enrichment finish, then release the database"""
    await pipeline.orchestrator.wait_for_enrichment()
    if pipeline.uses_database:
        await sessionmanager.close()


def get_pipeline(request: Request) -> Pipeline:
    """FastAPI dependency: the process-wide pipeline"""
    return request.app.state.pipeline
