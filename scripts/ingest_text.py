#!/usr/bin/env python3
"""
Ingest a grocery list from the command line (no database writes)

Runs the full pipeline in memory: parse → classify → entries, then waits for
background enrichment and prints the updated list grouped by aisle.

Usage:
    python scripts/ingest_text.py "milk, eggs, 2 lbs ground beef, dragon fruit"
    echo "- bread\\n- cilantro" | python scripts/ingest_text.py
"""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from grocery.common.config import get_settings
from grocery.common.errors import EmptyInput
from grocery.common.log_config import configure_logging
from grocery.domain.categorization.knowledge_store import KnowledgeStore
from grocery.domain.categorization.seed_data import seed_records
from grocery.domain.categorization.storage_enricher import ClaudeStorageEnricher
from grocery.domain.ingestion.grocery_list import GroceryList
from grocery.domain.ingestion.orchestrator import IngestionOrchestrator
from grocery.parsers.freeform_parser import ClaudeFreeformParser
from grocery.parsers.input_parser import InputParser


async def main(text: str) -> int:
    settings = get_settings()
    configure_logging("WARNING")

    store = KnowledgeStore()
    await store.seed_if_empty(seed_records())

    freeform = ClaudeFreeformParser(api_key=settings.anthropic_api_key, model=settings.freeform_model) \
        if settings.freeform_available else None
    enricher = ClaudeStorageEnricher(api_key=settings.anthropic_api_key, model=settings.enrichment_model) \
        if settings.enrichment_available else None

    grocery_list = GroceryList()
    orchestrator = IngestionOrchestrator(
        store=store,
        grocery_list=grocery_list,
        parser=InputParser(freeform=freeform, length_threshold=settings.freeform_length_threshold),
        enricher=enricher,
    )

    print('='*80)
    print('INGEST')
    print('='*80)

    try:
        async for entry in orchestrator.stream(text):
            quantity = f' ({entry.quantity})' if entry.quantity else ''
            source = 'cache' if entry.shelf_life_source else 'rules'
            print(f'  {entry.category.icon} {entry.name}{quantity} → {entry.category.value} [{source}]')
    except EmptyInput:
        print('❌ Nothing to ingest')
        return 1

    if orchestrator.pending_tasks:
        print()
        print(f'⏳ Waiting for {orchestrator.pending_tasks} enrichment lookup(s)...')
        await orchestrator.wait_for_enrichment()

    print()
    print('='*80)
    print('BY AISLE')
    print('='*80)
    for group in grocery_list.grouped():
        print(f'{group.category.icon} {group.category.value}')
        for entry in group.entries:
            print(f'    {entry.name}')
            if entry.storage_advice:
                print(f'      {entry.storage_advice} ({entry.shelf_life_description or "shelf life unknown"})')

    return 0


if __name__ == '__main__':
    raw = ' '.join(sys.argv[1:]) if len(sys.argv) > 1 else sys.stdin.read()
    sys.exit(asyncio.run(main(raw)))
