"""
Ingestion Module - Raw user text → grocery list entries

Entries are created synchronously from deterministic rules and cached
knowledge; storage advice and shelf life arrive later from background
enrichment.
"""

from grocery.domain.ingestion.grocery_list import GroceryList
from grocery.domain.ingestion.orchestrator import IngestionOrchestrator, IngestionResult

__all__ = [
    'GroceryList',
    'IngestionOrchestrator',
    'IngestionResult',
]
