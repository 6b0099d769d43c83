"""
Categorization Module - Store-aisle classification and storage knowledge

Two-stage process:
1. Classification (Rules): normalized name → aisle category, synchronously
2. Enrichment (AI): storage advice + shelf life, in the background, cached

Cache strategy:
- First time seeing a name → rules now, AI lookup in the background
- Subsequent times → KnowledgeStore hit (learned category always wins)

Example flow:
- "Scallions" → normalize → "green onions" → exact match → Produce
- "oat milk" → keyword "milk" → Dairy → AI → "Refrigerate after opening", 7-10 days
"""

from grocery.domain.categorization.classifier import (
    Classification,
    ClassificationTier,
    ItemClassifier,
)
from grocery.domain.categorization.knowledge_store import KnowledgeStore
from grocery.domain.categorization.normalizer import normalize
from grocery.domain.categorization.storage_enricher import (
    ClaudeStorageEnricher,
    Enricher,
)

__all__ = [
    'Classification',
    'ClassificationTier',
    'ItemClassifier',
    'KnowledgeStore',
    'normalize',
    'ClaudeStorageEnricher',
    'Enricher',
]
