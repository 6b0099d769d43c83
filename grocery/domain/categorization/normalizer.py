"""
Item name normalizer

Canonical lookup key for every grocery item: lowercased, trimmed and
synonym-folded ("Scallions " → "green onions"). Pure function, no I/O.
"""
from typing import Mapping

from grocery.domain.categorization.tables import SYNONYMS


def normalize(raw: str, synonyms: Mapping[str, str] = SYNONYMS) -> str:
    """
    Normalize a raw item name.

    Args:
        raw: Item text as typed or transcribed
        synonyms: Synonym table (defaults to the built-in table)

    Returns:
        Normalized name; empty string for blank input
    """
    cleaned = raw.strip().lower()
    return synonyms.get(cleaned, cleaned)
