"""
Item Classifier - Deterministic rule cascade from item name to store aisle

NO AI CALLS - Pure rule-based logic over static tables plus a read of the
knowledge cache.

Cascade (first match wins):
1. Cache hit: learned knowledge for the normalized name always wins
2. Exact match of the whole name
3. Exact match of any single word (left to right)
4. Keyword equal to a whole word (longest keyword first)
5. Keyword contained anywhere in the name (longest keyword first)
6. Default: Other

Example:
- "Chicken Breast" → exact match → Meat
- "organic baby arugula" → word "arugula" → Produce
- "spicy noodle cups" → keyword "noodle" (whole word) → Pantry
- "blackberryjam" → keyword "blackberry" (substring) → Produce
"""
from enum import Enum
from typing import Mapping, NamedTuple, Optional, Protocol, Tuple

from grocery.common.schemas.grocery import Category, KnowledgeRecord
from grocery.domain.categorization.normalizer import normalize
from grocery.domain.categorization.tables import CATEGORY_KEYWORDS, EXACT_MATCHES, SYNONYMS


class KnowledgeLookup(Protocol):
    """Read side of the knowledge cache"""

    def get(self, name: str) -> Optional[KnowledgeRecord]:
        ...


class ClassificationTier(str, Enum):
    """Which cascade tier produced a category"""
    CACHE = "cache"
    EXACT = "exact"
    WORD = "word"
    KEYWORD_WORD = "keyword_word"
    KEYWORD_SUBSTRING = "keyword_substring"
    DEFAULT = "default"


class Classification(NamedTuple):
    category: Category
    knowledge: Optional[KnowledgeRecord]
    tier: ClassificationTier

    @property
    def is_cache_hit(self) -> bool:
        return self.tier is ClassificationTier.CACHE


class ItemClassifier:
    """
    Maps normalized item names to categories.

    Usage:
        classifier = ItemClassifier(knowledge=store)
        category, record = classifier.classify("scallions")
    """

    def __init__(
        self,
        knowledge: Optional[KnowledgeLookup] = None,
        exact_matches: Mapping[str, Category] = EXACT_MATCHES,
        keywords: Mapping[str, Category] = CATEGORY_KEYWORDS,
        synonyms: Mapping[str, str] = SYNONYMS,
    ):
        """
        Args:
            knowledge: Knowledge cache consulted before any static rule
            exact_matches: Whole-phrase table
            keywords: Keyword table (tiers 4-5)
            synonyms: Synonym table used for normalization
        """
        self.knowledge = knowledge
        self.exact_matches = exact_matches
        self.synonyms = synonyms

        # Longest first; stable sort keeps table order between equal lengths
        self._keywords_by_length: Tuple[Tuple[str, Category], ...] = tuple(
            sorted(keywords.items(), key=lambda kv: -len(kv[0]))
        )

    def classify(self, name: str) -> Tuple[Category, Optional[KnowledgeRecord]]:
        """
        Classify an item name.

        Args:
            name: Item name (normalized or raw; normalization is idempotent)

        Returns:
            (category, knowledge record if the cache had one)
        """
        result = self.classify_with_tier(name)
        return result.category, result.knowledge

    def classify_with_tier(self, name: str) -> Classification:
        normalized = normalize(name, self.synonyms)

        if self.knowledge is not None:
            record = self.knowledge.get(normalized)
            if record is not None:
                return Classification(record.category, record, ClassificationTier.CACHE)

        exact = self.exact_matches.get(normalized)
        if exact is not None:
            return Classification(exact, None, ClassificationTier.EXACT)

        words = [word for word in normalized.split(" ") if word]

        for word in words:
            category = self.exact_matches.get(word)
            if category is not None:
                return Classification(category, None, ClassificationTier.WORD)

        for keyword, category in self._keywords_by_length:
            if keyword in words:
                return Classification(category, None, ClassificationTier.KEYWORD_WORD)

        for keyword, category in self._keywords_by_length:
            if keyword in normalized:
                return Classification(category, None, ClassificationTier.KEYWORD_SUBSTRING)

        return Classification(Category.OTHER, None, ClassificationTier.DEFAULT)
