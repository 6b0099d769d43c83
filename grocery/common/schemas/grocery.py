"""
Grocery ingestion schemas (Pydantic models)

Shared data model for the item ingestion pipeline:
- Category: closed store-aisle enumeration with a fixed walk order
- ParsedIngredient: one (name, quantity) segment produced by the input parser
- KnowledgeRecord: cached category + storage/shelf-life data for a normalized name
- GroceryEntry: structured list entry created by the orchestrator
"""
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(str, Enum):
    """
    Store-aisle categories.

    FRUITS and VEGETABLES are legacy values kept so that old data still
    loads; both fold into PRODUCE and are hidden from the aisle walk.
    """
    PRODUCE = "Produce"
    BAKERY = "Bakery"
    MEAT = "Meat"
    DAIRY = "Dairy"
    PANTRY = "Pantry"
    FROZEN = "Frozen"
    BEVERAGES = "Beverages"
    HOUSEHOLD = "Household"
    SPECIALTY = "Specialty"
    OTHER = "Other"

    # Legacy
    FRUITS = "Fruits"
    VEGETABLES = "Vegetables"

    @property
    def display_order(self) -> int:
        return _DISPLAY_ORDER[self]

    @property
    def icon(self) -> str:
        return _ICONS[self]

    @property
    def is_legacy(self) -> bool:
        return self in (Category.FRUITS, Category.VEGETABLES)

    @property
    def canonical(self) -> "Category":
        """Legacy categories fold into PRODUCE"""
        return Category.PRODUCE if self.is_legacy else self

    @classmethod
    def from_label(cls, label: Optional[str], default: Optional["Category"] = None) -> Optional["Category"]:
        """
        Look up a category by its display value, case-insensitively.

        Args:
            label: Category label (e.g., "Produce", "dairy", "Fruits")
            default: Returned when label is missing or unknown

        Returns:
            Canonical category, or default
        """
        if not label:
            return default
        wanted = label.strip().lower()
        for category in cls:
            if category.value.lower() == wanted:
                return category.canonical
        return default

    @classmethod
    def store_walk_order(cls) -> List["Category"]:
        """Non-legacy categories in aisle display order"""
        return sorted(
            (c for c in cls if not c.is_legacy),
            key=lambda c: c.display_order,
        )


_DISPLAY_ORDER = {
    Category.PRODUCE: 0,
    Category.BAKERY: 1,
    Category.MEAT: 2,
    Category.DAIRY: 3,
    Category.PANTRY: 4,
    Category.FROZEN: 5,
    Category.BEVERAGES: 6,
    Category.HOUSEHOLD: 7,
    Category.SPECIALTY: 8,
    Category.OTHER: 9,
    Category.FRUITS: 10,
    Category.VEGETABLES: 11,
}

_ICONS = {
    Category.PRODUCE: "🥬",
    Category.BAKERY: "🥖",
    Category.MEAT: "🥩",
    Category.DAIRY: "🥛",
    Category.PANTRY: "🥫",
    Category.FROZEN: "🧊",
    Category.BEVERAGES: "🥤",
    Category.HOUSEHOLD: "🧹",
    Category.SPECIALTY: "✨",
    Category.OTHER: "📦",
    Category.FRUITS: "🍎",
    Category.VEGETABLES: "🥬",
}


class KnowledgeSource(str, Enum):
    """Where a knowledge record came from"""
    SEED = "Seed"
    USER = "User"
    AI = "AI"


class ParsingConfidence(str, Enum):
    """Which parsing tier produced an ingredient"""
    HIGH = "high"      # Deterministic delimiter/regex parsing
    MEDIUM = "medium"  # External free-form parser
    LOW = "low"        # Whole input kept as one item after a failed parse


class ParsedIngredient(BaseModel):
    """Single item segment produced by the input parser"""
    model_config = ConfigDict(frozen=True)

    name: str
    quantity: Optional[str] = None
    confidence: ParsingConfidence


class KnowledgeRecord(BaseModel):
    """
    Cached knowledge for one normalized item name.

    Shelf-life bounds are Optional: None means "no data", which is not
    the same as zero days.
    """
    model_config = ConfigDict(frozen=True)

    normalized_name: str = Field(..., description="Unique lookup key")
    category: Category
    storage_advice: Optional[str] = None
    shelf_life_days_min: Optional[int] = Field(None, ge=0)
    shelf_life_days_max: Optional[int] = Field(None, ge=0)
    source: KnowledgeSource
    updated_at: datetime = Field(default_factory=utcnow)


class GroceryEntry(BaseModel):
    """
    Structured grocery list entry.

    Created synchronously during ingestion; category and storage fields may
    be replaced later when background enrichment completes.
    """
    id: UUID = Field(default_factory=uuid4)
    name: str
    normalized_name: str
    quantity: Optional[str] = None
    category: Category = Category.OTHER

    storage_advice: Optional[str] = None
    shelf_life_days_min: Optional[int] = None
    shelf_life_days_max: Optional[int] = None
    shelf_life_source: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def shelf_life_description(self) -> Optional[str]:
        if self.shelf_life_days_min is None or self.shelf_life_days_max is None:
            return None
        if self.shelf_life_days_min == self.shelf_life_days_max:
            return f"{self.shelf_life_days_min} days"
        return f"{self.shelf_life_days_min}-{self.shelf_life_days_max} days"

    def estimated_best_by(self, purchased_at: datetime) -> Optional[datetime]:
        """Purchase date plus the midpoint of the shelf-life range"""
        if self.shelf_life_days_min is None or self.shelf_life_days_max is None:
            return None
        midpoint = (self.shelf_life_days_min + self.shelf_life_days_max) // 2
        return purchased_at + timedelta(days=midpoint)

    def with_knowledge(self, record: KnowledgeRecord) -> "GroceryEntry":
        """Copy of this entry carrying the record's category and storage data"""
        return self.model_copy(update={
            "category": record.category,
            "storage_advice": record.storage_advice,
            "shelf_life_days_min": record.shelf_life_days_min,
            "shelf_life_days_max": record.shelf_life_days_max,
            "shelf_life_source": record.source.value,
            "updated_at": utcnow(),
        })


class KnowledgeUpdate(BaseModel):
    """Emitted by a background enrichment task once knowledge for a key is known"""
    model_config = ConfigDict(frozen=True)

    entry_id: UUID
    normalized_name: str
    record: KnowledgeRecord


class AisleGroup(BaseModel):
    """Entries sharing one store aisle"""
    category: Category
    entries: List[GroceryEntry]


def group_by_aisle(entries: List[GroceryEntry]) -> List[AisleGroup]:
    """
    Group entries by canonical category in store walk order.

    Empty aisles are skipped; entry order inside an aisle is preserved.
    """
    buckets: Dict[Category, List[GroceryEntry]] = {}
    for entry in entries:
        buckets.setdefault(entry.category.canonical, []).append(entry)

    return [
        AisleGroup(category=category, entries=buckets[category])
        for category in Category.store_walk_order()
        if category in buckets
    ]
