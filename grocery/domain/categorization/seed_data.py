"""
Seed knowledge for a fresh store

Common household staples with storage advice and shelf-life ranges, inserted
with source=Seed the first time the knowledge store comes up empty.
"""
from typing import List

from grocery.common.schemas.grocery import Category, KnowledgeRecord, KnowledgeSource

_FRIDGE = "Refrigerate at 40°F or below"
_FRIDGE_OR_FREEZE = "Refrigerate at 40°F or below, or freeze"
_CRISPER = "Refrigerate in crisper drawer"
_COOL_DRY = "Store in cool, dry place"
_AIRTIGHT_COOL_DRY = "Store in airtight container in cool, dry place"
_ROOM_TEMP = "Store at room temperature"
_FROZEN = "Keep frozen at 0°F or below"

# (normalized name, category, storage advice, min days, max days)
SEED_KNOWLEDGE = (
    ("milk", Category.DAIRY, _FRIDGE, 5, 7),
    ("eggs", Category.DAIRY, "Refrigerate in original carton", 21, 35),
    ("cheddar cheese", Category.DAIRY, "Refrigerate in sealed container", 21, 28),
    ("butter", Category.DAIRY, "Refrigerate or freeze for longer storage", 30, 90),
    ("yogurt", Category.DAIRY, _FRIDGE, 7, 14),
    ("sour cream", Category.DAIRY, "Refrigerate after opening", 7, 14),

    ("chicken breast", Category.MEAT, _FRIDGE_OR_FREEZE, 1, 2),
    ("ground beef", Category.MEAT, _FRIDGE_OR_FREEZE, 1, 2),
    ("bacon", Category.MEAT, "Refrigerate in sealed package", 7, 14),
    ("salmon", Category.MEAT, _FRIDGE_OR_FREEZE, 1, 2),
    ("pork chops", Category.MEAT, _FRIDGE_OR_FREEZE, 3, 5),

    ("bread", Category.BAKERY, "Store at room temperature in sealed bag", 3, 7),
    ("bagels", Category.BAKERY, "Store at room temperature or freeze", 5, 7),
    ("tortillas", Category.BAKERY, "Refrigerate after opening", 7, 14),
    ("hamburger buns", Category.BAKERY, "Store at room temperature in sealed bag", 3, 5),

    ("bananas", Category.PRODUCE, _ROOM_TEMP, 3, 7),
    ("apples", Category.PRODUCE, "Refrigerate for best quality", 21, 42),
    ("lettuce", Category.PRODUCE, _CRISPER, 5, 7),
    ("tomatoes", Category.PRODUCE, "Store at room temperature until ripe", 3, 7),
    ("carrots", Category.PRODUCE, _CRISPER, 14, 21),
    ("onions", Category.PRODUCE, _COOL_DRY, 30, 60),
    ("potatoes", Category.PRODUCE, "Store in cool, dark, dry place", 30, 60),
    ("garlic", Category.PRODUCE, _COOL_DRY, 30, 90),
    ("broccoli", Category.PRODUCE, _CRISPER, 3, 7),
    ("spinach", Category.PRODUCE, _CRISPER, 3, 7),
    ("bell peppers", Category.PRODUCE, _CRISPER, 7, 10),
    ("cucumbers", Category.PRODUCE, _CRISPER, 7, 10),
    ("strawberries", Category.PRODUCE, "Refrigerate, don't wash until use", 3, 5),
    ("avocados", Category.PRODUCE, "Store at room temperature until ripe, then refrigerate", 3, 5),
    ("lemons", Category.PRODUCE, "Refrigerate for best quality", 14, 21),
    ("limes", Category.PRODUCE, "Refrigerate for best quality", 14, 21),

    ("rice", Category.PANTRY, _AIRTIGHT_COOL_DRY, 365, 730),
    ("pasta", Category.PANTRY, _AIRTIGHT_COOL_DRY, 365, 730),
    ("mac and cheese", Category.PANTRY, _COOL_DRY, 365, 730),
    ("macaroni and cheese", Category.PANTRY, _COOL_DRY, 365, 730),
    ("flour", Category.PANTRY, _AIRTIGHT_COOL_DRY, 180, 365),
    ("sugar", Category.PANTRY, _AIRTIGHT_COOL_DRY, 730, 1095),
    ("olive oil", Category.PANTRY, "Store in cool, dark place", 180, 365),
    ("canned tomatoes", Category.PANTRY, _COOL_DRY, 365, 730),
    ("black beans", Category.PANTRY, _COOL_DRY, 365, 730),
    ("cereal", Category.PANTRY, "Store in airtight container", 180, 365),
    ("peanut butter", Category.PANTRY, _COOL_DRY, 180, 365),
    ("coffee", Category.PANTRY, "Store in airtight container", 60, 180),

    ("ice cream", Category.FROZEN, _FROZEN, 60, 90),
    ("frozen pizza", Category.FROZEN, _FROZEN, 180, 365),
    ("frozen vegetables", Category.FROZEN, _FROZEN, 240, 365),

    ("orange juice", Category.BEVERAGES, "Refrigerate after opening", 7, 10),
    ("soda", Category.BEVERAGES, _ROOM_TEMP, 180, 270),
    ("beer", Category.BEVERAGES, "Store in cool place", 90, 180),
    ("water", Category.BEVERAGES, _ROOM_TEMP, 365, 730),

    ("dish soap", Category.HOUSEHOLD, _ROOM_TEMP, 730, 1095),
    ("paper towels", Category.HOUSEHOLD, "Store in dry place", 1095, 1825),
    ("laundry detergent", Category.HOUSEHOLD, _ROOM_TEMP, 365, 730),
)


def seed_records() -> List[KnowledgeRecord]:
    """Seed knowledge as records ready for KnowledgeStore.seed_if_empty"""
    return [
        KnowledgeRecord(
            normalized_name=name,
            category=category,
            storage_advice=advice,
            shelf_life_days_min=min_days,
            shelf_life_days_max=max_days,
            source=KnowledgeSource.SEED,
        )
        for name, category, advice, min_days, max_days in SEED_KNOWLEDGE
    ]
