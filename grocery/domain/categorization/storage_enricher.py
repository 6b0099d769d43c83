"""
Storage Enricher - AI-powered storage advice and shelf-life lookup

Background stage of ingestion: on a knowledge cache miss, ask Claude how to
store the item, how long it keeps, and which aisle it belongs in. The result
is written to the knowledge store (source=AI), so each name is looked up once.

Caching Strategy:
- First time seeing "oat milk" → AI call (~$0.001)
- Next time → KnowledgeStore hit (FREE, no AI call)

Example:
- Input: name="oat milk", hint=Dairy
- AI Output: "Refrigerate after opening", 7-10 days, category_suggestion="Dairy"
"""
import math
from typing import Any, Dict, Optional, Protocol, Tuple

import anthropic
import structlog

from grocery.common.claude import build_client, request_json
from grocery.common.errors import InvalidResponse
from grocery.common.schemas.grocery import Category, KnowledgeRecord, KnowledgeSource

logger = structlog.get_logger()


class Enricher(Protocol):
    """
    Protocol for storage/shelf-life enrichment capabilities.

    Implementations are invoked at most once per item per ingestion event,
    and only when the knowledge store has no record for the name.
    """

    async def enrich(self, name: str, hint: Optional[Category]) -> KnowledgeRecord:
        """
        Look up storage knowledge for an item.

        Args:
            name: Normalized item name
            hint: Category from deterministic classification, if any

        Returns:
            KnowledgeRecord with source=AI

        Raises:
            ServiceUnavailable: Service unreachable or not configured
            InvalidResponse: Service answered with unusable data
            Timeout: Service did not answer in time
        """
        ...


def _coerce_days(value: Any) -> Optional[int]:
    """Non-negative integer day count, or None"""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return max(int(round(number)), 0)


def _shelf_life_bounds(data: Dict[str, Any]) -> Tuple[Optional[int], Optional[int]]:
    low = _coerce_days(data.get("shelf_life_days_min"))
    high = _coerce_days(data.get("shelf_life_days_max"))
    if low is not None and high is not None and low > high:
        low, high = high, low
    return low, high


class ClaudeStorageEnricher:
    """
    Storage enrichment backed by the Anthropic Claude API.

    Uses a food-storage prompt and expects a single JSON object back.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "claude-sonnet-4-5",
        timeout_seconds: float = 20.0,
        client: Optional[anthropic.AsyncAnthropic] = None,
    ):
        """
        Initialize storage enricher.

        Args:
            api_key: Anthropic API key
            model: Claude model name
            timeout_seconds: Per-request timeout
            client: Pre-built client (tests inject a mock here)
        """
        self.model = model
        self.client = client or build_client(api_key, timeout_seconds)

    async def enrich(self, name: str, hint: Optional[Category] = None) -> KnowledgeRecord:
        prompt = self._build_storage_prompt(name, hint)
        data = await request_json(self.client, self.model, prompt)

        storage_advice = data.get("storage_advice")
        if not isinstance(storage_advice, str) or not storage_advice.strip():
            raise InvalidResponse(f"No storage_advice in response for '{name}'")

        suggestion = data.get("category_suggestion")
        category = Category.from_label(suggestion if isinstance(suggestion, str) else None)
        if category is None:
            logger.debug("ai_category_unrecognized",
                        normalized_name=name,
                        suggestion=suggestion,
                        fallback=(hint or Category.OTHER).value)
            category = (hint or Category.OTHER).canonical

        shelf_life_min, shelf_life_max = _shelf_life_bounds(data)

        logger.info("ai_enrichment_complete",
                   normalized_name=name,
                   category=category.value,
                   shelf_life_min=shelf_life_min,
                   shelf_life_max=shelf_life_max,
                   notes=data.get("notes"))

        return KnowledgeRecord(
            normalized_name=name,
            category=category,
            storage_advice=storage_advice.strip(),
            shelf_life_days_min=shelf_life_min,
            shelf_life_days_max=shelf_life_max,
            source=KnowledgeSource.AI,
        )

    def _build_storage_prompt(self, name: str, hint: Optional[Category]) -> str:
        """
        Build AI prompt for storage lookup.

        Args:
            name: Normalized item name
            hint: Category guess from deterministic rules

        Returns:
            Formatted prompt for Claude API
        """
        valid_categories = "|".join(c.value for c in Category.store_walk_order())

        prompt = f"""You are a food storage expert. Provide storage advice and shelf life estimates for grocery items.

ITEM: {name}
"""
        if hint is not None and hint is not Category.OTHER:
            prompt += f"LIKELY AISLE: {hint.value}\n"

        prompt += f"""
INSTRUCTIONS:
1. Give brief, practical storage instructions
2. Estimate shelf life in days as a range, for typical US household conditions
3. Use conservative estimates
4. Suggest ONE store aisle from: {valid_categories}

RESPONSE FORMAT (return ONLY this JSON, no other text):
{{
  "normalized_name": "lowercase item name",
  "storage_advice": "Brief storage instructions",
  "shelf_life_days_min": 0,
  "shelf_life_days_max": 0,
  "category_suggestion": "Produce",
  "notes": "Additional info or null"
}}

Example:
Input: "milk"
Output: {{"normalized_name": "milk", "storage_advice": "Refrigerate at 40°F or below", "shelf_life_days_min": 5, "shelf_life_days_max": 7, "category_suggestion": "Dairy", "notes": null}}

Now describe: {name}
"""
        return prompt
