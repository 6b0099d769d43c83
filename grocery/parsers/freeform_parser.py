"""
Free-form Parser - AI extraction of grocery items from natural language

Used by the input parser when a single segment is too complex for the
deterministic rules ("grab 2 pounds of ground beef plus some cilantro").

Returns bare (name, quantity) pairs; the input parser wraps them as
medium-confidence ingredients.
"""
from typing import List, Optional, Protocol, Tuple

import anthropic
import structlog

from grocery.common.claude import build_client, request_json
from grocery.common.errors import InvalidResponse

logger = structlog.get_logger()


class FreeformParser(Protocol):
    """Protocol for free-form parsing capabilities"""

    async def parse_freeform(self, text: str) -> List[Tuple[str, Optional[str]]]:
        """
        Split natural language into grocery items.

        Args:
            text: Trimmed, non-empty input

        Returns:
            (name, quantity) pairs in spoken order

        Raises:
            ServiceUnavailable: Service unreachable or not configured
            InvalidResponse: No usable items in the answer
            Timeout: Service did not answer in time
        """
        ...


class ClaudeFreeformParser:
    """Free-form parsing backed by the Anthropic Claude API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "claude-sonnet-4-5",
        timeout_seconds: float = 20.0,
        client: Optional[anthropic.AsyncAnthropic] = None,
    ):
        self.model = model
        self.client = client or build_client(api_key, timeout_seconds)

    async def parse_freeform(self, text: str) -> List[Tuple[str, Optional[str]]]:
        data = await request_json(self.client, self.model, self._build_prompt(text))

        ingredients = data.get("ingredients")
        if not isinstance(ingredients, list):
            raise InvalidResponse("Response has no ingredients list")

        items: List[Tuple[str, Optional[str]]] = []
        for ingredient in ingredients:
            if not isinstance(ingredient, dict):
                continue
            name = ingredient.get("name")
            if not isinstance(name, str) or not name.strip():
                continue
            quantity = ingredient.get("quantity")
            items.append((name.strip(), quantity.strip() if isinstance(quantity, str) else None))

        if not items:
            raise InvalidResponse("No items found in response")

        logger.info("freeform_parse_complete", item_count=len(items))
        return items

    def _build_prompt(self, text: str) -> str:
        return f"""You are a grocery list parser. Parse the user's natural language input into a structured list of grocery items.

RULES:
- Extract item names in singular or plural form as spoken
- Extract quantities if mentioned (e.g., "2", "3 lbs", "a dozen")
- If no quantity is mentioned, use null
- Normalize item names to common grocery terms
- Split compound requests into separate items

RESPONSE FORMAT (return ONLY this JSON, no other text):
{{
  "ingredients": [
    {{"name": "item name", "quantity": "2 lbs"}},
    {{"name": "item name", "quantity": null}}
  ]
}}

Parse this grocery list: {text}
"""
