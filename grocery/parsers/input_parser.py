"""
Input Parser - Raw user text → item segments

Handles typed lists, voice transcriptions and pasted recipe ingredients.

Rules (first applicable wins):
1. Multiple lines → one item per line (bullets stripped)
2. Single line with , ; " and " " & " → one item per part
3. Each item: optional leading quantity ("2 lbs", "3") split from the name
4. Single complex segment (has a number, or is long) → free-form parser
   (medium confidence; low confidence with the whole text if that fails)
5. Single simple segment → one item, as typed

Example:
- "milk, eggs, bread" → [milk] [eggs] [bread] (all high)
- "• 2 lbs ground beef\\n• cilantro" → [ground beef / 2 lbs] [cilantro]
- "Eggs" → [Eggs] (high)
"""
import re
from typing import List, Optional

import structlog

from grocery.common import metrics
from grocery.common.errors import CapabilityError, EmptyInput
from grocery.common.schemas.grocery import ParsedIngredient, ParsingConfidence
from grocery.parsers.freeform_parser import FreeformParser

logger = structlog.get_logger()

BULLETS = ("•", "·", "-", "*", "○", "▪", "▫")
DELIMITERS = (",", ";", " and ", " & ")

_QUANTITY = r"\d+\.?\d*\s*(?:lb|lbs|oz|kg|g|cup|cups|tablespoon|tbsp|teaspoon|tsp|pound|pounds|ounce|ounces)?"
LEADING_QUANTITY_PATTERN = re.compile(rf"^({_QUANTITY})\s+(.+)$", re.IGNORECASE)
QUANTITY_PATTERN = re.compile(_QUANTITY, re.IGNORECASE)


def strip_bullets(line: str) -> str:
    """Drop leading bullet glyphs; each glyph is tried once, in order"""
    cleaned = line.strip()
    for bullet in BULLETS:
        if cleaned.startswith(bullet):
            cleaned = cleaned[len(bullet):].strip()
    return cleaned


def split_delimiters(line: str) -> List[str]:
    parts = [line]
    for delimiter in DELIMITERS:
        parts = [piece for part in parts for piece in part.split(delimiter)]
    return [part.strip() for part in parts if part.strip()]


def contains_quantity(text: str) -> bool:
    return QUANTITY_PATTERN.search(text) is not None


def extract_item(segment: str) -> ParsedIngredient:
    """Split an optional leading quantity off a single item segment"""
    match = LEADING_QUANTITY_PATTERN.match(segment)
    if match:
        return ParsedIngredient(
            name=match.group(2).strip(),
            quantity=match.group(1).strip(),
            confidence=ParsingConfidence.HIGH,
        )
    return ParsedIngredient(name=segment, quantity=None, confidence=ParsingConfidence.HIGH)


class InputParser:
    """
    Turns raw text into ParsedIngredient segments.

    Usage:
        parser = InputParser(freeform=ClaudeFreeformParser(api_key=...))
        items = await parser.parse("2 lbs ground beef, cilantro")
    """

    def __init__(
        self,
        freeform: Optional[FreeformParser] = None,
        length_threshold: int = 100,
    ):
        """
        Args:
            freeform: Free-form parsing capability (None disables it)
            length_threshold: Single segments longer than this are complex
        """
        self.freeform = freeform
        self.length_threshold = length_threshold

    def is_complex(self, segment: str) -> bool:
        return contains_quantity(segment) or len(segment) > self.length_threshold

    async def parse(self, text: str) -> List[ParsedIngredient]:
        """
        Parse raw input into item segments.

        Args:
            text: Raw user text

        Returns:
            Ingredients in input order (never empty)

        Raises:
            EmptyInput: Text is blank after trimming
        """
        trimmed = text.strip()
        if not trimmed:
            raise EmptyInput("Input text is empty")

        items = await self._parse_trimmed(trimmed)

        for item in items:
            metrics.PARSE_RESULTS.labels(confidence=item.confidence.value).inc()

        logger.debug("input_parsed",
                    item_count=len(items),
                    confidence=items[0].confidence.value)
        return items

    async def _parse_trimmed(self, trimmed: str) -> List[ParsedIngredient]:
        lines = [strip_bullets(line) for line in trimmed.splitlines()]
        lines = [line for line in lines if line]

        if len(lines) > 1:
            return [extract_item(line) for line in lines]

        single_line = lines[0] if lines else trimmed

        parts = split_delimiters(single_line)
        if len(parts) > 1:
            return [extract_item(part) for part in parts]

        if not self.is_complex(single_line):
            return [ParsedIngredient(name=single_line, quantity=None, confidence=ParsingConfidence.HIGH)]

        if self.freeform is None:
            return [extract_item(single_line)]

        return await self._parse_freeform(trimmed)

    async def _parse_freeform(self, trimmed: str) -> List[ParsedIngredient]:
        try:
            pairs = await self.freeform.parse_freeform(trimmed)
        except CapabilityError as e:
            logger.warning("freeform_parse_failed",
                          error=str(e),
                          error_type=type(e).__name__,
                          text_length=len(trimmed))
            return [ParsedIngredient(name=trimmed, quantity=None, confidence=ParsingConfidence.LOW)]

        items = [
            ParsedIngredient(name=name.strip(), quantity=quantity, confidence=ParsingConfidence.MEDIUM)
            for name, quantity in pairs
            if name and name.strip()
        ]

        if not items:
            logger.warning("freeform_parse_empty", text_length=len(trimmed))
            return [ParsedIngredient(name=trimmed, quantity=None, confidence=ParsingConfidence.LOW)]

        return items
