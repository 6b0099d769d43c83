"""Tests for the Claude-backed enricher and free-form parser (mocked API calls)."""

import json
from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import pytest

from grocery.common.claude import strip_json_fences
from grocery.common.errors import InvalidResponse, ServiceUnavailable, Timeout
from grocery.common.schemas.grocery import Category, KnowledgeSource
from grocery.domain.categorization.storage_enricher import ClaudeStorageEnricher
from grocery.parsers.freeform_parser import ClaudeFreeformParser

REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def mock_client_returning(text):
    mock_response = MagicMock()
    mock_response.content = [MagicMock(text=text)]

    mock_client = AsyncMock()
    mock_client.messages.create = AsyncMock(return_value=mock_response)
    return mock_client


def mock_client_raising(error):
    mock_client = AsyncMock()
    mock_client.messages.create = AsyncMock(side_effect=error)
    return mock_client


STORAGE_JSON = {
    "normalized_name": "oat milk",
    "storage_advice": "Refrigerate after opening",
    "shelf_life_days_min": 7,
    "shelf_life_days_max": 10,
    "category_suggestion": "Dairy",
    "notes": None,
}


class TestStripJsonFences:
    def test_plain(self):
        assert strip_json_fences(' {"a": 1} ') == '{"a": 1}'

    def test_json_fence(self):
        assert strip_json_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert strip_json_fences('Here:\n```\n{"a": 1}\n```') == '{"a": 1}'


class TestClaudeStorageEnricher:
    @pytest.mark.asyncio
    async def test_enrich(self):
        client = mock_client_returning(json.dumps(STORAGE_JSON))
        enricher = ClaudeStorageEnricher(client=client, model="test-model")

        record = await enricher.enrich("oat milk", Category.DAIRY)

        assert record.normalized_name == "oat milk"
        assert record.category == Category.DAIRY
        assert record.storage_advice == "Refrigerate after opening"
        assert (record.shelf_life_days_min, record.shelf_life_days_max) == (7, 10)
        assert record.source == KnowledgeSource.AI

        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert "oat milk" in kwargs["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_enrich_markdown_wrapped(self):
        client = mock_client_returning(f"```json\n{json.dumps(STORAGE_JSON)}\n```")
        record = await ClaudeStorageEnricher(client=client).enrich("oat milk", None)
        assert record.category == Category.DAIRY

    @pytest.mark.asyncio
    async def test_unknown_category_falls_back_to_hint(self):
        data = dict(STORAGE_JSON, category_suggestion="Snacks")
        enricher = ClaudeStorageEnricher(client=mock_client_returning(json.dumps(data)))

        assert (await enricher.enrich("trail mix", Category.PANTRY)).category == Category.PANTRY
        assert (await enricher.enrich("trail mix", None)).category == Category.OTHER

    @pytest.mark.asyncio
    async def test_legacy_category_folds_to_produce(self):
        data = dict(STORAGE_JSON, category_suggestion="vegetables")
        record = await ClaudeStorageEnricher(client=mock_client_returning(json.dumps(data))).enrich("kale", None)
        assert record.category == Category.PRODUCE

    @pytest.mark.asyncio
    async def test_shelf_life_coercion(self):
        data = dict(STORAGE_JSON, shelf_life_days_min="14", shelf_life_days_max=-3)
        record = await ClaudeStorageEnricher(client=mock_client_returning(json.dumps(data))).enrich("x", None)
        # Negative clamps to 0, then bounds are swapped
        assert (record.shelf_life_days_min, record.shelf_life_days_max) == (0, 14)

    @pytest.mark.asyncio
    async def test_missing_shelf_life_stays_absent(self):
        data = dict(STORAGE_JSON, shelf_life_days_min=None, shelf_life_days_max="unknown")
        record = await ClaudeStorageEnricher(client=mock_client_returning(json.dumps(data))).enrich("x", None)
        assert record.shelf_life_days_min is None
        assert record.shelf_life_days_max is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_min,raw_max", [
        ("Infinity", "-Infinity"),
        ("NaN", "10"),
        ("1e400", "7"),
        ("9" * 400, "7"),
    ])
    async def test_non_finite_shelf_life_dropped(self, raw_min, raw_max):
        text = (
            '{"category_suggestion": "Dairy", "storage_advice": "Refrigerate", '
            f'"shelf_life_days_min": {raw_min}, "shelf_life_days_max": {raw_max}}}'
        )
        record = await ClaudeStorageEnricher(client=mock_client_returning(text)).enrich("kefir", None)

        assert record.category == Category.DAIRY
        assert record.storage_advice == "Refrigerate"
        assert record.shelf_life_days_min is None

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        enricher = ClaudeStorageEnricher(client=mock_client_returning("I think milk lasts a week"))
        with pytest.raises(InvalidResponse):
            await enricher.enrich("milk", None)

    @pytest.mark.asyncio
    async def test_json_array_rejected(self):
        enricher = ClaudeStorageEnricher(client=mock_client_returning("[1, 2]"))
        with pytest.raises(InvalidResponse):
            await enricher.enrich("milk", None)

    @pytest.mark.asyncio
    async def test_missing_storage_advice(self):
        data = dict(STORAGE_JSON, storage_advice="")
        enricher = ClaudeStorageEnricher(client=mock_client_returning(json.dumps(data)))
        with pytest.raises(InvalidResponse):
            await enricher.enrich("milk", None)

    @pytest.mark.asyncio
    async def test_empty_content(self):
        mock_response = MagicMock()
        mock_response.content = []
        client = AsyncMock()
        client.messages.create = AsyncMock(return_value=mock_response)

        with pytest.raises(InvalidResponse):
            await ClaudeStorageEnricher(client=client).enrich("milk", None)

    @pytest.mark.asyncio
    async def test_requires_api_key(self):
        enricher = ClaudeStorageEnricher(api_key=None)
        assert enricher.client is None
        with pytest.raises(ServiceUnavailable):
            await enricher.enrich("milk", None)

    @pytest.mark.asyncio
    async def test_timeout(self):
        client = mock_client_raising(anthropic.APITimeoutError(request=REQUEST))
        with pytest.raises(Timeout):
            await ClaudeStorageEnricher(client=client).enrich("milk", None)

    @pytest.mark.asyncio
    async def test_connection_error(self):
        client = mock_client_raising(anthropic.APIConnectionError(request=REQUEST))
        with pytest.raises(ServiceUnavailable):
            await ClaudeStorageEnricher(client=client).enrich("milk", None)

    @pytest.mark.asyncio
    async def test_status_error(self):
        error = anthropic.APIStatusError(
            "overloaded",
            response=httpx.Response(529, request=REQUEST),
            body=None,
        )
        client = mock_client_raising(error)
        with pytest.raises(ServiceUnavailable, match="529"):
            await ClaudeStorageEnricher(client=client).enrich("milk", None)


class TestClaudeFreeformParser:
    @pytest.mark.asyncio
    async def test_parse(self):
        payload = {"ingredients": [
            {"name": "ground beef", "quantity": "2 lbs"},
            {"name": "cilantro", "quantity": None},
        ]}
        parser = ClaudeFreeformParser(client=mock_client_returning(json.dumps(payload)))

        items = await parser.parse_freeform("2 lbs of ground beef plus some cilantro")

        assert items == [("ground beef", "2 lbs"), ("cilantro", None)]

    @pytest.mark.asyncio
    async def test_skips_entries_without_name(self):
        payload = {"ingredients": [
            {"quantity": "2"},
            {"name": 42},
            "eggs",
            {"name": " eggs ", "quantity": 12},
        ]}
        parser = ClaudeFreeformParser(client=mock_client_returning(json.dumps(payload)))

        assert await parser.parse_freeform("a dozen eggs") == [("eggs", None)]

    @pytest.mark.asyncio
    async def test_empty_list_is_invalid(self):
        parser = ClaudeFreeformParser(client=mock_client_returning('{"ingredients": []}'))
        with pytest.raises(InvalidResponse):
            await parser.parse_freeform("uh")

    @pytest.mark.asyncio
    async def test_missing_key_is_invalid(self):
        parser = ClaudeFreeformParser(client=mock_client_returning('{"items": []}'))
        with pytest.raises(InvalidResponse):
            await parser.parse_freeform("uh")

    @pytest.mark.asyncio
    async def test_timeout(self):
        client = mock_client_raising(anthropic.APITimeoutError(request=REQUEST))
        with pytest.raises(Timeout):
            await ClaudeFreeformParser(client=client).parse_freeform("2 lbs beef")
