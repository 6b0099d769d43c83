"""Tests for raw text → ingredient segmentation."""

import pytest

from grocery.common.errors import EmptyInput, InvalidResponse, ServiceUnavailable, Timeout
from grocery.common.schemas.grocery import ParsingConfidence
from grocery.parsers.input_parser import InputParser, contains_quantity, extract_item, strip_bullets

from tests.fakes import FakeFreeformParser

HIGH = ParsingConfidence.HIGH


def as_tuples(items):
    return [(i.name, i.quantity, i.confidence) for i in items]


class TestHelpers:
    @pytest.mark.parametrize("line,expected", [
        ("• milk", "milk"),
        ("  - eggs ", "eggs"),
        ("* 2 lbs beef", "2 lbs beef"),
        ("▪ bread", "bread"),
        ("• - butter", "butter"),
        ("plain", "plain"),
        ("-", ""),
    ])
    def test_strip_bullets(self, line, expected):
        assert strip_bullets(line) == expected

    def test_extract_item_with_unit(self):
        item = extract_item("2 lbs ground beef")
        assert (item.name, item.quantity) == ("ground beef", "2 lbs")

    def test_extract_item_bare_number(self):
        item = extract_item("3 apples")
        assert (item.name, item.quantity) == ("apples", "3")

    def test_extract_item_decimal_and_case(self):
        item = extract_item("1.5 KG Potatoes")
        assert (item.name, item.quantity) == ("Potatoes", "1.5 KG")

    def test_extract_item_without_quantity(self):
        item = extract_item("cilantro")
        assert (item.name, item.quantity, item.confidence) == ("cilantro", None, HIGH)

    def test_contains_quantity(self):
        assert contains_quantity("grab 2 pounds of beef")
        assert not contains_quantity("some beef please")


class TestParse:
    @pytest.mark.asyncio
    async def test_comma_list(self):
        items = await InputParser().parse("milk, eggs, bread")
        assert as_tuples(items) == [
            ("milk", None, HIGH),
            ("eggs", None, HIGH),
            ("bread", None, HIGH),
        ]

    @pytest.mark.asyncio
    async def test_single_quantity_item_without_freeform(self):
        items = await InputParser().parse("2 lbs ground beef")
        assert as_tuples(items) == [("ground beef", "2 lbs", HIGH)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    async def test_blank_input_raises(self, text):
        with pytest.raises(EmptyInput):
            await InputParser().parse(text)

    @pytest.mark.asyncio
    async def test_short_single_line(self):
        freeform = FakeFreeformParser()
        items = await InputParser(freeform=freeform).parse("  Eggs ")
        assert as_tuples(items) == [("Eggs", None, HIGH)]
        assert freeform.calls == []

    @pytest.mark.asyncio
    async def test_multiline_with_bullets(self):
        text = "• 2 lbs ground beef\n- cilantro\n\n* 3 apples\n"
        items = await InputParser().parse(text)
        assert as_tuples(items) == [
            ("ground beef", "2 lbs", HIGH),
            ("cilantro", None, HIGH),
            ("apples", "3", HIGH),
        ]

    @pytest.mark.asyncio
    async def test_multiline_never_uses_freeform(self):
        freeform = FakeFreeformParser(result=[("should not", None)])
        items = await InputParser(freeform=freeform).parse("2 cups flour\n1 tsp salt")
        assert [i.name for i in items] == ["flour", "salt"]
        assert freeform.calls == []

    @pytest.mark.asyncio
    async def test_lines_are_not_split_on_commas(self):
        items = await InputParser().parse("salt, pepper\nbread")
        assert [i.name for i in items] == ["salt, pepper", "bread"]

    @pytest.mark.asyncio
    async def test_word_delimiters(self):
        items = await InputParser().parse("salt & pepper; 1 cup flour and butter")
        assert as_tuples(items) == [
            ("salt", None, HIGH),
            ("pepper", None, HIGH),
            ("flour", "1 cup", HIGH),
            ("butter", None, HIGH),
        ]

    @pytest.mark.asyncio
    async def test_empty_parts_dropped(self):
        items = await InputParser().parse("milk,, ,eggs")
        assert [i.name for i in items] == ["milk", "eggs"]


class TestFreeformFallback:
    @pytest.mark.asyncio
    async def test_complex_segment_uses_freeform(self):
        freeform = FakeFreeformParser(result=[("chicken thighs", "2 pounds"), ("coriander", None)])
        items = await InputParser(freeform=freeform).parse("grab 2 pounds of chicken thighs plus cilantro")

        assert freeform.calls == ["grab 2 pounds of chicken thighs plus cilantro"]
        assert as_tuples(items) == [
            ("chicken thighs", "2 pounds", ParsingConfidence.MEDIUM),
            ("coriander", None, ParsingConfidence.MEDIUM),
        ]

    @pytest.mark.asyncio
    async def test_long_segment_uses_freeform(self):
        freeform = FakeFreeformParser(result=[("sourdough bread", None)])
        parser = InputParser(freeform=freeform, length_threshold=20)

        items = await parser.parse("some really good sourdough bread please")

        assert as_tuples(items) == [("sourdough bread", None, ParsingConfidence.MEDIUM)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        ServiceUnavailable("down"),
        InvalidResponse("garbage"),
        Timeout("slow"),
    ])
    async def test_freeform_failure_degrades_to_low(self, error):
        freeform = FakeFreeformParser(error=error)
        items = await InputParser(freeform=freeform).parse("  2 lbs ground beef ")
        assert as_tuples(items) == [("2 lbs ground beef", None, ParsingConfidence.LOW)]

    @pytest.mark.asyncio
    async def test_freeform_with_no_usable_items_degrades_to_low(self):
        freeform = FakeFreeformParser(result=[("  ", "2")])
        items = await InputParser(freeform=freeform).parse("2 lbs ground beef")
        assert as_tuples(items) == [("2 lbs ground beef", None, ParsingConfidence.LOW)]
