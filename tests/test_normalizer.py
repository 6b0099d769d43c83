"""Tests for item name normalization."""

import pytest

from grocery.domain.categorization.normalizer import normalize
from grocery.domain.categorization.tables import SYNONYMS


class TestNormalize:
    def test_lowercases_and_trims(self):
        assert normalize("  Chicken Breast \n") == "chicken breast"

    def test_synonym_folding(self):
        assert normalize("Scallions") == "green onions"
        assert normalize("cilantro") == "coriander"
        assert normalize(" Spring Onion ") == "green onion"

    def test_unknown_name_passes_through(self):
        assert normalize("Dragon Fruit") == "dragon fruit"

    def test_empty_input(self):
        assert normalize("") == ""
        assert normalize("   ") == ""

    def test_inner_whitespace_kept(self):
        assert normalize("ground  beef") == "ground  beef"

    @pytest.mark.parametrize("raw", [
        "Milk", "  SCALLIONS", "cilantro", "roma tomato", "", "  ", "Ground Beef ", "dragon fruit",
    ])
    def test_idempotent(self, raw):
        once = normalize(raw)
        assert normalize(once) == once

    def test_synonym_targets_are_not_keys(self):
        for target in SYNONYMS.values():
            assert target not in SYNONYMS

    def test_custom_table(self):
        assert normalize("Aubergine", {"aubergine": "eggplant"}) == "eggplant"
