"""
Unit tests for name and unit normalization.

Normalization must be idempotent: every canonical name, including each
folding target, has to map to itself.
"""

import pytest

from grocery.data.models import CanonicalIngredient, ParsedIngredient
from grocery.ingredient_canon import CUT_FOLD_RULES, NAME_FOLD_RULES, UNIT_SYNONYMS
from grocery.shopping.normalizer import (
    canonical_key,
    convert_quantity,
    is_descriptive,
    normalize_ingredient,
    normalize_name,
    normalize_unit,
    singularize,
)

SAMPLE_NAMES = [
    "Large Eggs, beaten",
    "ground beef, browned",
    "extra lean ground beef",
    "boneless skinless chicken breasts",
    "scallions, thinly sliced",
    "Extra Virgin Olive Oil",
    "all-purpose flour",
    "fresh cilantro (chopped)",
    "diced tomatoes",
    "freshly ground black pepper",
    "red bell pepper",
    "unsalted butter, softened",
    "half and half",
    "kosher salt",
    "baby spinach leaves",
    "fresh",
    "cherry tomatoes, halved",
    "2% milk",
]


class TestNormalizeUnit:
    """Test unit synonym mapping."""

    @pytest.mark.parametrize("raw,expected", [
        ("Tablespoons", "tbsp"),
        ("tbs", "tbsp"),
        ("teaspoon", "tsp"),
        ("lb.", "lbs"),
        ("Pounds", "lbs"),
        ("fl. oz", "fl oz"),
        ("C", "cups"),
        ("cup", "cups"),
        ("grams", "g"),
        ("clove", "cloves"),
    ])
    def test_synonyms(self, raw, expected):
        assert normalize_unit(raw) == expected

    def test_unknown_unit_passes_through(self):
        assert normalize_unit("Handful") == "handful"

    def test_empty(self):
        assert normalize_unit("") == ""

    def test_every_synonym_maps_to_a_fixed_point(self):
        for variant in UNIT_SYNONYMS:
            canonical = normalize_unit(variant)
            assert normalize_unit(canonical) == canonical


class TestSingularize:
    """Test head-noun singularization."""

    @pytest.mark.parametrize("word,expected", [
        ("tomatoes", "tomato"),
        ("berries", "berry"),
        ("leaves", "leaf"),
        ("dishes", "dish"),
        ("boxes", "box"),
        ("onions", "onion"),
        ("peas", "pea"),
        ("molasses", "molasses"),
        ("asparagus", "asparagus"),
        ("hummus", "hummus"),
        ("glass", "glass"),
        ("egg", "egg"),
    ])
    def test_words(self, word, expected):
        assert singularize(word) == expected

    @pytest.mark.parametrize("word", ["tomatoes", "berries", "leaves", "oats", "peas"])
    def test_stable(self, word):
        once = singularize(word)
        assert singularize(once) == once


class TestNormalizeName:
    """Test canonical name reduction."""

    @pytest.mark.parametrize("raw,expected", [
        ("Large Eggs, beaten", "eggs"),
        ("egg", "eggs"),
        ("ground beef, browned", "ground beef"),
        ("extra lean ground beef", "ground beef"),
        ("boneless skinless chicken breasts", "chicken breast"),
        ("scallions, thinly sliced", "green onion"),
        ("Extra Virgin Olive Oil", "olive oil"),
        ("all-purpose flour", "flour"),
        ("fresh cilantro (chopped)", "cilantro"),
        ("diced tomatoes", "tomato"),
        ("freshly ground black pepper", "black pepper"),
        ("red bell pepper", "bell pepper"),
        ("unsalted butter, softened", "butter"),
        ("half and half", "half and half"),
        ("kosher salt", "salt"),
    ])
    def test_names(self, raw, expected):
        assert normalize_name(raw) == expected

    def test_cuts_stay_distinct_by_default(self):
        assert normalize_name("chicken breasts") == "chicken breast"
        assert normalize_name("chicken thighs") == "chicken thigh"

    def test_fold_cuts(self):
        assert normalize_name("chicken thighs", fold_cuts=True) == "chicken"
        assert normalize_name("boneless chicken breast", fold_cuts=True) == "chicken"
        assert normalize_name("salmon fillets", fold_cuts=True) == "fish fillet"

    def test_modifier_only_name_is_kept(self):
        assert normalize_name("fresh") == "fresh"

    @pytest.mark.parametrize("raw", ["", "(optional)", "123"])
    def test_empty_names(self, raw):
        assert normalize_name(raw) == ""

    @pytest.mark.parametrize("raw", SAMPLE_NAMES)
    def test_idempotent(self, raw):
        once = normalize_name(raw)
        assert normalize_name(once) == once

    @pytest.mark.parametrize("raw", SAMPLE_NAMES)
    def test_idempotent_with_cut_folding(self, raw):
        once = normalize_name(raw, fold_cuts=True)
        assert normalize_name(once, fold_cuts=True) == once

    def test_every_fold_target_is_a_fixed_point(self):
        for _, canonical in NAME_FOLD_RULES:
            assert normalize_name(canonical) == canonical
        for _, canonical in CUT_FOLD_RULES + NAME_FOLD_RULES:
            assert normalize_name(canonical, fold_cuts=True) == canonical


class TestConvertQuantity:
    """Test the optional unit fold table."""

    @pytest.mark.parametrize("quantity,unit,expected_quantity,expected_unit", [
        (3.0, "tsp", 1.0, "tbsp"),
        (8.0, "fl oz", 1.0, "cups"),
        (2.0, "pints", 4.0, "cups"),
        (1.0, "quarts", 4.0, "cups"),
        (1.0, "gallons", 16.0, "cups"),
        (1.5, "kg", 1500.0, "g"),
        (2.0, "liters", 2000.0, "ml"),
    ])
    def test_folds(self, quantity, unit, expected_quantity, expected_unit):
        converted, target = convert_quantity(quantity, unit)

        assert converted == pytest.approx(expected_quantity)
        assert target == expected_unit

    @pytest.mark.parametrize("unit", ["cups", "tbsp", "g", "oz", "lbs", "cloves", ""])
    def test_no_fold(self, unit):
        assert convert_quantity(2.0, unit) == (2.0, unit)

    def test_weight_never_becomes_volume(self):
        _, unit = convert_quantity(1.0, "oz")
        assert unit == "oz"


class TestNormalizeIngredient:
    """Test record-level normalization."""

    def test_name_and_unit(self):
        parsed = ParsedIngredient(quantity=3.0, unit="teaspoons", name="Kosher Salt")

        result = normalize_ingredient(parsed)

        assert result == ParsedIngredient(quantity=3.0, unit="tsp", name="salt")
        # Input is untouched
        assert parsed.unit == "teaspoons"

    def test_with_unit_conversion(self):
        parsed = ParsedIngredient(quantity=3.0, unit="teaspoons", name="salt")

        result = normalize_ingredient(parsed, convert_units=True)

        assert result.unit == "tbsp"
        assert result.quantity == pytest.approx(1.0)

    def test_canonical_key(self):
        assert canonical_key("Large Eggs", "") == CanonicalIngredient(name="eggs", unit="")
        assert canonical_key("flour", "cup") == CanonicalIngredient(name="flour", unit="cups")


class TestIsDescriptive:
    """Test detection of preparation-only text."""

    @pytest.mark.parametrize("text", ["browned", "minced", " finely chopped ", "divided"])
    def test_descriptive(self, text):
        assert is_descriptive(text)

    @pytest.mark.parametrize("text", ["", "garlic", "fresh basil", "2 cloves garlic"])
    def test_not_descriptive(self, text):
        assert not is_descriptive(text)
