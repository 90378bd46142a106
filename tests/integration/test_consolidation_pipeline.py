"""
Integration tests for the full consolidation pipeline.

Recipe text goes in, a categorized shopping list comes out.
"""

import pytest

from grocery import ShoppingListBuilder, consolidate, render_text
from grocery.data.models import CanonicalIngredient
from grocery.shopping.formatter import EMPTY_SHOPPING_LIST_MESSAGE


@pytest.fixture
def builder():
    """Builder with default options (no unit conversion, no cut folding)."""
    return ShoppingListBuilder()


class TestWorkedExamples:
    """Flour and ground beef walk-throughs."""

    def test_flour_across_recipes_and_on_hand(self):
        shopping_list = consolidate(
            ["Ingredients:\n- 2 cups flour", "Ingredients:\n- 1 cup flour"],
            on_hand_text="1 cup flour",
        )

        assert shopping_list.get("Pantry") == ["Flour: 2 cups"]

    def test_ground_beef_variants(self):
        shopping_list = consolidate([
            "Ingredients:\n- 1 lb ground beef",
            "Ingredients:\n- 2 lbs ground beef, browned",
        ])

        assert list(shopping_list) == [("Meat", ["Ground Beef: 3 lbs"])]

    def test_inline_list_with_preparation_words(self):
        shopping_list = consolidate(
            ["Ingredients: 1 lb ground beef, browned, 2 cloves garlic, minced"]
        )

        assert shopping_list.get("Meat") == ["Ground Beef: 1 lbs"]
        assert shopping_list.get("Produce") == ["Garlic: 2 cloves"]
        assert shopping_list.get("Other") == []

    def test_fractional_totals_covered_on_hand(self):
        shopping_list = consolidate(
            ["Ingredients:\n- 0.1 lb ham", "Ingredients:\n- 0.2 lb ham"],
            on_hand_text="0.3 lb ham",
        )

        assert shopping_list.is_empty


class TestShoppingListBuilder:
    """Test building from recipe texts."""

    def test_two_recipes(self, builder, pancake_recipe, taco_recipe):
        result = builder.build([pancake_recipe, taco_recipe], on_hand_text="1 cup flour")

        assert render_text(result.shopping_list) == (
            "Produce:\n"
            "- Garlic: 2 cloves\n"
            "- Onion: 1\n"
            "\n"
            "Meat:\n"
            "- Ground Beef: 1 lbs\n"
            "\n"
            "Dairy:\n"
            "- Butter: 2 tbsp\n"
            "- Cheddar Cheese: 1 cups\n"
            "- Eggs: 2\n"
            "- Milk: 1.5 cups\n"
            "\n"
            "Pantry:\n"
            "- Chili Powder: 1 tsp\n"
            "- Flour: 2 cups\n"
            "- Tortilla: 8"
        )

    def test_stats(self, builder, pancake_recipe, taco_recipe):
        result = builder.build([pancake_recipe, taco_recipe], on_hand_text="1 cup flour")

        assert result.stats == {
            "recipes": 2,
            "lines": 11,
            "dropped": 1,
            "aggregated": 10,
            "on_hand": 1,
            "items": 10,
        }

    def test_provenance(self, builder, pancake_recipe, taco_recipe):
        result = builder.build([pancake_recipe, taco_recipe])

        flour = [
            entry for entry in result.aggregated
            if entry.canonical == CanonicalIngredient("flour", "cups")
        ]
        assert flour[0].total_quantity == 3.0
        assert flour[0].recipes == ("Beef Tacos", "Pancakes")

    def test_order_of_recipes_does_not_matter(self, builder, pancake_recipe, taco_recipe):
        forward = builder.build([pancake_recipe, taco_recipe])
        backward = builder.build([taco_recipe, pancake_recipe])

        assert forward.shopping_list == backward.shopping_list
        assert forward.net == backward.net

    def test_empty_on_hand_leaves_quantities(self, builder, pancake_recipe):
        without = builder.build([pancake_recipe])
        with_empty = builder.build([pancake_recipe], on_hand_text="")

        assert with_empty.net == without.net
        assert [entry.needed_quantity for entry in without.net] == [
            entry.total_quantity for entry in without.aggregated
        ]

    def test_malformed_recipe_contributes_nothing(self, builder, pancake_recipe):
        alone = builder.build([pancake_recipe])
        with_bad = builder.build([pancake_recipe, "Just some instructions, nothing else."])

        assert with_bad.shopping_list == alone.shopping_list
        assert with_bad.stats["recipes"] == 2

    def test_no_recipes(self, builder):
        result = builder.build([])

        assert result.shopping_list.is_empty
        assert render_text(result.shopping_list) == EMPTY_SHOPPING_LIST_MESSAGE

    def test_everything_on_hand(self, builder):
        result = builder.build(
            ["Ingredients:\n- 2 eggs\n- 1 cup milk"],
            on_hand_text="12 eggs, 2 cups milk",
        )

        assert result.shopping_list.is_empty
        assert len(result.aggregated) == 2

    def test_net_entries_never_negative(self, builder, pancake_recipe, taco_recipe):
        result = builder.build(
            [pancake_recipe, taco_recipe],
            on_hand_text="10 cups flour, 1 dozen eggs, 5 lbs ground beef",
        )

        assert all(entry.needed_quantity > 0 for entry in result.net)

    def test_to_dict(self, builder, pancake_recipe):
        data = builder.build([pancake_recipe]).to_dict()

        assert data["empty"] is False
        assert data["dropped"] == ["Salt to taste"]
        assert {"aggregated", "net", "sections", "stats"} <= set(data)


class TestOptions:
    """Test the tunable policies."""

    def test_unit_conversion(self):
        recipes = ["Ingredients:\n- 3 tsp salt", "Ingredients:\n- 1 tbsp salt"]

        assert consolidate(recipes).get("Pantry") == ["Salt: 1 tbsp", "Salt: 3 tsp"]
        assert consolidate(recipes, convert_units=True).get("Pantry") == ["Salt: 2 tbsp"]

    def test_cut_folding(self):
        recipes = ["Ingredients:\n- 1 lb chicken breast\n- 1 lb chicken thighs"]

        assert consolidate(recipes).get("Meat") == [
            "Chicken Breast: 1 lbs",
            "Chicken Thigh: 1 lbs",
        ]
        assert consolidate(recipes, fold_cuts=True).get("Meat") == ["Chicken: 2 lbs"]


class TestBuildFromPlan:
    """Test consolidating a whole generated meal plan."""

    def test_recipes_section_only(self, builder, meal_plan_text):
        result = builder.build_from_plan(meal_plan_text)

        assert list(result.shopping_list) == [
            ("Meat", ["Ground Beef: 1 lbs"]),
            ("Dairy", ["Eggs: 2"]),
            ("Pantry", ["Flour: 3 cups"]),
        ]
        assert result.stats["recipes"] == 2

    def test_with_on_hand(self, builder, meal_plan_text):
        result = builder.build_from_plan(meal_plan_text, on_hand_text="2 eggs")

        assert result.shopping_list.get("Dairy") == []

    def test_plan_without_recipes(self, builder):
        result = builder.build_from_plan("Meal Plan:\nMonday: leftovers")

        assert result.shopping_list.is_empty
