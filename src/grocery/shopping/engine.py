"""
Shopping list consolidation pipeline.

Runs extraction, parsing, normalization, aggregation, inventory
reconciliation and formatting for one request. Every call works only on its
own inputs, so one builder can serve concurrent requests.
"""

import logging
from typing import Iterable

from grocery.data.models import ConsolidationResult, ShoppingList
from grocery.shopping.aggregator import aggregate, parse_lines
from grocery.shopping.extractor import (
    extract_with_dropped,
    split_plan_sections,
    split_recipes,
)
from grocery.shopping.formatter import format_shopping_list
from grocery.shopping.inventory import parse_inventory, subtract_inventory

logger = logging.getLogger(__name__)


class ShoppingListBuilder:
    """Builds a consolidated shopping list from recipe texts and on-hand inventory."""

    def __init__(self, convert_units: bool = False, fold_cuts: bool = False):
        """
        Initialize the builder.

        Args:
            convert_units: Apply the optional unit fold table (tsp -> tbsp, ...)
            fold_cuts: Merge protein cuts onto the animal (chicken thigh -> chicken)
        """
        self.convert_units = convert_units
        self.fold_cuts = fold_cuts

    def build(
        self, recipe_texts: Iterable[str], on_hand_text: str = ""
    ) -> ConsolidationResult:
        """
        Consolidate ingredients from several recipes into a shopping list.

        Args:
            recipe_texts: One text per recipe (a text may hold several recipes)
            on_hand_text: Free-text inventory the user already has

        Returns:
            ConsolidationResult with the shopping list and every stage output.
            The list is empty when no recipe had an ingredient section.
        """
        lines = []
        dropped = []
        recipe_count = 0
        for index, text in enumerate(recipe_texts, start=1):
            recipe_count += 1
            kept, discarded = extract_with_dropped(text, recipe=f"Recipe {index}")
            if not kept:
                logger.info(f"Recipe {index} has no usable ingredient lines")
            lines.extend(kept)
            dropped.extend(discarded)

        parsed, recipes, failed = parse_lines(
            lines, convert_units=self.convert_units, fold_cuts=self.fold_cuts
        )
        dropped.extend(failed)

        aggregated = aggregate(parsed, recipes=recipes, fold_cuts=self.fold_cuts)
        inventory = parse_inventory(
            on_hand_text, convert_units=self.convert_units, fold_cuts=self.fold_cuts
        )
        net = subtract_inventory(aggregated, inventory, fold_cuts=self.fold_cuts)
        shopping_list = format_shopping_list(net)

        stats = {
            "recipes": recipe_count,
            "lines": len(lines),
            "dropped": len(dropped),
            "aggregated": len(aggregated),
            "on_hand": len(inventory),
            "items": len(net),
        }

        if shopping_list.is_empty:
            if aggregated:
                logger.info("Every ingredient is covered by on-hand inventory")
            else:
                logger.warning("No ingredients found in any recipe")
        else:
            logger.info(
                f"Built shopping list: {len(net)} items from {len(lines)} lines "
                f"across {recipe_count} recipes"
            )

        return ConsolidationResult(
            shopping_list=shopping_list,
            lines=tuple(lines),
            parsed=tuple(parsed),
            dropped=tuple(dropped),
            aggregated=tuple(aggregated),
            inventory=tuple(inventory),
            net=tuple(net),
            counts=tuple(stats.items()),
        )

    def build_from_plan(
        self, plan_text: str, on_hand_text: str = ""
    ) -> ConsolidationResult:
        """
        Consolidate the recipes section of a whole generated meal plan.

        Args:
            plan_text: Generator output with Meal Plan / Recipes / Shopping List parts
            on_hand_text: Free-text inventory

        Returns:
            ConsolidationResult, as build()
        """
        sections = split_plan_sections(plan_text)
        if not sections.recipes:
            logger.warning("Meal plan has no recipes section")
            return self.build([], on_hand_text)

        return self.build(split_recipes(sections.recipes), on_hand_text)


def consolidate(
    recipe_texts: Iterable[str],
    on_hand_text: str = "",
    convert_units: bool = False,
    fold_cuts: bool = False,
) -> ShoppingList:
    """One-call convenience: recipe texts + on-hand text -> ShoppingList."""
    builder = ShoppingListBuilder(convert_units=convert_units, fold_cuts=fold_cuts)
    return builder.build(recipe_texts, on_hand_text).shopping_list

