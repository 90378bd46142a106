"""
Ingredient aggregation across recipes.

Groups parsed ingredients by canonical (name, unit) key and sums their
quantities. No unit conversion happens here: "cups" and "tbsp" of the same
ingredient stay separate rows unless the normalizer already folded them.
"""

import logging
import math
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from grocery.data.models import (
    AggregatedEntry,
    CanonicalIngredient,
    ParsedIngredient,
    RawIngredientLine,
)
from grocery.shopping.normalizer import canonical_key, normalize_ingredient
from grocery.shopping.parser import parse_ingredient

logger = logging.getLogger(__name__)


def aggregate(
    parsed: Iterable[ParsedIngredient],
    recipes: Optional[Sequence[str]] = None,
    fold_cuts: bool = False,
) -> List[AggregatedEntry]:
    """
    Sum quantities that share a canonical key.

    Args:
        parsed: Parsed ingredients from every recipe
        recipes: Optional recipe name per ingredient (same order), kept on
            the entries for tracing
        fold_cuts: Name folding policy, passed to normalize_name

    Returns:
        One AggregatedEntry per (name, unit), sorted by key. fsum keeps the
        totals independent of input order.
    """
    amounts: Dict[CanonicalIngredient, List[float]] = defaultdict(list)
    sources: Dict[CanonicalIngredient, set] = defaultdict(set)

    for index, ingredient in enumerate(parsed):
        key = canonical_key(ingredient.name, ingredient.unit, fold_cuts=fold_cuts)
        if not key.name:
            logger.debug(f"Skipping ingredient with empty name: {ingredient}")
            continue

        amounts[key].append(ingredient.quantity)
        if recipes is not None and index < len(recipes) and recipes[index]:
            sources[key].add(recipes[index])

    entries = [
        AggregatedEntry(
            canonical=key,
            total_quantity=math.fsum(amounts[key]),
            recipes=tuple(sorted(sources.get(key, ()))),
        )
        for key in sorted(amounts)
    ]

    logger.debug(f"Aggregated {len(amounts)} distinct ingredients")
    return entries


def parse_lines(
    lines: Iterable[RawIngredientLine],
    convert_units: bool = False,
    fold_cuts: bool = False,
):
    """
    Parse and normalize raw lines.

    Returns:
        (parsed ingredients, recipe name per ingredient, lines that failed
        to parse)
    """
    parsed: List[ParsedIngredient] = []
    recipes: List[str] = []
    failed: List[RawIngredientLine] = []

    for line in lines:
        ingredient = parse_ingredient(line.text)
        if ingredient is None:
            failed.append(line)
            continue
        parsed.append(
            normalize_ingredient(
                ingredient, convert_units=convert_units, fold_cuts=fold_cuts
            )
        )
        recipes.append(line.recipe)

    return parsed, recipes, failed


def aggregate_lines(
    lines: Iterable[RawIngredientLine],
    convert_units: bool = False,
    fold_cuts: bool = False,
) -> List[AggregatedEntry]:
    """Parse, normalize and aggregate raw lines, keeping recipe provenance."""
    parsed, recipes, _ = parse_lines(
        lines, convert_units=convert_units, fold_cuts=fold_cuts
    )
    return aggregate(parsed, recipes=recipes, fold_cuts=fold_cuts)
