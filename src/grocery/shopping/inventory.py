"""
On-hand inventory reconciliation.

The user's "ingredients on hand" field is parsed with the same parser and
normalizer as recipe lines, so a recipe's "2 cups flour" and an on-hand
"1 cup flour" land on the same canonical key and can be subtracted.
"""

import logging
import math
import re
from collections import defaultdict
from typing import Dict, Iterable, List

from grocery.data.models import (
    AggregatedEntry,
    CanonicalIngredient,
    InventoryEntry,
    NetEntry,
)
from grocery.shopping.normalizer import canonical_key, normalize_ingredient
from grocery.shopping.parser import parse_ingredient

logger = logging.getLogger(__name__)

# Comma, semicolon or newline separated
INVENTORY_SEPARATOR = re.compile(r"[,;\n]+")

# Values the form sends when nothing was entered
_NOTHING_ON_HAND = frozenset({"none", "n/a", "na", "nothing", "-"})

# Leftovers below this are float noise ("0.1 + 0.2" minus "0.3")
COVERED_TOLERANCE = 1e-9


def parse_inventory(
    on_hand_text: str,
    convert_units: bool = False,
    fold_cuts: bool = False,
) -> List[InventoryEntry]:
    """
    Parse free-text on-hand inventory.

    Args:
        on_hand_text: e.g. "2 cups flour, 6 eggs\\n1 lb ground beef"
        convert_units: Apply the same unit folds as the recipe side
        fold_cuts: Apply the same name folding policy as the recipe side

    Returns:
        Normalized InventoryEntry records, one per canonical key (repeated
        items are summed), sorted by key
    """
    if not on_hand_text or on_hand_text.strip().lower() in _NOTHING_ON_HAND:
        return []

    amounts: Dict[CanonicalIngredient, List[float]] = defaultdict(list)
    for piece in INVENTORY_SEPARATOR.split(on_hand_text):
        parsed = parse_ingredient(piece)
        if parsed is None:
            continue

        normalized = normalize_ingredient(
            parsed, convert_units=convert_units, fold_cuts=fold_cuts
        )
        if not normalized.name:
            logger.debug(f"Ignoring on-hand item with no name: '{piece.strip()}'")
            continue

        key = CanonicalIngredient(name=normalized.name, unit=normalized.unit)
        amounts[key].append(normalized.quantity)

    return [
        InventoryEntry(quantity=math.fsum(amounts[key]), unit=key.unit, name=key.name)
        for key in sorted(amounts)
    ]


def subtract_inventory(
    aggregated: Iterable[AggregatedEntry],
    inventory: Iterable[InventoryEntry],
    fold_cuts: bool = False,
) -> List[NetEntry]:
    """
    Subtract on-hand quantities from aggregated needs.

    Matching is by exact canonical key. The result is floored at zero and
    entries fully covered by inventory are dropped.
    """
    on_hand: Dict[CanonicalIngredient, float] = defaultdict(float)
    for item in inventory:
        on_hand[canonical_key(item.name, item.unit, fold_cuts=fold_cuts)] += item.quantity

    net: List[NetEntry] = []
    for entry in aggregated:
        available = on_hand.get(entry.canonical, 0.0)
        needed = entry.total_quantity - available
        if needed < COVERED_TOLERANCE:
            logger.debug(f"'{entry.canonical.name}' fully covered by inventory")
            continue
        net.append(NetEntry(canonical=entry.canonical, needed_quantity=needed))

    return net


def reconcile(
    aggregated: Iterable[AggregatedEntry],
    on_hand_text: str,
    convert_units: bool = False,
    fold_cuts: bool = False,
) -> List[NetEntry]:
    """
    Net shopping needs after what the user already owns.

    Args:
        aggregated: Aggregator output
        on_hand_text: Free-text inventory; empty means nothing owned
        convert_units: Unit fold policy (must match the recipe side)
        fold_cuts: Name folding policy (must match the recipe side)

    Returns:
        NetEntry list with needed_quantity = max(0, total - on_hand),
        zero entries dropped
    """
    inventory = parse_inventory(
        on_hand_text, convert_units=convert_units, fold_cuts=fold_cuts
    )
    if inventory:
        logger.debug(f"Parsed {len(inventory)} on-hand items")
    return subtract_inventory(aggregated, inventory, fold_cuts=fold_cuts)
