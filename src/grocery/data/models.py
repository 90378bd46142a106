"""
Data models for the grocery consolidation engine.

These models define the records that flow through the pipeline:
- RawIngredientLine: a line lifted from a recipe's ingredient section
- ParsedIngredient / InventoryEntry: quantity, unit and name
- CanonicalIngredient: the (name, unit) grouping key
- AggregatedEntry / NetEntry: summed and post-inventory quantities
- ShoppingList: the grouped, display-ready result

Engine records are frozen; every stage returns new values.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class RawIngredientLine:
    """Single ingredient line and the recipe it came from."""

    text: str
    recipe: str = ""  # Recipe title, for tracing only

    def __str__(self) -> str:
        return f"{self.text} [{self.recipe}]" if self.recipe else self.text


@dataclass(frozen=True)
class ParsedIngredient:
    """Structured ingredient: quantity, unit and name.

    quantity defaults to 1 when the line has no leading number
    ("a pinch of salt" -> 1, "", "salt").
    """

    quantity: float
    unit: str
    name: str

    def __post_init__(self):
        if self.quantity < 0:
            raise ValueError(f"quantity must be >= 0, got {self.quantity}")

    def __str__(self) -> str:
        parts = [f"{self.quantity:g}"]
        if self.unit:
            parts.append(self.unit)
        parts.append(self.name)
        return " ".join(parts)


# On-hand inventory items share the parsed shape so that both sides of the
# reconciliation go through identical normalization.
InventoryEntry = ParsedIngredient


@dataclass(frozen=True, order=True)
class CanonicalIngredient:
    """Normalized (name, unit) key used for grouping."""

    name: str
    unit: str

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {"name": self.name, "unit": self.unit}


@dataclass(frozen=True)
class AggregatedEntry:
    """One row per canonical key, summed across every recipe."""

    canonical: CanonicalIngredient
    total_quantity: float
    recipes: Tuple[str, ...] = ()  # Contributing recipes (traceability)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            **self.canonical.to_dict(),
            "total_quantity": self.total_quantity,
            "recipes": list(self.recipes),
        }


@dataclass(frozen=True)
class NetEntry:
    """Quantity left to buy after subtracting on-hand inventory."""

    canonical: CanonicalIngredient
    needed_quantity: float

    def __post_init__(self):
        if self.needed_quantity < 0:
            raise ValueError(
                f"needed_quantity must be >= 0, got {self.needed_quantity}"
            )

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {**self.canonical.to_dict(), "needed_quantity": self.needed_quantity}


class Category(Enum):
    """Grocery store department. Declaration order is display order."""

    PRODUCE = "Produce"
    FRUIT = "Fruit"
    MEAT = "Meat"
    DAIRY = "Dairy"
    PANTRY = "Pantry"
    OTHER = "Other"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class ShoppingSection:
    """Display rows for one category."""

    label: str
    items: Tuple[str, ...]

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {"category": self.label, "items": list(self.items)}


@dataclass(frozen=True)
class ShoppingList:
    """Ordered (category label, items) pairs ready for rendering.

    An empty list is the engine's only explicit signal that no shopping list
    could be generated.
    """

    sections: Tuple[ShoppingSection, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not any(section.items for section in self.sections)

    def __bool__(self) -> bool:
        return not self.is_empty

    def __iter__(self):
        for section in self.sections:
            yield section.label, list(section.items)

    def get(self, label: str) -> List[str]:
        """Items for a category label, or an empty list."""
        for section in self.sections:
            if section.label == label:
                return list(section.items)
        return []

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "empty": self.is_empty,
            "sections": [section.to_dict() for section in self.sections],
        }


@dataclass(frozen=True)
class PlanSections:
    """Text parts of a generated meal plan."""

    meal_plan: str = ""
    recipes: str = ""
    shopping_list: str = ""


@dataclass(frozen=True)
class ConsolidationResult:
    """Final shopping list plus every intermediate stage, for debugging."""

    shopping_list: ShoppingList
    lines: Tuple[RawIngredientLine, ...] = ()
    parsed: Tuple[ParsedIngredient, ...] = ()
    dropped: Tuple[RawIngredientLine, ...] = ()
    aggregated: Tuple[AggregatedEntry, ...] = ()
    inventory: Tuple[InventoryEntry, ...] = ()
    net: Tuple[NetEntry, ...] = ()
    counts: Tuple[Tuple[str, int], ...] = ()  # (stage, count) pairs

    @property
    def stats(self) -> Dict[str, int]:
        """Stage counts as a dictionary."""
        return dict(self.counts)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            **self.shopping_list.to_dict(),
            "aggregated": [entry.to_dict() for entry in self.aggregated],
            "net": [entry.to_dict() for entry in self.net],
            "dropped": [line.text for line in self.dropped],
            "stats": self.stats,
        }
