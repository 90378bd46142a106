"""
Shopping list formatting.

Turns net entries into a ShoppingList grouped by category, and renders a
ShoppingList as the plain text the document renderer paints
("Produce:" headings followed by "- item" lines).
"""

from collections import defaultdict
from typing import Callable, Dict, Iterable, List

from grocery.data.models import Category, NetEntry, ShoppingList, ShoppingSection
from grocery.shopping.categorizer import categorize

EMPTY_SHOPPING_LIST_MESSAGE = "No shopping list could be generated."


def format_quantity(quantity: float) -> str:
    """
    Format a quantity for display.

    Examples:
        format_quantity(2.0) -> "2"
        format_quantity(1.5) -> "1.5"
        format_quantity(1 / 3) -> "0.33"
    """
    rounded = round(quantity, 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.2f}".rstrip("0").rstrip(".")


def format_item(entry: NetEntry) -> str:
    """Render as "Name: Quantity Unit" (unit omitted when empty)."""
    amount = format_quantity(entry.needed_quantity)
    if entry.canonical.unit:
        amount = f"{amount} {entry.canonical.unit}"
    return f"{entry.canonical.name.title()}: {amount}"


def format_shopping_list(
    entries: Iterable[NetEntry],
    categorizer: Callable[[str], Category] = categorize,
) -> ShoppingList:
    """
    Group net entries into display sections.

    Args:
        entries: Reconciled entries
        categorizer: Name -> Category function

    Returns:
        ShoppingList with sections in Category declaration order, empty
        categories omitted, items sorted by canonical name then unit
    """
    grouped: Dict[Category, List[NetEntry]] = defaultdict(list)
    for entry in entries:
        grouped[categorizer(entry.canonical.name)].append(entry)

    sections = []
    for category in Category:
        members = sorted(
            grouped.get(category, []),
            key=lambda entry: (entry.canonical.name, entry.canonical.unit),
        )
        if members:
            sections.append(
                ShoppingSection(
                    label=category.label,
                    items=tuple(format_item(entry) for entry in members),
                )
            )

    return ShoppingList(sections=tuple(sections))


def render_text(shopping_list: ShoppingList) -> str:
    """
    Render a ShoppingList as plain text for the document renderer.

    Each category becomes a "Label:" heading followed by "- item" lines,
    with a blank line between categories.
    """
    if shopping_list.is_empty:
        return EMPTY_SHOPPING_LIST_MESSAGE

    blocks = []
    for label, items in shopping_list:
        if not items:
            continue
        blocks.append("\n".join([f"{label}:"] + [f"- {item}" for item in items]))
    return "\n\n".join(blocks)
