"""
Grocery consolidation engine.

Turns free-text recipe ingredient lists into one deduplicated, categorized
shopping list net of what the user already has on hand.
"""

from grocery.data.models import ConsolidationResult, ShoppingList
from grocery.shopping.engine import ShoppingListBuilder, consolidate
from grocery.shopping.formatter import render_text

__all__ = [
    "ConsolidationResult",
    "ShoppingList",
    "ShoppingListBuilder",
    "consolidate",
    "render_text",
]

__version__ = "1.0.0"
