"""
Shopping category classification.

Categories are assigned by an ordered list of (predicate, Category) rules,
first match wins. The default rules are built from the keyword table in
grocery.ingredient_canon; callers can pass their own rule list.
"""

import re
from dataclasses import dataclass
from typing import Callable, Sequence, Tuple

from grocery.data.models import Category
from grocery.ingredient_canon import CATEGORY_KEYWORDS

Predicate = Callable[[str], bool]


def _term_pattern(terms: Sequence[str]):
    """Whole-word match for any term, allowing a plural ending."""
    if not terms:
        return None
    alternatives = "|".join(
        re.escape(term).replace(r"\ ", r"\s+")
        for term in sorted(terms, key=len, reverse=True)
    )
    return re.compile(rf"\b(?:{alternatives})(?:s|es)?\b")


@dataclass(frozen=True)
class KeywordRule:
    """Matches names containing any keyword and none of the exclusions."""

    keywords: Tuple[str, ...]
    exclusions: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "_keyword_pattern", _term_pattern(self.keywords))
        object.__setattr__(self, "_exclusion_pattern", _term_pattern(self.exclusions))

    def __call__(self, name: str) -> bool:
        if self._keyword_pattern is None or not self._keyword_pattern.search(name):
            return False
        return self._exclusion_pattern is None or not self._exclusion_pattern.search(name)


def _build_default_rules() -> Tuple[Tuple[Predicate, Category], ...]:
    return tuple(
        (KeywordRule(tuple(keywords), tuple(exclusions)), Category[category.upper()])
        for category, keywords, exclusions in CATEGORY_KEYWORDS
    )


DEFAULT_RULES: Tuple[Tuple[Predicate, Category], ...] = _build_default_rules()


def categorize(
    name: str,
    rules: Sequence[Tuple[Predicate, Category]] = DEFAULT_RULES,
) -> Category:
    """
    Categorize ingredient by store section.

    Args:
        name: Canonical ingredient name
        rules: Ordered (predicate, category) pairs

    Returns:
        Category of the first matching rule, or Category.OTHER
    """
    name_lower = name.lower().strip()
    if not name_lower:
        return Category.OTHER

    for predicate, category in rules:
        if predicate(name_lower):
            return category

    return Category.OTHER
