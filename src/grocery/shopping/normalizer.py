"""
Name and unit normalization.

Collapses descriptive variation ("2 large eggs, beaten" / "eggs") into one
canonical name and maps unit synonyms onto one token per unit. The same
functions are used for recipe lines and for on-hand inventory, so that both
sides of reconciliation produce identical keys.

All functions are pure: output depends only on the arguments and the
read-only tables in ingredient_canon.
"""

import re
from typing import Tuple

from grocery.data.models import CanonicalIngredient, ParsedIngredient
from grocery.ingredient_canon import (
    CUT_FOLD_RULES,
    DESCRIPTIVE_MODIFIERS,
    IRREGULAR_SINGULARS,
    NAME_FOLD_RULES,
    UNCOUNTABLE_WORDS,
    UNIT_FOLDS,
    UNIT_SYNONYMS,
)

_PARENTHETICAL = re.compile(r"\([^()]*\)|\[[^\[\]]*\]")
_NON_ALPHA = re.compile(r"[^a-z]+")
_WHITESPACE = re.compile(r"\s+")

# Longest phrases first so "extra virgin" goes before a shorter overlap
_MODIFIER_PATTERN = re.compile(
    r"\b(?:"
    + "|".join(
        re.escape(modifier).replace(r"\ ", r"\s+")
        for modifier in sorted(DESCRIPTIVE_MODIFIERS, key=len, reverse=True)
    )
    + r")\b"
)

_FOLD_RULES_WITH_CUTS = CUT_FOLD_RULES + NAME_FOLD_RULES


def normalize_unit(raw: str) -> str:
    """
    Map a unit spelling to its canonical token.

    Args:
        raw: Unit as written ("Tablespoons", "lb.", "fl. oz")

    Returns:
        Canonical token ("tbsp", "lbs", "fl oz"). Unknown units come back
        lower-cased and trimmed so they form their own group.

    Examples:
        normalize_unit("tablespoon") -> "tbsp"
        normalize_unit("Pounds") -> "lbs"
        normalize_unit("handful") -> "handful"
    """
    if not raw:
        return ""

    cleaned = _WHITESPACE.sub(" ", raw.lower().replace(".", " ")).strip()
    return UNIT_SYNONYMS.get(cleaned, cleaned)


def singularize(word: str) -> str:
    """Singularize one lower-case word. Stable: singularize(singularize(w)) == singularize(w)."""
    if word in UNCOUNTABLE_WORDS or len(word) <= 3:
        return word
    if word in IRREGULAR_SINGULARS:
        return IRREGULAR_SINGULARS[word]
    if word.endswith("ies") and len(word) > 4:
        return word[:-3] + "y"
    if word.endswith("oes"):
        return word[:-2]
    if word.endswith(("ches", "shes", "sses", "xes", "zzes")):
        return word[:-2]
    if word.endswith("s") and not word.endswith(("ss", "us", "is")):
        return word[:-1]
    return word


def _strip_modifiers(name: str) -> str:
    # Repeat until stable: removing one phrase can join the words of another
    while True:
        stripped = _WHITESPACE.sub(" ", _MODIFIER_PATTERN.sub(" ", name)).strip()
        if stripped == name:
            return stripped
        name = stripped


def is_descriptive(text: str) -> bool:
    """True when text is made only of descriptive modifiers ("finely chopped")."""
    words = _WHITESPACE.sub(" ", _NON_ALPHA.sub(" ", text.lower())).strip()
    return bool(words) and not _strip_modifiers(words)


def normalize_name(raw: str, fold_cuts: bool = False) -> str:
    """
    Reduce an ingredient name to its canonical grouping key.

    Steps: lower-case, drop parentheticals and the preparation tail after
    the first comma, replace non-letters with spaces, remove descriptive
    modifiers, singularize the head noun, then apply the first matching
    name-folding rule.

    Args:
        raw: Ingredient name as parsed ("Large Eggs, beaten")
        fold_cuts: Also fold protein cuts onto the animal
            ("chicken thigh" -> "chicken")

    Returns:
        Canonical name ("eggs"). Idempotent.
    """
    name = raw.lower()
    name = _PARENTHETICAL.sub(" ", name)
    name = name.split(",", 1)[0]
    name = _WHITESPACE.sub(" ", _NON_ALPHA.sub(" ", name)).strip()
    if not name:
        return ""

    # Singularizing can expose a modifier ("beatens" -> "beaten"), so strip
    # and singularize until nothing changes. A name made only of modifiers
    # ("fresh") keeps its words.
    while True:
        words = (_strip_modifiers(name) or name).split(" ")
        words[-1] = singularize(words[-1])
        candidate = " ".join(words)
        if candidate == name:
            break
        name = candidate

    rules = _FOLD_RULES_WITH_CUTS if fold_cuts else NAME_FOLD_RULES
    for pattern, canonical in rules:
        if pattern.search(name):
            return canonical

    return name


def convert_quantity(quantity: float, unit: str) -> Tuple[float, str]:
    """
    Fold a quantity into the larger unit of its dimension, when a fold exists.

    Only the explicit UNIT_FOLDS table is used: teaspoons become tablespoons,
    fluid ounces/pints/quarts/gallons become cups, kilograms become grams and
    liters become milliliters. Anything else is returned unchanged.

    Args:
        quantity: Amount in the given unit
        unit: Canonical unit token

    Returns:
        (quantity, unit) after folding
    """
    fold = UNIT_FOLDS.get(unit)
    if fold is None:
        return quantity, unit

    target, multiplier = fold
    return quantity * multiplier, target


def canonical_key(name: str, unit: str, fold_cuts: bool = False) -> CanonicalIngredient:
    """Grouping key for a (name, unit) pair."""
    return CanonicalIngredient(
        name=normalize_name(name, fold_cuts=fold_cuts),
        unit=normalize_unit(unit),
    )


def normalize_ingredient(
    parsed: ParsedIngredient,
    convert_units: bool = False,
    fold_cuts: bool = False,
) -> ParsedIngredient:
    """
    Return a new ParsedIngredient with canonical name and unit.

    Args:
        parsed: Parser output
        convert_units: Apply the optional unit fold table
        fold_cuts: Fold protein cuts onto the animal

    Returns:
        Normalized ParsedIngredient (the input is not modified)
    """
    quantity = parsed.quantity
    unit = normalize_unit(parsed.unit)
    if convert_units:
        quantity, unit = convert_quantity(quantity, unit)

    return ParsedIngredient(
        quantity=quantity,
        unit=unit,
        name=normalize_name(parsed.name, fold_cuts=fold_cuts),
    )
