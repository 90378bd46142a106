"""
Ingredient line parser.

Converts one raw ingredient line into quantity, unit and name.

Python-first regex parser - no LLM required. Unit vocabulary comes from
grocery.ingredient_canon.

Examples:
    "2 cups flour"                  -> 2, "cups", "flour"
    "1 1/2 tbsp. olive oil"         -> 1.5, "tbsp", "olive oil"
    "1-2 cloves garlic, minced"     -> 1, "cloves", "garlic, minced"
    "2 (15 oz) cans diced tomatoes" -> 2, "cans", "diced tomatoes"
    "a pinch of salt"               -> 1, "", "salt"
"""

import logging
import re
from typing import Optional, Tuple

from grocery.data.models import ParsedIngredient
from grocery.ingredient_canon import LEADING_FILLER, UNIT_TOKENS
from grocery.shopping.extractor import strip_bullet

logger = logging.getLogger(__name__)

VULGAR_FRACTIONS = {
    "½": 0.5, "⅓": 1 / 3, "⅔": 2 / 3, "¼": 0.25, "¾": 0.75,
    "⅕": 0.2, "⅖": 0.4, "⅗": 0.6, "⅘": 0.8, "⅙": 1 / 6, "⅚": 5 / 6,
    "⅛": 0.125, "⅜": 0.375, "⅝": 0.625, "⅞": 0.875,
}
_VULGAR = "".join(VULGAR_FRACTIONS)

_PARENTHETICAL = re.compile(r"\([^()]*\)|\[[^\[\]]*\]")

# One number: mixed ("1 1/2", "1-1/2", "1½"), fraction ("1/2"), decimal or a lone
# vulgar fraction ("½")
_NUMBER = (
    rf"(?:\d+-\d+\s*/\s*\d+|\d+\s+\d+\s*/\s*\d+|\d+\s*[{_VULGAR}]|\d+\s*/\s*\d+|\d*\.\d+|\d+|[{_VULGAR}])"
)
# A range keeps only its first number ("1-2", "1 to 2", "1 or 2")
QUANTITY_PATTERN = re.compile(
    rf"^(?P<quantity>{_NUMBER})(?:\s*(?:-|–|—|to|or)\s*{_NUMBER})?\s*"
)

UNIT_PATTERN = re.compile(
    r"^(?P<unit>"
    + "|".join(re.escape(token).replace(r"\ ", r"\.?\s*") for token in UNIT_TOKENS)
    + r")\.?(?=\s|$|,)\s*(?:of\s+)?",
    re.IGNORECASE,
)


def parse_quantity(text: str) -> Optional[float]:
    """
    Convert a quantity token to a float.

    Args:
        text: "2", "1.5", "1/2", "1 1/2", "1-1/2", "½" or "1½"

    Returns:
        The numeric value, or None when the token is not a number
    """
    text = re.sub(r"\s*/\s*", "/", text.strip())
    # "1-1/2" is a mixed number, not a range
    text = re.sub(r"^(\d+)-(\d+/)", r"\1 \2", text)
    if not text:
        return None

    whole = 0.0
    if text[-1] in VULGAR_FRACTIONS:
        fraction = VULGAR_FRACTIONS[text[-1]]
        head = text[:-1].strip()
        return (float(head) if head else 0.0) + fraction

    parts = text.split()
    if len(parts) == 2 and "/" in parts[1]:
        whole = float(parts[0])
        text = parts[1]
    elif len(parts) > 1:
        text = "".join(parts)

    if "/" in text:
        numerator, denominator = (piece.strip() for piece in text.split("/", 1))
        try:
            value = float(numerator) / float(denominator)
        except (ValueError, ZeroDivisionError):
            return None
        return whole + value

    try:
        return whole + float(text)
    except ValueError:
        return None


def split_quantity(text: str) -> Tuple[Optional[float], str]:
    """Split a leading quantity from the rest of the line."""
    match = QUANTITY_PATTERN.match(text)
    if not match:
        return None, text

    quantity = parse_quantity(match.group("quantity"))
    if quantity is None:
        return None, text
    return quantity, text[match.end():]


def split_unit(text: str) -> Tuple[str, str]:
    """Split a leading unit token (as written, lower-cased) from the rest."""
    match = UNIT_PATTERN.match(text)
    if not match:
        return "", text

    unit = re.sub(r"\.?\s+", " ", match.group("unit").lower())
    return unit, text[match.end():]


def parse_ingredient(line: str) -> Optional[ParsedIngredient]:
    """
    Parse one ingredient line.

    Args:
        line: Raw line, e.g. "- 2 cups flour (sifted)"

    Returns:
        ParsedIngredient, or None only when the line is empty after
        stripping bullets and whitespace. Lines without a leading number
        default to quantity 1 and unit "".
    """
    text = strip_bullet(line or "")
    if not text:
        return None

    text = re.sub(r"\s+", " ", _PARENTHETICAL.sub(" ", text)).strip()
    if not text:
        # Line was only an aside, e.g. "(see note)"
        text = strip_bullet(line).strip("()[] ")
        return ParsedIngredient(quantity=1.0, unit="", name=text) if text else None

    quantity, rest = split_quantity(text)
    if quantity is None:
        name = LEADING_FILLER.sub("", text, count=1).strip() or text
        return ParsedIngredient(quantity=1.0, unit="", name=name)

    unit, rest = split_unit(rest)
    name = rest.strip(" ,.;:-")
    if not name:
        # "2 cups" with nothing after: keep the unit word as the name
        name = unit or text
        unit = "" if name == unit else unit

    logger.debug(f"Parsed '{line}' -> {quantity} {unit!r} {name!r}")
    return ParsedIngredient(quantity=quantity, unit=unit, name=name)
