"""
Ingredient line extraction from generated recipe text.

Recipe text comes from the meal-plan generator with loosely formatted section
headers ("Ingredients:", "**Instructions**", "### Macros"). This module finds
the ingredient sections and returns one RawIngredientLine per ingredient.

A recipe without a recognizable ingredient section yields no lines; it never
raises, so one malformed recipe cannot abort a whole meal plan.
"""

import logging
import re
from typing import Iterator, List, Optional, Tuple

from grocery.data.models import PlanSections, RawIngredientLine
from grocery.ingredient_canon import UNQUANTIFIED_QUALIFIERS
from grocery.shopping.normalizer import is_descriptive

logger = logging.getLogger(__name__)

# Bullets, dashes and list numbering in front of a line ("- ", "• ", "3. ")
BULLET_PATTERN = re.compile(r"^\s*(?:[-–—•*·▪◦+>]+\s*|\d+[.)]\s+)+")

# Headers are matched after markdown decoration has been removed
SECTION_HEADER = re.compile(
    r"^(?P<name>"
    r"ingredients?"
    r"|instructions?|directions?|method|steps|preparation"
    r"|prep(?:aration)? time|cook(?:ing)? time|total time|time"
    r"|macros?|macronutrients|nutrition(?:al)?(?: info(?:rmation)?| facts)?"
    r"|notes?|tips?|servings?|serves|yield"
    r"|shopping list|grocery list|meal plan"
    r")\b\s*(?:\([^)]*\))?\s*(?P<sep>[:\-–—])?\s*(?P<rest>.*)$",
    re.IGNORECASE,
)
RECIPE_TITLE = re.compile(r"^recipes?\b\s*(?:#?\d+)?\s*[:\-–—.]?\s*(?P<title>.*)$", re.IGNORECASE)
SHOPPING_HEADING = re.compile(r"^(?:shopping|grocery) list\b", re.IGNORECASE)
LEADING_NUMBER = re.compile(r"^\s*(?:\d|[½⅓⅔¼¾⅕⅖⅗⅘⅙⅚⅛⅜⅝⅞])")


def strip_bullet(line: str) -> str:
    """Remove leading bullet/dash markers and list numbering."""
    return BULLET_PATTERN.sub("", line).strip()


def _undecorate(line: str) -> str:
    """Remove markdown heading marks, emphasis and bullets around a line."""
    text = line.strip()
    text = re.sub(r"^#+\s*", "", text)
    text = strip_bullet(text)
    return text.replace("**", "").replace("__", "").strip(" *_\t")


def _is_emphasized(line: str) -> bool:
    """Markdown heading or a line that is bold from end to end."""
    text = line.strip()
    if text.startswith("#"):
        return True
    # Dash bullets only; "*" would eat the bold markers
    text = re.sub(r"^[-–—•·▪◦+>]+\s*", "", text).rstrip(": ")
    return len(text) > 4 and text.startswith("**") and text.endswith("**")


def match_section_header(line: str) -> Optional[Tuple[str, str]]:
    """
    Recognize a section header line.

    Args:
        line: Raw line, e.g. "**Ingredients (serves 4):**"

    Returns:
        (section name lower-cased, inline content after the header) or None
    """
    text = _undecorate(line)
    match = SECTION_HEADER.match(text)
    if not match:
        return None

    name = match.group("name").lower()
    rest = match.group("rest").strip()
    if name.startswith("ingredient"):
        # "Ingredients for the dough" is not a header, but "Ingredients
        # needed:" is; words after the name need a closing colon
        if rest and not match.group("sep"):
            if not text.endswith(":"):
                return None
            rest = ""
        name = "ingredients"
    return name, rest.strip(" *_")


def match_recipe_title(line: str) -> Optional[str]:
    """
    Recognize a recipe title line.

    "Recipe 2: Chicken Tacos", "### Beef Stew" and "**Monday - Salmon Bowls**"
    are titles; section headers and "For the sauce:" sub-headers are not.
    """
    text = _undecorate(line)
    if not text or LEADING_NUMBER.match(text) or match_section_header(line):
        return None

    recipe_match = RECIPE_TITLE.match(text)
    if recipe_match:
        return (recipe_match.group("title") or text).strip(" :")

    if _is_emphasized(line) and not text.lower().startswith("for "):
        return text.strip(" :")
    return None


def is_aggregatable(text: str) -> bool:
    """False for lines like "Salt and pepper to taste" that carry no quantity."""
    if not text:
        return False
    if UNQUANTIFIED_QUALIFIERS.search(text) and not LEADING_NUMBER.match(text):
        return False
    return True


def _ends_ingredients(line: str) -> bool:
    """Only a markdown heading or a "Recipe ..." line closes an ingredient list."""
    return line.strip().startswith("#") or bool(RECIPE_TITLE.match(_undecorate(line)))


def _starts_recipe(line: str, in_ingredients: bool) -> Optional[str]:
    """Recipe title on this line, or None. Bold group labels inside an
    ingredient list ("**Marinade:**") are not titles."""
    title = match_recipe_title(line)
    if title and in_ingredients and not _ends_ingredients(line):
        return None
    return title


def split_inline_list(inline: str) -> List[str]:
    """
    Split an inline ingredient list on commas.

    A piece made only of preparation words stays with the item before it:
    "1 lb ground beef, browned, 2 cloves garlic" gives
    ["1 lb ground beef, browned", "2 cloves garlic"].
    """
    items: List[str] = []
    for piece in inline.split(","):
        piece = piece.strip()
        if not piece:
            continue
        if items and not LEADING_NUMBER.match(piece) and is_descriptive(piece):
            items[-1] = f"{items[-1]}, {piece}"
        else:
            items.append(piece)
    return items


def _iter_candidates(text: str, recipe: str) -> Iterator[Tuple[str, str]]:
    """Yield (candidate line, recipe) for every line inside an ingredient section."""
    current_recipe = recipe
    in_ingredients = False

    for raw_line in (text or "").splitlines():
        if not raw_line.strip():
            continue

        header = match_section_header(raw_line)
        if header:
            name, inline = header
            in_ingredients = name == "ingredients"
            if in_ingredients and inline:
                # "Ingredients: 2 eggs, 1 cup milk"
                for item in split_inline_list(inline):
                    yield item, current_recipe
            continue

        title = _starts_recipe(raw_line, in_ingredients)
        if title:
            current_recipe = title
            in_ingredients = False
            continue
        if in_ingredients and match_recipe_title(raw_line):
            # Group label such as "**Salad**"
            continue

        if in_ingredients:
            yield raw_line, current_recipe


def extract_with_dropped(
    text: str, recipe: str = ""
) -> Tuple[List[RawIngredientLine], List[RawIngredientLine]]:
    """
    Extract ingredient lines and report the ones that were discarded.

    Args:
        text: Recipe text for one or more recipes
        recipe: Name to attach to lines before any recipe title is seen

    Returns:
        (kept lines, dropped lines)
    """
    kept: List[RawIngredientLine] = []
    dropped: List[RawIngredientLine] = []

    for candidate, source in _iter_candidates(text, recipe):
        cleaned = re.sub(r"\s+", " ", _undecorate(candidate)).strip()
        if not cleaned:
            continue
        if cleaned.endswith(":") and not LEADING_NUMBER.match(cleaned):
            # Sub-header such as "For the sauce:"
            continue
        if not is_aggregatable(cleaned):
            logger.debug(f"Dropping unquantified line '{cleaned}' ({source or 'unnamed'})")
            dropped.append(RawIngredientLine(text=cleaned, recipe=source))
            continue
        kept.append(RawIngredientLine(text=cleaned, recipe=source))

    if not kept:
        logger.debug(f"No ingredient lines found in recipe '{recipe or 'unnamed'}'")
    return kept, dropped


def extract_ingredient_lines(text: str, recipe: str = "") -> List[RawIngredientLine]:
    """
    Extract ingredient lines from recipe text.

    Args:
        text: Recipe text containing an "Ingredients" section
        recipe: Recipe name for traceability

    Returns:
        List of RawIngredientLine; empty when no section is found
    """
    kept, _ = extract_with_dropped(text, recipe)
    return kept


def split_recipes(text: str) -> List[str]:
    """
    Split a multi-recipe block at recipe title lines.

    Args:
        text: Recipes section of a generated meal plan

    Returns:
        One text chunk per recipe (each starting with its title line).
        Text before the first title is its own chunk; chunks with nothing
        but headings are skipped.
    """
    chunks: List[List[str]] = [[]]
    in_ingredients = False
    for line in (text or "").splitlines():
        header = match_section_header(line)
        if header:
            in_ingredients = header[0] == "ingredients"
        elif _starts_recipe(line, in_ingredients):
            in_ingredients = False
            if any(previous.strip() for previous in chunks[-1]):
                chunks.append([])
        chunks[-1].append(line)

    # A chunk holding only headings ("Recipes") is not a recipe
    return [
        "\n".join(chunk).strip()
        for chunk in chunks
        if any(line.strip() and not match_recipe_title(line) for line in chunk)
    ]


def split_plan_sections(text: str) -> PlanSections:
    """
    Split a generated meal plan into its Meal Plan, Recipes and Shopping
    List parts.

    The Recipes part starts at the first line that reads like "Recipes" or
    "Recipe 1: ...", the Shopping List part at the first "Shopping List"
    heading. Missing parts come back as empty strings.
    """
    lines = (text or "").splitlines()
    recipes_at: Optional[int] = None
    shopping_at: Optional[int] = None

    for index, line in enumerate(lines):
        heading = _undecorate(line)
        if recipes_at is None and RECIPE_TITLE.match(heading):
            recipes_at = index
        elif shopping_at is None and SHOPPING_HEADING.match(heading):
            shopping_at = index

    def _part(start: Optional[int], end: Optional[int]) -> str:
        if start is None:
            return ""
        return "\n".join(lines[start:end]).strip()

    boundaries = sorted(i for i in (recipes_at, shopping_at) if i is not None)
    first = boundaries[0] if boundaries else len(lines)
    meal_plan = "\n".join(lines[:first]).strip()

    recipes_end = shopping_at if shopping_at is not None and (
        recipes_at is not None and shopping_at > recipes_at
    ) else None
    shopping_end = recipes_at if recipes_at is not None and (
        shopping_at is not None and recipes_at > shopping_at
    ) else None

    return PlanSections(
        meal_plan=meal_plan,
        recipes=_part(recipes_at, recipes_end),
        shopping_list=_part(shopping_at, shopping_end),
    )
