"""
Canonical ingredient vocabulary for shopping list consolidation.

This file provides the read-only rule tables used by the parser, normalizer
and categorizer:
- Unit synonyms (one canonical token per unit)
- Optional same-dimension unit folds
- Descriptive modifiers stripped from ingredient names
- Name folding rules (multi-word variants -> one head noun)
- Category keyword rules

Everything here is loaded once at import and never mutated.
"""

import re
from types import MappingProxyType
from typing import FrozenSet, Mapping, Pattern, Tuple

# =============================================================================
# UNIT SYNONYMS
# =============================================================================
# Maps canonical unit -> set of spellings that should normalize to it
_UNIT_VARIANTS = {
    # Volume
    "tsp": {"tsp", "tsps", "teaspoon", "teaspoons"},
    "tbsp": {"tbsp", "tbsps", "tbs", "tbl", "tablespoon", "tablespoons"},
    "cups": {"cup", "cups", "c"},
    "fl oz": {"fl oz", "fl ozs", "fluid ounce", "fluid ounces"},
    "pints": {"pint", "pints", "pt", "pts"},
    "quarts": {"quart", "quarts", "qt", "qts"},
    "gallons": {"gallon", "gallons", "gal"},
    "ml": {"ml", "mls", "milliliter", "milliliters", "millilitre", "millilitres"},
    "liters": {"l", "liter", "liters", "litre", "litres"},

    # Weight
    "oz": {"oz", "ozs", "ounce", "ounces"},
    "lbs": {"lb", "lbs", "pound", "pounds"},
    "g": {"g", "gram", "grams"},
    "kg": {"kg", "kgs", "kilogram", "kilograms"},

    # Count / package
    "cloves": {"clove", "cloves"},
    "cans": {"can", "cans", "tin", "tins"},
    "jars": {"jar", "jars"},
    "packages": {"package", "packages", "pkg", "pkgs", "packet", "packets"},
    "slices": {"slice", "slices"},
    "pieces": {"piece", "pieces"},
    "bunches": {"bunch", "bunches"},
    "heads": {"head", "heads"},
    "stalks": {"stalk", "stalks"},
    "sprigs": {"sprig", "sprigs"},
    "sticks": {"stick", "sticks"},
    "bags": {"bag", "bags"},
    "bottles": {"bottle", "bottles"},
    "boxes": {"box", "boxes"},
    "pinch": {"pinch", "pinches"},
    "dash": {"dash", "dashes"},
}

UNIT_SYNONYMS: Mapping[str, str] = MappingProxyType({
    variant: canonical
    for canonical, variants in _UNIT_VARIANTS.items()
    for variant in variants
})

CANONICAL_UNITS: FrozenSet[str] = frozenset(_UNIT_VARIANTS)

# Parser vocabulary, longest first so "fl oz" wins over "fl" and "oz"
UNIT_TOKENS: Tuple[str, ...] = tuple(
    sorted(UNIT_SYNONYMS, key=lambda token: (-len(token), token))
)

VOLUME_UNITS: FrozenSet[str] = frozenset({
    "tsp", "tbsp", "cups", "fl oz", "pints", "quarts", "gallons", "ml", "liters",
})
WEIGHT_UNITS: FrozenSet[str] = frozenset({"oz", "lbs", "g", "kg"})

# =============================================================================
# UNIT FOLDS (optional conversion, off by default)
# =============================================================================
# unit -> (target unit, multiplier). Targets are never folded again; cups and
# tbsp are never merged, nor weight with volume.
UNIT_FOLDS: Mapping[str, Tuple[str, float]] = MappingProxyType({
    "tsp": ("tbsp", 1.0 / 3.0),
    "fl oz": ("cups", 1.0 / 8.0),
    "pints": ("cups", 2.0),
    "quarts": ("cups", 4.0),
    "gallons": ("cups", 16.0),
    "kg": ("g", 1000.0),
    "liters": ("ml", 1000.0),
})

# =============================================================================
# NAME MODIFIERS
# =============================================================================
# Descriptive words and phrases removed from ingredient names. Phrases are
# matched on whole words after punctuation has been replaced by spaces.
DESCRIPTIVE_MODIFIERS: Tuple[str, ...] = (
    # Qualifiers
    "to taste", "for garnish", "for serving", "as needed", "if desired",
    "or more", "or less", "plus more", "optional", "divided",
    "at room temperature", "room temperature",
    # Size / freshness
    "extra large", "large", "medium", "small", "jumbo", "baby",
    "fresh", "freshly", "ripe",
    # Grade / style
    "extra virgin", "all purpose", "boneless", "skinless", "bone in", "skin on",
    "organic", "unsalted", "salted", "low sodium", "reduced sodium",
    "lean", "extra lean", "plain",
    # Preparation
    "chopped", "finely", "roughly", "coarsely", "thinly", "thickly",
    "minced", "diced", "sliced", "cubed", "crushed", "grated", "shredded",
    "julienned", "halved", "quartered", "trimmed", "peeled", "seeded",
    "cored", "pitted", "rinsed", "drained", "beaten", "whisked", "melted",
    "softened", "cooked", "uncooked", "browned", "toasted", "packed",
    "sifted", "cut into pieces",
)

# Leading filler removed from unquantified lines ("a pinch of salt")
LEADING_FILLER: Pattern = re.compile(
    r"^(?:(?:a|an|some)\s+)?"
    r"(?:(?:pinch|dash|splash|handful|few|couple|little|bit|sprinkle)\s+)?"
    r"(?:of\s+)?",
    re.IGNORECASE,
)

# Qualifiers that make an unquantified line impossible to aggregate
UNQUANTIFIED_QUALIFIERS: Pattern = re.compile(
    r"\b(?:to taste|optional|as needed|for garnish|for serving)\b",
    re.IGNORECASE,
)

# =============================================================================
# SINGULARIZATION
# =============================================================================
# Words that look plural but are not (or whose naive singular is wrong)
UNCOUNTABLE_WORDS: FrozenSet[str] = frozenset({
    "molasses", "hummus", "asparagus", "couscous", "swiss", "citrus",
    "grits", "oats", "greens", "brussels", "lemongrass", "series",
    "schnapps", "bass", "watercress",
})

IRREGULAR_SINGULARS: Mapping[str, str] = MappingProxyType({
    "leaves": "leaf",
    "loaves": "loaf",
    "halves": "half",
    "knives": "knife",
    "cookies": "cookie",
    "brownies": "brownie",
    "calves": "calf",
    "geese": "goose",
})

# =============================================================================
# NAME FOLDING RULES
# =============================================================================
# Ordered (pattern, canonical name); first match wins. Patterns run against
# the cleaned, singularized name. Every canonical name here must normalize
# to itself.
NAME_FOLD_RULES: Tuple[Tuple[Pattern, str], ...] = tuple(
    (re.compile(pattern), canonical)
    for pattern, canonical in (
        (r"\bground (?:beef|chuck|sirloin)\b|^hamburger(?: meat)?$", "ground beef"),
        (r"\b(?:ribeye|rib eye|sirloin|strip steak|steak)\b", "ribeye steak"),
        (r"\b(?:scallion|green onion|spring onion)\b", "green onion"),
        (r"^(?:chicken )?eggs?$", "eggs"),
        (r"^egg white$", "egg white"),
        (r"^egg yolk$", "egg yolk"),
        (r"\bground turkey\b", "ground turkey"),
        (r"\bground pork\b", "ground pork"),
        (r"\bbell pepper\b|^(?:red|green|yellow|orange) pepper$", "bell pepper"),
        (r"\bcilantro\b|\bcoriander lea(?:f|ve)\b", "cilantro"),
        (r"^(?:garlic|garlic clove|clove garlic|clove of garlic|head garlic)$", "garlic"),
        (r"\bparmesan\b|\bparmigiano\b", "parmesan cheese"),
        (r"\bcheddar\b", "cheddar cheese"),
        (r"\bmozzarella\b", "mozzarella cheese"),
        (r"^(?:olive oil|oil olive)$", "olive oil"),
        (r"^(?:kosher|sea|table|fine) salt$|^salt$", "salt"),
        (r"^(?:ground )?black pepper(?:corn)?$|^pepper$", "black pepper"),
        (r"^(?:white|granulated|cane|caster) sugar$|^sugar$", "sugar"),
        (r"^(?:white |wheat |plain )?flour$", "flour"),
        (r"^(?:long grain |white |jasmine |basmati )?rice$", "rice"),
        (r"^(?:chicken stock|chicken broth)$", "chicken broth"),
        (r"^(?:beef stock|beef broth)$", "beef broth"),
        (r"^(?:vegetable stock|vegetable broth|veggie broth)$", "vegetable broth"),
        (r"^(?:yellow |white |sweet |spanish )?onion$", "onion"),
        (r"^(?:roma |plum |vine |cherry )?tomato$", "tomato"),
        (r"^(?:russet |yukon gold |red |gold )?potato$", "potato"),
        (r"^(?:whole |skim |low fat |reduced fat )?milk$", "milk"),
        (r"^(?:butter|butter stick|stick butter)$", "butter"),
    )
)

# Optional: fold protein cuts onto the animal. Off by default so that
# "chicken breast" and "chicken thigh" remain separate rows.
CUT_FOLD_RULES: Tuple[Tuple[Pattern, str], ...] = tuple(
    (re.compile(pattern), canonical)
    for pattern, canonical in (
        (r"^chicken (?:breast|thigh|drumstick|leg|wing|tender|tenderloin|cutlet)$", "chicken"),
        (r"^pork (?:chop|loin|tenderloin|shoulder|butt|rib)$", "pork"),
        (r"^(?:salmon|cod|tilapia|halibut) fillet$", "fish fillet"),
        (r"^beef (?:chuck|brisket|roast|stew meat|short rib)$", "beef"),
    )
)

# =============================================================================
# CATEGORY KEYWORDS
# =============================================================================
# Each entry: (category name, keywords, exclusion terms). Evaluated in order,
# first match wins. Keywords match whole words with an optional plural.
CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...], Tuple[str, ...]], ...] = (
    (
        "meat",
        (
            "beef", "chicken", "pork", "turkey", "bacon", "sausage", "ham",
            "lamb", "steak", "veal", "prosciutto", "chorizo", "pancetta",
            "salami", "pepperoni", "duck", "ground beef", "meatball",
            "salmon", "tuna", "shrimp", "prawn", "cod", "tilapia", "halibut",
            "fish", "crab", "lobster", "scallop", "mussel", "clam", "anchovy",
        ),
        ("broth", "stock", "bouillon", "sauce", "seasoning", "gravy"),
    ),
    (
        "dairy",
        (
            "milk", "cheese", "butter", "cream", "yogurt", "sour cream",
            "eggs", "egg", "egg white", "egg yolk", "buttermilk",
            "half and half", "ghee", "ricotta", "feta", "parmesan",
            "mozzarella", "cheddar", "cream cheese", "cottage cheese",
        ),
        (
            "peanut butter", "almond butter", "coconut milk", "almond milk",
            "oat milk", "soy milk", "coconut cream", "cream of tartar",
            "eggplant", "butternut",
        ),
    ),
    (
        "fruit",
        (
            "apple", "banana", "berry", "strawberry", "blueberry", "raspberry",
            "blackberry", "cranberry", "orange", "grape", "mango", "pineapple",
            "peach", "pear", "plum", "cherry", "melon", "watermelon",
            "cantaloupe", "kiwi", "pomegranate", "apricot", "nectarine",
        ),
        (
            "vinegar", "jam", "jelly", "extract", "preserve", "sauce",
            "tomato", "pepper", "dried",
        ),
    ),
    (
        "produce",
        (
            "onion", "green onion", "garlic", "shallot", "tomato", "potato",
            "sweet potato", "carrot", "celery", "bell pepper", "jalapeno",
            "chili", "lettuce", "spinach", "kale", "arugula", "cabbage",
            "broccoli", "cauliflower", "zucchini", "squash", "cucumber",
            "mushroom", "avocado", "lemon", "lime", "cilantro", "parsley",
            "basil", "mint", "thyme", "rosemary", "dill", "ginger", "corn",
            "pea", "green bean", "asparagus", "eggplant", "radish", "beet",
            "leek", "bok choy", "sprout", "greens",
        ),
        ("powder", "paste", "sauce", "ground", "flake", "dried", "canned"),
    ),
    (
        "pantry",
        (
            "flour", "sugar", "salt", "black pepper", "pepper", "oil",
            "olive oil", "vinegar", "rice", "pasta", "spaghetti", "penne",
            "noodle", "macaroni", "bean", "lentil", "chickpea", "quinoa",
            "oat", "oats", "broth", "stock", "bouillon", "sauce", "paste",
            "soy sauce", "honey", "syrup", "maple syrup", "yeast",
            "baking soda", "baking powder", "cornstarch", "vanilla",
            "cocoa", "chocolate", "breadcrumb", "panko", "tortilla", "bread",
            "cracker", "mustard", "ketchup", "mayonnaise", "salsa",
            "cumin", "paprika", "oregano", "cinnamon", "nutmeg", "chili powder",
            "garlic powder", "onion powder", "curry", "turmeric", "seasoning",
            "ginger", "thyme", "rosemary", "parsley", "basil", "dill",
            "bay leaf", "red pepper flake", "peanut butter", "almond butter",
            "coconut milk", "nut", "almond", "walnut", "pecan", "peanut",
            "raisin", "jam", "jelly", "tomato sauce", "tomato paste",
        ),
        (),
    ),
)
