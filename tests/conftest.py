"""
Pytest configuration and shared fixtures.

Fixtures are reusable test setup that can be injected into tests.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def pancake_recipe():
    """Single recipe with a plain "Ingredients:" header."""
    return """Recipe 1: Pancakes
Ingredients:
- 2 cups flour
- 2 large eggs, beaten
- 1 1/2 cups milk
- 2 tbsp butter, melted
- Salt to taste
Instructions:
1. Mix everything.
2. Cook on a griddle.
"""


@pytest.fixture
def taco_recipe():
    """Recipe with markdown bold headers, as the generator often writes them."""
    return """**Recipe 2: Beef Tacos**
**Ingredients:**
- 1 lb ground beef
- 1 cup flour
- 1 medium onion, diced
- 2 cloves garlic, minced
- 8 small tortillas
- 1 cup shredded cheddar cheese
- 1 tsp chili powder

**Instructions:**
1. Brown the beef.
2. Warm the tortillas.
"""


@pytest.fixture
def meal_plan_text():
    """Whole generated meal plan: plan, recipes and the generator's own list."""
    return """Meal Plan:
Monday: Pancakes
Tuesday: Beef Tacos

Recipes

Recipe 1: Pancakes
Ingredients:
- 2 cups flour
- 2 eggs
Instructions:
1. Cook.

Recipe 2: Beef Tacos
Ingredients: 1 lb ground beef, 1 cup flour
Instructions:
1. Brown the beef.

Shopping List:
Pantry:
- Flour: 3 cups
"""
