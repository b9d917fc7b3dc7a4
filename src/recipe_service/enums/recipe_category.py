"""Recipe categories.

Categories are grouped into dietary, meal-time and course families; the
groupings are plain frozensets so callers can test membership directly.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class RecipeCategory(StrEnum):
    """Category a recipe is filed under."""

    APPETIZER = "APPETIZER"
    MAIN_COURSE = "MAIN_COURSE"
    SIDE_DISH = "SIDE_DISH"
    DESSERT = "DESSERT"
    SOUP = "SOUP"
    SALAD = "SALAD"
    BEVERAGE = "BEVERAGE"
    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"
    SNACK = "SNACK"
    SAUCE = "SAUCE"
    MARINADE = "MARINADE"
    PASTA = "PASTA"
    PIZZA = "PIZZA"
    BREAD = "BREAD"
    CAKE = "CAKE"
    COOKIE = "COOKIE"
    SMOOTHIE = "SMOOTHIE"
    COCKTAIL = "COCKTAIL"
    VEGAN = "VEGAN"
    VEGETARIAN = "VEGETARIAN"
    GLUTEN_FREE = "GLUTEN_FREE"
    KETO = "KETO"
    LOW_CARB = "LOW_CARB"
    HIGH_PROTEIN = "HIGH_PROTEIN"
    HEALTHY = "HEALTHY"
    COMFORT_FOOD = "COMFORT_FOOD"
    INTERNATIONAL = "INTERNATIONAL"
    FUSION = "FUSION"
    OTHER = "OTHER"

    @property
    def display_name(self) -> str:
        """Title-cased name, e.g. ``MAIN_COURSE`` -> ``Main Course``."""
        return self.value.replace("_", " ").title()


DIETARY_CATEGORIES: Final = frozenset(
    {
        RecipeCategory.VEGAN,
        RecipeCategory.VEGETARIAN,
        RecipeCategory.GLUTEN_FREE,
        RecipeCategory.KETO,
        RecipeCategory.LOW_CARB,
        RecipeCategory.HIGH_PROTEIN,
        RecipeCategory.HEALTHY,
    }
)

MEAL_TIME_CATEGORIES: Final = frozenset(
    {
        RecipeCategory.BREAKFAST,
        RecipeCategory.LUNCH,
        RecipeCategory.DINNER,
        RecipeCategory.SNACK,
    }
)

COURSE_CATEGORIES: Final = frozenset(
    {
        RecipeCategory.APPETIZER,
        RecipeCategory.MAIN_COURSE,
        RecipeCategory.SIDE_DISH,
        RecipeCategory.DESSERT,
    }
)


def category_from_display_name(name: str) -> RecipeCategory | None:
    """Resolve a display name (case-insensitive) to a category."""
    wanted = name.strip().casefold()
    for category in RecipeCategory:
        if category.display_name.casefold() == wanted:
            return category
    return None


def parse_category(value: str | None, default: RecipeCategory) -> RecipeCategory:
    """Lenient parse used for free-form input such as LLM output.

    Accepts member names in any case, with spaces or hyphens in place of
    underscores, and display names; anything else yields ``default``.
    """
    if not value:
        return default
    key = value.strip().upper().replace(" ", "_").replace("-", "_")
    try:
        return RecipeCategory(key)
    except ValueError:
        return category_from_display_name(value) or default
