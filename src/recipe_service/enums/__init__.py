"""Closed enumerations for the recipe domain and their lookup tables."""

from .ingredient_category import (
    DietType,
    IngredientCategory,
    is_suitable_for_diet,
    storage_recommendation,
)
from .measurement_unit import MeasurementUnit, UnitType
from .recipe_category import RecipeCategory
from .recipe_difficulty import RecipeDifficulty
from .user_role import UserRole


__all__ = [
    "DietType",
    "IngredientCategory",
    "MeasurementUnit",
    "RecipeCategory",
    "RecipeDifficulty",
    "UnitType",
    "UserRole",
    "is_suitable_for_diet",
    "storage_recommendation",
]
