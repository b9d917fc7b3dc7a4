"""Recipe service package.

Ownership and visibility rules for recipes, plus the listing and search
queries exposed by the API.
"""

from recipe_service.services.recipes.exceptions import (
    AccessDeniedError,
    RecipeError,
    RecipeNotFoundError,
)
from recipe_service.services.recipes.service import RecipeService


__all__ = ["AccessDeniedError", "RecipeError", "RecipeNotFoundError", "RecipeService"]
