"""ORM models."""

from .ingredient import Ingredient
from .recipe import Recipe
from .user import User


__all__ = ["Ingredient", "Recipe", "User"]
