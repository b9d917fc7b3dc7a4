"""Exceptions for the recipe service."""

from __future__ import annotations


class RecipeError(Exception):
    """Base exception for recipe service errors."""

    def __init__(self, message: str, recipe_id: int | None = None) -> None:
        self.recipe_id = recipe_id
        super().__init__(message)


class RecipeNotFoundError(RecipeError):
    """No recipe exists with the requested id."""

    def __init__(self, recipe_id: int) -> None:
        super().__init__(f"Recipe not found: {recipe_id}", recipe_id)


class AccessDeniedError(RecipeError):
    """The caller may not read or modify the recipe.

    Raised both for private recipes read by a non-owner and for writes by
    anyone but the owner. For writes, a missing recipe is reported the same
    way so callers cannot probe for the existence of other users' recipes.
    """
