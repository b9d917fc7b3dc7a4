"""Data access layer over the ORM models."""

from .pagination import Page, PageRequest, SortDirection, SortField
from .recipes import RecipeRepository, RecipeSearchFilters
from .users import UserRepository


__all__ = [
    "Page",
    "PageRequest",
    "RecipeRepository",
    "RecipeSearchFilters",
    "SortDirection",
    "SortField",
    "UserRepository",
]
