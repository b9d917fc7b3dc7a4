"""Pydantic schemas for request/response validation.

This module exports all schema classes for the Recipe Service API.
"""

# AI helpers
from recipe_service.schemas.ai import (
    GenerateRecipeRequest,
    GenerateRecipeResponse,
    NutritionResponse,
    PairingResponse,
)

# Auth schemas
from recipe_service.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    EmailAvailability,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    UserInfo,
    UsernameAvailability,
    ValidateTokenRequest,
)

# Base classes
from recipe_service.schemas.base import APIRequest, APIResponse

# Shared
from recipe_service.schemas.common import PageResponse

# Recipes
from recipe_service.schemas.recipe import (
    IngredientRequest,
    IngredientResponse,
    OwnerInfo,
    RecipeRequest,
    RecipeResponse,
    RecipeStatistics,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "AuthResponse",
    "ChangePasswordRequest",
    "EmailAvailability",
    "GenerateRecipeRequest",
    "GenerateRecipeResponse",
    "IngredientRequest",
    "IngredientResponse",
    "LoginRequest",
    "NutritionResponse",
    "OwnerInfo",
    "PageResponse",
    "PairingResponse",
    "RecipeRequest",
    "RecipeResponse",
    "RecipeStatistics",
    "RefreshTokenRequest",
    "RegisterRequest",
    "UserInfo",
    "UsernameAvailability",
    "ValidateTokenRequest",
]
