"""Schemas for the AI helper endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from .base import APIRequest, APIResponse
from .recipe import RecipeResponse


class GenerateRecipeRequest(APIRequest):
    ingredients: list[str] = Field(..., min_length=1, max_length=20)
    cuisine: str | None = Field(default=None, max_length=50)
    difficulty: str | None = Field(default=None, max_length=20)
    save_recipe: bool = True

    @field_validator("ingredients")
    @classmethod
    def _drop_blank(cls, ingredients: list[str]) -> list[str]:
        cleaned = [name.strip() for name in ingredients if name.strip()]
        if not cleaned:
            msg = "At least one ingredient is required"
            raise ValueError(msg)
        return cleaned


class GenerateRecipeResponse(APIResponse):
    success: bool = True
    ai_generated_json: str
    saved_recipe: RecipeResponse | None = None
    message: str
    save_error: str | None = None


class NutritionResponse(APIResponse):
    success: bool = True
    recipe_id: int
    recipe_title: str
    nutritional_analysis: dict[str, Any]
    message: str = "Nutritional analysis completed successfully"


class PairingResponse(APIResponse):
    success: bool = True
    recipe_id: int
    recipe_title: str
    pairing_suggestions: dict[str, Any]
    message: str = "Wine pairing suggestions generated successfully"
