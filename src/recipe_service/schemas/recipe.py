"""Recipe and ingredient request/response schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from pydantic import Field, field_validator

from recipe_service.enums import (
    IngredientCategory,
    MeasurementUnit,
    RecipeCategory,
    RecipeDifficulty,
)
from recipe_service.enums.measurement_unit import unit_display_name

from .base import APIRequest, APIResponse, DecimalNumber


if TYPE_CHECKING:
    from recipe_service.db.models import Ingredient, Recipe, User


def format_minutes(minutes: int | None) -> str | None:
    """Render a duration as ``1h 30m``, ``2h`` or ``45m``."""
    if minutes is None:
        return None
    hours, rest = divmod(minutes, 60)
    if hours and rest:
        return f"{hours}h {rest}m"
    if hours:
        return f"{hours}h"
    return f"{rest}m"


# =============================================================================
# Requests
# =============================================================================


class IngredientRequest(APIRequest):
    name: str = Field(..., min_length=1, max_length=100)
    quantity: Decimal = Field(..., ge=Decimal("0.01"), le=Decimal("99999.99"))
    unit: MeasurementUnit
    notes: str | None = Field(default=None, max_length=200)
    category: IngredientCategory = IngredientCategory.OTHER
    is_optional: bool = False
    calories_per_100g: Decimal | None = Field(default=None, ge=0)
    protein_per_100g: Decimal | None = Field(default=None, ge=0)
    carbs_per_100g: Decimal | None = Field(default=None, ge=0)
    fat_per_100g: Decimal | None = Field(default=None, ge=0)
    fiber_per_100g: Decimal | None = Field(default=None, ge=0)

    def to_fields(self) -> dict[str, Any]:
        """Column values for a new ingredient row."""
        return self.model_dump(by_alias=False)


class RecipeRequest(APIRequest):
    """Full recipe payload; used for both create and full-replace update."""

    title: str = Field(..., min_length=3, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    instructions: str = Field(..., min_length=10)
    cooking_time_minutes: int | None = Field(default=None, ge=1, le=1440)
    prep_time_minutes: int | None = Field(default=None, ge=0, le=720)
    servings: int = Field(default=1, ge=1, le=50)
    category: RecipeCategory
    difficulty: RecipeDifficulty
    image_url: str | None = Field(default=None, max_length=500)
    is_public: bool = False
    source: str | None = Field(default=None, max_length=100)
    ingredients: list[IngredientRequest] = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def _normalise_tags(cls, tags: list[str]) -> list[str]:
        normalised: list[str] = []
        for tag in tags:
            value = tag.strip().lower()
            if value and value not in normalised:
                normalised.append(value)
        return normalised


# =============================================================================
# Responses
# =============================================================================


class OwnerInfo(APIResponse):
    id: int
    username: str
    full_name: str

    @classmethod
    def from_model(cls, user: User) -> OwnerInfo:
        return cls(id=user.id, username=user.username, full_name=user.full_name)


class IngredientResponse(APIResponse):
    id: int
    name: str
    quantity: DecimalNumber
    unit: MeasurementUnit
    unit_display_name: str
    notes: str | None = None
    category: IngredientCategory
    category_display_name: str
    is_optional: bool
    order_position: int
    quantity_display: str
    display_text: str
    weight_in_grams: DecimalNumber | None = None
    has_nutritional_info: bool
    calories_per_100g: DecimalNumber | None = None
    protein_per_100g: DecimalNumber | None = None
    carbs_per_100g: DecimalNumber | None = None
    fat_per_100g: DecimalNumber | None = None
    fiber_per_100g: DecimalNumber | None = None

    @classmethod
    def from_model(cls, ingredient: Ingredient) -> IngredientResponse:
        return cls(
            id=ingredient.id,
            name=ingredient.name,
            quantity=ingredient.quantity,
            unit=ingredient.unit,
            unit_display_name=unit_display_name(
                ingredient.unit, plural=ingredient.quantity != 1
            ),
            notes=ingredient.notes,
            category=ingredient.category,
            category_display_name=ingredient.category.display_name,
            is_optional=ingredient.is_optional,
            order_position=ingredient.order_position,
            quantity_display=ingredient.quantity_display,
            display_text=ingredient.display_text,
            weight_in_grams=ingredient.weight_in_grams,
            has_nutritional_info=ingredient.has_nutritional_info,
            calories_per_100g=ingredient.calories_per_100g,
            protein_per_100g=ingredient.protein_per_100g,
            carbs_per_100g=ingredient.carbs_per_100g,
            fat_per_100g=ingredient.fat_per_100g,
            fiber_per_100g=ingredient.fiber_per_100g,
        )


class RecipeResponse(APIResponse):
    id: int
    title: str
    description: str | None = None
    instructions: str
    cooking_time_minutes: int | None = None
    prep_time_minutes: int | None = None
    total_time_minutes: int | None = None
    formatted_cooking_time: str | None = None
    formatted_total_time: str | None = None
    servings: int
    category: RecipeCategory
    category_display_name: str
    difficulty: RecipeDifficulty
    difficulty_display_name: str
    image_url: str | None = None
    is_public: bool
    is_ai_generated: bool
    average_rating: float | None = None
    rating_count: int
    source: str | None = None
    created_at: datetime
    updated_at: datetime
    owner: OwnerInfo
    ingredients: list[IngredientResponse]
    tags: list[str]

    @classmethod
    def from_model(cls, recipe: Recipe) -> RecipeResponse:
        return cls(
            id=recipe.id,
            title=recipe.title,
            description=recipe.description,
            instructions=recipe.instructions,
            cooking_time_minutes=recipe.cooking_time_minutes,
            prep_time_minutes=recipe.prep_time_minutes,
            total_time_minutes=recipe.total_time_minutes,
            formatted_cooking_time=format_minutes(recipe.cooking_time_minutes),
            formatted_total_time=format_minutes(recipe.total_time_minutes),
            servings=recipe.servings,
            category=recipe.category,
            category_display_name=recipe.category.display_name,
            difficulty=recipe.difficulty,
            difficulty_display_name=recipe.difficulty.display_name,
            image_url=recipe.image_url,
            is_public=recipe.is_public,
            is_ai_generated=recipe.is_ai_generated,
            average_rating=recipe.average_rating,
            rating_count=recipe.rating_count,
            source=recipe.source,
            created_at=recipe.created_at,
            updated_at=recipe.updated_at,
            owner=OwnerInfo.from_model(recipe.owner),
            ingredients=[IngredientResponse.from_model(i) for i in recipe.ingredients],
            tags=list(recipe.tags or []),
        )


class RecipeStatistics(APIResponse):
    total_recipes: int
    public_recipes: int
    private_recipes: int
