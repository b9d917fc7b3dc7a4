"""AI helper endpoints.

Provides:
- POST /ai/generate-recipe for LLM recipe generation from ingredients
- GET /ai/recipes/{recipe_id}/nutrition for an estimated nutrition breakdown
- GET /ai/recipes/{recipe_id}/pairing-suggestion for wine pairings
- GET /ai/health and /ai/features

Every route requires an authenticated caller. When no LLM client is
configured the generation and analysis routes answer 503.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Path, Request, status

from recipe_service.api.dependencies import AiServiceDep, RecipeServiceDep
from recipe_service.auth import CurrentUserDep
from recipe_service.schemas.ai import (
    GenerateRecipeRequest,
    GenerateRecipeResponse,
    NutritionResponse,
    PairingResponse,
)
from recipe_service.schemas.recipe import RecipeResponse


router = APIRouter(prefix="/ai", tags=["AI"])

RecipeId = Annotated[int, Path(ge=1, description="Recipe ID")]

_FEATURES = (
    "recipe_generation",
    "nutritional_analysis",
    "wine_pairing",
)


@router.post(
    "/generate-recipe",
    response_model=GenerateRecipeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generate a recipe from ingredients",
    responses={
        401: {"description": "Authentication required"},
        503: {"description": "AI service unavailable or returned invalid output"},
    },
)
async def generate_recipe(
    body: GenerateRecipeRequest,
    user: CurrentUserDep,
    ai: AiServiceDep,
) -> GenerateRecipeResponse:
    """Generate a recipe and, unless ``saveRecipe`` is false, store it.

    A recipe that cannot be stored is still returned as JSON, with the
    reason in ``saveError``.
    """
    result = await ai.generate_recipe(
        user,
        body.ingredients,
        cuisine=body.cuisine,
        difficulty=body.difficulty,
        save=body.save_recipe,
    )
    return GenerateRecipeResponse(
        ai_generated_json=result.ai_json,
        saved_recipe=RecipeResponse.from_model(result.saved) if result.saved else None,
        message=result.message,
        save_error=result.save_error,
    )


@router.get(
    "/recipes/{recipe_id}/nutrition",
    response_model=NutritionResponse,
    summary="Estimate a recipe's nutrition",
    responses={
        403: {"description": "Recipe is private and not owned by the caller"},
        404: {"description": "Recipe not found"},
        503: {"description": "AI service unavailable"},
    },
)
async def nutrition(
    recipe_id: RecipeId,
    user: CurrentUserDep,
    recipes: RecipeServiceDep,
    ai: AiServiceDep,
) -> NutritionResponse:
    recipe = await recipes.get_by_id(recipe_id, user)
    return NutritionResponse(
        recipe_id=recipe.id,
        recipe_title=recipe.title,
        nutritional_analysis=await ai.analyze_nutrition(recipe),
    )


@router.get(
    "/recipes/{recipe_id}/pairing-suggestion",
    response_model=PairingResponse,
    summary="Suggest wines for a recipe",
    responses={
        403: {"description": "Recipe is private and not owned by the caller"},
        404: {"description": "Recipe not found"},
        503: {"description": "AI service unavailable"},
    },
)
async def pairing_suggestion(
    recipe_id: RecipeId,
    user: CurrentUserDep,
    recipes: RecipeServiceDep,
    ai: AiServiceDep,
) -> PairingResponse:
    recipe = await recipes.get_by_id(recipe_id, user)
    return PairingResponse(
        recipe_id=recipe.id,
        recipe_title=recipe.title,
        pairing_suggestions=await ai.suggest_wine_pairing(recipe),
    )


@router.get("/health", summary="AI subsystem health")
async def ai_health(request: Request, _user: CurrentUserDep, ai: AiServiceDep) -> dict[str, Any]:
    settings = request.app.state.settings
    return {
        "status": "healthy" if ai.enabled else "disabled",
        "service": "ai",
        "enabled": ai.enabled,
        "model": settings.llm.model if ai.enabled else None,
        "capabilities": list(_FEATURES) if ai.enabled else [],
        "timestamp": datetime.now(UTC),
    }


@router.get("/features", summary="AI features offered by this deployment")
async def ai_features(_user: CurrentUserDep, ai: AiServiceDep) -> dict[str, Any]:
    return {
        "enabled": ai.enabled,
        "features": {name: ai.enabled for name in _FEATURES},
    }
