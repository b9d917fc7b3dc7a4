"""Recipe endpoints.

Provides:
- POST /recipes, GET/PUT/DELETE /recipes/{recipe_id} for owner CRUD
- PUT /recipes/{recipe_id}/toggle-visibility
- GET /recipes/my and /recipes/my/statistics for the caller's own recipes
- GET /recipes/public, /recipes/public/{recipe_id}, /recipes/search/public
  for anonymous browsing
- GET /recipes/search, /recipes/search/by-ingredients,
  /recipes/category/{category}, /recipes/difficulty/{difficulty}
- GET /recipes/top-rated, /recipes/popular, /recipes/recent

Fixed paths are registered before ``/{recipe_id}`` so they are matched
first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Path, Query, status

from recipe_service.api.dependencies import PageDep, RecipeServiceDep, UnsortedPageDep
from recipe_service.auth import CurrentUserDep
from recipe_service.enums import RecipeCategory, RecipeDifficulty
from recipe_service.schemas.common import PageResponse
from recipe_service.schemas.recipe import RecipeRequest, RecipeResponse, RecipeStatistics


if TYPE_CHECKING:
    from recipe_service.db.models import Recipe
    from recipe_service.db.repositories import Page


router = APIRouter(prefix="/recipes", tags=["Recipes"])

RecipePage = PageResponse[RecipeResponse]
RecipeId = Annotated[int, Path(ge=1, description="Recipe ID")]
PublicOnly = Annotated[bool, Query(alias="publicOnly")]

_ACCESS_RESPONSES = {
    401: {"description": "Authentication required"},
    403: {"description": "Recipe is private or not owned by the caller"},
    404: {"description": "Recipe not found"},
}


def _page(page: Page[Recipe]) -> RecipePage:
    return RecipePage.from_page(page, RecipeResponse.from_model)


# =============================================================================
# Collection
# =============================================================================


@router.post(
    "",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a recipe",
    responses={401: {"description": "Authentication required"}},
)
async def create_recipe(
    body: RecipeRequest,
    user: CurrentUserDep,
    recipes: RecipeServiceDep,
) -> RecipeResponse:
    """Create a recipe owned by the caller.

    Ingredients keep the order they were submitted in.
    """
    return RecipeResponse.from_model(await recipes.create(body, user))


@router.get("/my", response_model=RecipePage, summary="List the caller's recipes")
async def my_recipes(
    user: CurrentUserDep,
    recipes: RecipeServiceDep,
    page: PageDep,
) -> RecipePage:
    return _page(await recipes.list_user_recipes(user, page))


@router.get(
    "/my/statistics",
    response_model=RecipeStatistics,
    summary="Count the caller's recipes by visibility",
)
async def my_statistics(user: CurrentUserDep, recipes: RecipeServiceDep) -> RecipeStatistics:
    return await recipes.statistics(user)


# =============================================================================
# Anonymous reads
# =============================================================================


@router.get("/public", response_model=RecipePage, summary="List public recipes")
async def public_recipes(recipes: RecipeServiceDep, page: PageDep) -> RecipePage:
    return _page(await recipes.list_public(page))


@router.get(
    "/public/{recipe_id}",
    response_model=RecipeResponse,
    summary="Get a public recipe",
    responses={
        403: {"description": "Recipe is private"},
        404: {"description": "Recipe not found"},
    },
)
async def get_public_recipe(recipe_id: RecipeId, recipes: RecipeServiceDep) -> RecipeResponse:
    return RecipeResponse.from_model(await recipes.get_public_by_id(recipe_id))


@router.get(
    "/search/public",
    response_model=RecipePage,
    summary="Search public recipes",
)
async def search_public(
    recipes: RecipeServiceDep,
    page: PageDep,
    q: Annotated[str | None, Query(max_length=200, description="Title/description text")] = None,
    category: RecipeCategory | None = None,
    difficulty: RecipeDifficulty | None = None,
) -> RecipePage:
    return _page(
        await recipes.search(
            page,
            term=q,
            category=category,
            difficulty=difficulty,
            public_only=True,
        )
    )


# =============================================================================
# Authenticated search
# =============================================================================


@router.get(
    "/search",
    response_model=RecipePage,
    summary="Search recipes",
    description=(
        "All filters are optional and combine with AND. Without publicOnly the "
        "results are public recipes plus the caller's own private recipes."
    ),
)
async def search_recipes(
    user: CurrentUserDep,
    recipes: RecipeServiceDep,
    page: PageDep,
    q: Annotated[str | None, Query(max_length=200, description="Title/description text")] = None,
    category: RecipeCategory | None = None,
    difficulty: RecipeDifficulty | None = None,
    min_cooking_time: Annotated[int | None, Query(alias="minCookingTime", ge=0)] = None,
    max_cooking_time: Annotated[int | None, Query(alias="maxCookingTime", ge=0)] = None,
    public_only: PublicOnly = False,
) -> RecipePage:
    return _page(
        await recipes.search(
            page,
            term=q,
            category=category,
            difficulty=difficulty,
            min_cooking_time=min_cooking_time,
            max_cooking_time=max_cooking_time,
            public_only=public_only,
            caller=user,
        )
    )


@router.get(
    "/search/by-ingredients",
    response_model=RecipePage,
    summary="Find recipes using any of the given ingredients",
)
async def search_by_ingredients(
    user: CurrentUserDep,
    recipes: RecipeServiceDep,
    page: PageDep,
    ingredients: Annotated[
        str, Query(min_length=1, description="Comma-separated ingredient names")
    ],
) -> RecipePage:
    names = [name.strip() for name in ingredients.split(",") if name.strip()]
    return _page(await recipes.search_by_ingredients(names, page, user))


@router.get(
    "/category/{category}",
    response_model=RecipePage,
    summary="List recipes in a category",
)
async def by_category(
    category: RecipeCategory,
    user: CurrentUserDep,
    recipes: RecipeServiceDep,
    page: PageDep,
    public_only: PublicOnly = True,
) -> RecipePage:
    return _page(
        await recipes.by_category(category, page, public_only=public_only, caller=user)
    )


@router.get(
    "/difficulty/{difficulty}",
    response_model=RecipePage,
    summary="List recipes of a difficulty",
)
async def by_difficulty(
    difficulty: RecipeDifficulty,
    user: CurrentUserDep,
    recipes: RecipeServiceDep,
    page: PageDep,
    public_only: PublicOnly = True,
) -> RecipePage:
    return _page(
        await recipes.by_difficulty(difficulty, page, public_only=public_only, caller=user)
    )


@router.get(
    "/top-rated",
    response_model=RecipePage,
    summary="Public recipes at or above a rating",
)
async def top_rated(
    _user: CurrentUserDep,
    recipes: RecipeServiceDep,
    page: UnsortedPageDep,
    min_rating: Annotated[float, Query(alias="minRating", ge=0, le=5)] = 4.0,
) -> RecipePage:
    return _page(await recipes.top_rated(min_rating, page))


@router.get("/popular", response_model=RecipePage, summary="Most rated public recipes")
async def popular(
    _user: CurrentUserDep,
    recipes: RecipeServiceDep,
    page: UnsortedPageDep,
) -> RecipePage:
    return _page(await recipes.most_popular(page))


@router.get("/recent", response_model=RecipePage, summary="Newest public recipes")
async def recent(
    _user: CurrentUserDep,
    recipes: RecipeServiceDep,
    page: UnsortedPageDep,
) -> RecipePage:
    return _page(await recipes.recent(page))


# =============================================================================
# Single recipe
# =============================================================================


@router.get(
    "/{recipe_id}",
    response_model=RecipeResponse,
    summary="Get a recipe",
    responses=_ACCESS_RESPONSES,
)
async def get_recipe(
    recipe_id: RecipeId,
    user: CurrentUserDep,
    recipes: RecipeServiceDep,
) -> RecipeResponse:
    """Public recipes are visible to everyone, private ones only to their owner."""
    return RecipeResponse.from_model(await recipes.get_by_id(recipe_id, user))


@router.put(
    "/{recipe_id}",
    response_model=RecipeResponse,
    summary="Replace a recipe",
    responses=_ACCESS_RESPONSES,
)
async def update_recipe(
    recipe_id: RecipeId,
    body: RecipeRequest,
    user: CurrentUserDep,
    recipes: RecipeServiceDep,
) -> RecipeResponse:
    """Replace every field and the whole ingredient list. Owner only."""
    return RecipeResponse.from_model(await recipes.update(recipe_id, body, user))


@router.delete(
    "/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a recipe",
    responses=_ACCESS_RESPONSES,
)
async def delete_recipe(
    recipe_id: RecipeId,
    user: CurrentUserDep,
    recipes: RecipeServiceDep,
) -> None:
    await recipes.delete(recipe_id, user)


@router.put(
    "/{recipe_id}/toggle-visibility",
    response_model=RecipeResponse,
    summary="Flip a recipe between public and private",
    responses=_ACCESS_RESPONSES,
)
async def toggle_visibility(
    recipe_id: RecipeId,
    user: CurrentUserDep,
    recipes: RecipeServiceDep,
) -> RecipeResponse:
    return RecipeResponse.from_model(await recipes.toggle_visibility(recipe_id, user))
