"""Recipe service: ownership and visibility rules plus listing queries.

Every operation receives the caller explicitly as a :class:`CurrentUser`
(or ``None`` for anonymous callers). Ownership is decided by comparing the
recipe's owner id with the caller's id, nothing else.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_service.auth.exceptions import UserNotFoundError
from recipe_service.db.models import Recipe
from recipe_service.db.repositories import RecipeSearchFilters
from recipe_service.observability.logging import get_logger
from recipe_service.schemas.recipe import RecipeStatistics
from recipe_service.services.recipes.exceptions import (
    AccessDeniedError,
    RecipeNotFoundError,
)


if TYPE_CHECKING:
    from collections.abc import Sequence

    from recipe_service.auth.principal import CurrentUser
    from recipe_service.db.repositories import (
        Page,
        PageRequest,
        RecipeRepository,
        UserRepository,
    )
    from recipe_service.enums import RecipeCategory, RecipeDifficulty
    from recipe_service.schemas.recipe import RecipeRequest


logger = get_logger(__name__)


def _denied(recipe_id: int) -> AccessDeniedError:
    return AccessDeniedError(f"Recipe not found or access denied: {recipe_id}", recipe_id)


class RecipeService:
    """Create, read, update and delete recipes on behalf of a caller."""

    def __init__(self, recipes: RecipeRepository, users: UserRepository) -> None:
        self._recipes = recipes
        self._users = users

    # =========================================================================
    # Writes (owner only)
    # =========================================================================

    async def create(
        self,
        data: RecipeRequest,
        caller: CurrentUser,
        *,
        ai_generated: bool = False,
    ) -> Recipe:
        """Create a recipe owned by ``caller``.

        Ingredients get order positions 1..N in submission order.

        Raises:
            UserNotFoundError: The caller's account no longer exists.
        """
        owner = await self._users.find_by_id(caller.id)
        if owner is None:
            raise UserNotFoundError(caller.username)

        recipe = Recipe(owner=owner, is_ai_generated=ai_generated, rating_count=0)
        _apply(recipe, data)
        recipe = await self._recipes.save(recipe)
        logger.info(
            "Recipe created",
            recipe_id=recipe.id,
            owner_id=owner.id,
            ingredients=len(recipe.ingredients),
        )
        return recipe

    async def update(
        self, recipe_id: int, data: RecipeRequest, caller: CurrentUser
    ) -> Recipe:
        """Replace every mutable field and the whole ingredient list.

        Raises:
            AccessDeniedError: Recipe missing or not owned by ``caller``.
        """
        recipe = await self._owned(recipe_id, caller)
        _apply(recipe, data)
        recipe = await self._recipes.save(recipe)
        logger.info("Recipe updated", recipe_id=recipe.id)
        return recipe

    async def delete(self, recipe_id: int, caller: CurrentUser) -> None:
        """Delete a recipe and its ingredients.

        Raises:
            AccessDeniedError: Recipe missing or not owned by ``caller``.
        """
        recipe = await self._owned(recipe_id, caller)
        await self._recipes.delete(recipe)
        logger.info("Recipe deleted", recipe_id=recipe_id)

    async def toggle_visibility(self, recipe_id: int, caller: CurrentUser) -> Recipe:
        """Flip ``is_public``.

        Raises:
            AccessDeniedError: Recipe missing or not owned by ``caller``.
        """
        recipe = await self._owned(recipe_id, caller)
        recipe.is_public = not recipe.is_public
        recipe = await self._recipes.save(recipe)
        logger.info("Recipe visibility toggled", recipe_id=recipe.id, public=recipe.is_public)
        return recipe

    # =========================================================================
    # Single-recipe reads
    # =========================================================================

    async def get_by_id(self, recipe_id: int, caller: CurrentUser | None) -> Recipe:
        """Fetch a recipe the caller may see.

        Public recipes are visible to anyone; private ones only to their owner.

        Raises:
            RecipeNotFoundError: No such recipe.
            AccessDeniedError: Private recipe and caller is not the owner.
        """
        recipe = await self._recipes.find_by_id(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        if not recipe.is_public and not recipe.is_owned_by(caller.id if caller else None):
            raise AccessDeniedError(f"Access denied to recipe: {recipe_id}", recipe_id)
        return recipe

    async def get_public_by_id(self, recipe_id: int) -> Recipe:
        """Fetch a public recipe without consulting any caller identity.

        Raises:
            RecipeNotFoundError: No such recipe.
            AccessDeniedError: The recipe exists but is private.
        """
        recipe = await self._recipes.find_by_id(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        if not recipe.is_public:
            raise AccessDeniedError(f"Recipe is not public: {recipe_id}", recipe_id)
        return recipe

    # =========================================================================
    # Listings
    # =========================================================================

    async def list_user_recipes(
        self, caller: CurrentUser, page: PageRequest
    ) -> Page[Recipe]:
        return await self._recipes.find_by_owner(caller.id, page)

    async def list_public(self, page: PageRequest) -> Page[Recipe]:
        return await self._recipes.find_public(page)

    async def search(
        self,
        page: PageRequest,
        *,
        term: str | None = None,
        category: RecipeCategory | None = None,
        difficulty: RecipeDifficulty | None = None,
        min_cooking_time: int | None = None,
        max_cooking_time: int | None = None,
        public_only: bool = False,
        caller: CurrentUser | None = None,
    ) -> Page[Recipe]:
        """Search with optional filters combined by AND.

        Without ``public_only`` the results are public recipes plus the
        caller's own private ones; other users' private recipes never appear.
        """
        filters = RecipeSearchFilters(
            term=term.strip() if term and term.strip() else None,
            category=category,
            difficulty=difficulty,
            min_cooking_time=min_cooking_time,
            max_cooking_time=max_cooking_time,
            public_only=public_only or caller is None,
            visible_to=caller.id if caller else None,
        )
        return await self._recipes.search(filters, page)

    async def search_by_ingredients(
        self,
        names: Sequence[str],
        page: PageRequest,
        caller: CurrentUser | None = None,
    ) -> Page[Recipe]:
        """Recipes containing any of ``names``, case-insensitively."""
        return await self._recipes.find_by_ingredients(
            names, page, visible_to=caller.id if caller else None
        )

    async def by_category(
        self,
        category: RecipeCategory,
        page: PageRequest,
        *,
        public_only: bool = True,
        caller: CurrentUser | None = None,
    ) -> Page[Recipe]:
        return await self._recipes.find_by_category(
            category,
            page,
            public_only=public_only or caller is None,
            visible_to=caller.id if caller else None,
        )

    async def by_difficulty(
        self,
        difficulty: RecipeDifficulty,
        page: PageRequest,
        *,
        public_only: bool = True,
        caller: CurrentUser | None = None,
    ) -> Page[Recipe]:
        return await self._recipes.find_by_difficulty(
            difficulty,
            page,
            public_only=public_only or caller is None,
            visible_to=caller.id if caller else None,
        )

    async def top_rated(self, min_rating: float, page: PageRequest) -> Page[Recipe]:
        return await self._recipes.find_top_rated(min_rating, page)

    async def most_popular(self, page: PageRequest) -> Page[Recipe]:
        return await self._recipes.find_most_popular(page)

    async def recent(self, page: PageRequest) -> Page[Recipe]:
        return await self._recipes.find_recent(page)

    async def statistics(self, caller: CurrentUser) -> RecipeStatistics:
        """Count the caller's recipes, split by visibility."""
        recipes = await self._recipes.find_all_by_owner(caller.id)
        public = sum(1 for recipe in recipes if recipe.is_public)
        return RecipeStatistics(
            total_recipes=len(recipes),
            public_recipes=public,
            private_recipes=len(recipes) - public,
        )

    # =========================================================================
    # Internals
    # =========================================================================

    async def _owned(self, recipe_id: int, caller: CurrentUser) -> Recipe:
        recipe = await self._recipes.find_by_id_and_owner(recipe_id, caller.id)
        if recipe is None:
            logger.info("Recipe write denied", recipe_id=recipe_id, user_id=caller.id)
            raise _denied(recipe_id)
        return recipe


def _apply(recipe: Recipe, data: RecipeRequest) -> None:
    """Copy every client-settable field from ``data`` onto ``recipe``."""
    recipe.title = data.title
    recipe.description = data.description
    recipe.instructions = data.instructions
    recipe.cooking_time_minutes = data.cooking_time_minutes
    recipe.prep_time_minutes = data.prep_time_minutes
    recipe.servings = data.servings
    recipe.category = data.category
    recipe.difficulty = data.difficulty
    recipe.image_url = data.image_url
    recipe.is_public = data.is_public
    recipe.source = data.source
    recipe.set_tags(data.tags)
    recipe.replace_ingredients(item.to_fields() for item in data.ingredients)
