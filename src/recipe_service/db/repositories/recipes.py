"""Recipe repository: CRUD plus the filtered, sorted, paginated queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from sqlalchemy import ColumnElement, and_, false, func, or_, select

from recipe_service.db.models import Ingredient, Recipe
from recipe_service.db.repositories.pagination import (
    Page,
    PageRequest,
    SortDirection,
    SortField,
)


if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from recipe_service.enums import RecipeCategory, RecipeDifficulty


_SORT_COLUMNS: Final[dict[SortField, Any]] = {
    SortField.CREATED_AT: Recipe.created_at,
    SortField.UPDATED_AT: Recipe.updated_at,
    SortField.TITLE: Recipe.title,
    SortField.AVERAGE_RATING: Recipe.average_rating,
    SortField.RATING_COUNT: Recipe.rating_count,
    SortField.COOKING_TIME: Recipe.cooking_time_minutes,
    SortField.PREP_TIME: Recipe.prep_time_minutes,
    SortField.SERVINGS: Recipe.servings,
}


@dataclass(frozen=True, slots=True)
class RecipeSearchFilters:
    """Optional search criteria; every criterion that is set must match.

    ``visible_to`` widens a non-public-only search to the given user's own
    private recipes. With ``public_only`` set it has no effect.
    """

    term: str | None = None
    category: RecipeCategory | None = None
    difficulty: RecipeDifficulty | None = None
    min_cooking_time: int | None = None
    max_cooking_time: int | None = None
    public_only: bool = False
    visible_to: int | None = None

    def conditions(self) -> list[ColumnElement[bool]]:
        clauses: list[ColumnElement[bool]] = []
        if self.term:
            pattern = f"%{self.term.lower()}%"
            clauses.append(
                or_(
                    func.lower(Recipe.title).like(pattern),
                    func.lower(func.coalesce(Recipe.description, "")).like(pattern),
                )
            )
        if self.category is not None:
            clauses.append(Recipe.category == self.category)
        if self.difficulty is not None:
            clauses.append(Recipe.difficulty == self.difficulty)
        if self.min_cooking_time is not None:
            clauses.append(Recipe.cooking_time_minutes >= self.min_cooking_time)
        if self.max_cooking_time is not None:
            clauses.append(Recipe.cooking_time_minutes <= self.max_cooking_time)
        clauses.append(_visibility(public_only=self.public_only, user_id=self.visible_to))
        return clauses


def _visibility(*, public_only: bool, user_id: int | None) -> ColumnElement[bool]:
    owned = Recipe.owner_id == user_id if user_id is not None else false()
    if public_only:
        return Recipe.is_public.is_(True)
    return or_(Recipe.is_public.is_(True), owned)


class RecipeRepository:
    """Queries over :class:`Recipe` and its ingredients."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    # =========================================================================
    # CRUD
    # =========================================================================

    async def find_by_id(self, recipe_id: int) -> Recipe | None:
        return await self._session.get(Recipe, recipe_id)

    async def find_by_id_and_owner(self, recipe_id: int, owner_id: int) -> Recipe | None:
        return await self._session.scalar(
            select(Recipe).where(Recipe.id == recipe_id, Recipe.owner_id == owner_id)
        )

    async def save(self, recipe: Recipe) -> Recipe:
        self._session.add(recipe)
        await self._session.flush()
        return recipe

    async def delete(self, recipe: Recipe) -> None:
        await self._session.delete(recipe)
        await self._session.flush()

    async def find_all_by_owner(self, owner_id: int) -> Sequence[Recipe]:
        result = await self._session.scalars(
            select(Recipe).where(Recipe.owner_id == owner_id).order_by(Recipe.id)
        )
        return result.all()

    # =========================================================================
    # Paged queries
    # =========================================================================

    async def find_by_owner(self, owner_id: int, page: PageRequest) -> Page[Recipe]:
        return await self._page([Recipe.owner_id == owner_id], page)

    async def find_public(self, page: PageRequest) -> Page[Recipe]:
        return await self._page([Recipe.is_public.is_(True)], page)

    async def search(self, filters: RecipeSearchFilters, page: PageRequest) -> Page[Recipe]:
        return await self._page(filters.conditions(), page)

    async def find_by_ingredients(
        self,
        names: Sequence[str],
        page: PageRequest,
        *,
        visible_to: int | None = None,
    ) -> Page[Recipe]:
        """Recipes containing any of ``names`` (case-insensitive exact match)."""
        wanted = sorted({name.strip().lower() for name in names if name.strip()})
        if not wanted:
            return Page(content=[], page=page.page, size=page.size, total_elements=0)
        matching = select(Ingredient.recipe_id).where(func.lower(Ingredient.name).in_(wanted))
        return await self._page(
            [
                Recipe.id.in_(matching),
                _visibility(public_only=False, user_id=visible_to),
            ],
            page,
        )

    async def find_by_category(
        self,
        category: RecipeCategory,
        page: PageRequest,
        *,
        public_only: bool,
        visible_to: int | None = None,
    ) -> Page[Recipe]:
        return await self._page(
            [
                Recipe.category == category,
                _visibility(public_only=public_only, user_id=visible_to),
            ],
            page,
        )

    async def find_by_difficulty(
        self,
        difficulty: RecipeDifficulty,
        page: PageRequest,
        *,
        public_only: bool,
        visible_to: int | None = None,
    ) -> Page[Recipe]:
        return await self._page(
            [
                Recipe.difficulty == difficulty,
                _visibility(public_only=public_only, user_id=visible_to),
            ],
            page,
        )

    async def find_top_rated(self, min_rating: float, page: PageRequest) -> Page[Recipe]:
        return await self._page(
            [
                Recipe.is_public.is_(True),
                Recipe.average_rating >= min_rating,
                Recipe.rating_count > 0,
            ],
            page,
            order_by=[Recipe.average_rating.desc(), Recipe.rating_count.desc()],
        )

    async def find_most_popular(self, page: PageRequest) -> Page[Recipe]:
        return await self._page(
            [Recipe.is_public.is_(True), Recipe.rating_count > 0],
            page,
            order_by=[Recipe.rating_count.desc()],
        )

    async def find_recent(self, page: PageRequest) -> Page[Recipe]:
        return await self._page(
            [Recipe.is_public.is_(True)],
            page,
            order_by=[Recipe.created_at.desc()],
        )

    # =========================================================================
    # Internals
    # =========================================================================

    async def _page(
        self,
        conditions: list[ColumnElement[bool]],
        page: PageRequest,
        *,
        order_by: list[Any] | None = None,
    ) -> Page[Recipe]:
        where = and_(*conditions)
        total = await self._session.scalar(select(func.count(Recipe.id)).where(where))

        stmt: Select[tuple[Recipe]] = (
            select(Recipe)
            .where(where)
            .order_by(*(order_by or [_sort_clause(page)]), Recipe.id)
            .offset(page.offset)
            .limit(page.size)
        )
        result = await self._session.scalars(stmt)
        return Page(
            content=list(result.all()),
            page=page.page,
            size=page.size,
            total_elements=total or 0,
        )


def _sort_clause(page: PageRequest) -> Any:
    column = _SORT_COLUMNS[page.sort_by]
    return column.asc() if page.sort_dir == SortDirection.ASC else column.desc()
