"""FastAPI dependencies for service access.

Process-wide collaborators (token service, password hasher, LLM client)
are created at startup and live on ``app.state``. Per-request objects
(session, repositories, services) are built here from them; FastAPI caches
dependencies per request, so every repository in one request shares the
same session and transaction.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_service.auth.service import AuthenticationService
from recipe_service.core.config import Settings
from recipe_service.db.repositories import (
    PageRequest,
    RecipeRepository,
    SortDirection,
    SortField,
    UserRepository,
)
from recipe_service.db.session import get_session
from recipe_service.services.ai import AiService
from recipe_service.services.recipes import RecipeService


SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


async def get_user_repository(session: SessionDep) -> UserRepository:
    return UserRepository(session)


async def get_recipe_repository(session: SessionDep) -> RecipeRepository:
    return RecipeRepository(session)


async def get_auth_service(
    request: Request,
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> AuthenticationService:
    return AuthenticationService(
        users,
        request.app.state.password_hasher,
        request.app.state.token_service,
    )


async def get_recipe_service(
    recipes: Annotated[RecipeRepository, Depends(get_recipe_repository)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> RecipeService:
    return RecipeService(recipes, users)


async def get_ai_service(
    request: Request,
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
) -> AiService:
    return AiService(getattr(request.app.state, "llm_client", None), recipes)


AuthServiceDep = Annotated[AuthenticationService, Depends(get_auth_service)]
RecipeServiceDep = Annotated[RecipeService, Depends(get_recipe_service)]
AiServiceDep = Annotated[AiService, Depends(get_ai_service)]


async def get_page_request(
    settings: SettingsDep,
    page: Annotated[int, Query(ge=0, description="Page number (0-based)")] = 0,
    size: Annotated[int | None, Query(ge=1, description="Page size")] = None,
    sort_by: Annotated[
        SortField, Query(alias="sortBy", description="Sort field")
    ] = SortField.CREATED_AT,
    sort_dir: Annotated[
        SortDirection, Query(alias="sortDir", description="Sort direction")
    ] = SortDirection.DESC,
) -> PageRequest:
    """Paging parameters; ``size`` is capped at ``pagination.max_size``.

    Raises:
        RequestValidationError: Unknown ``sortBy`` or ``sortDir`` (422).
    """
    limits = settings.pagination
    return PageRequest(
        page=page,
        size=min(size or limits.default_size, limits.max_size),
        sort_by=sort_by,
        sort_dir=sort_dir,
    )


async def get_unsorted_page_request(
    settings: SettingsDep,
    page: Annotated[int, Query(ge=0, description="Page number (0-based)")] = 0,
    size: Annotated[int | None, Query(ge=1, description="Page size")] = None,
) -> PageRequest:
    """Paging parameters for listings with a fixed order."""
    limits = settings.pagination
    return PageRequest(page=page, size=min(size or limits.default_size, limits.max_size))


PageDep = Annotated[PageRequest, Depends(get_page_request)]
UnsortedPageDep = Annotated[PageRequest, Depends(get_unsorted_page_request)]
