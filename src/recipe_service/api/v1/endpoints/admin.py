"""Admin endpoints for account management.

Provides:
- PUT /admin/users/{user_id}/enable
- PUT /admin/users/{user_id}/disable
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from recipe_service.api.dependencies import AuthServiceDep
from recipe_service.auth import CurrentUser, RequireAdmin
from recipe_service.observability.logging import get_logger
from recipe_service.schemas.auth import UserInfo


logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])

AdminDep = Annotated[CurrentUser, Depends(RequireAdmin)]

_RESPONSES = {
    401: {"description": "Authentication required"},
    403: {"description": "Caller is not an administrator"},
    404: {"description": "User not found"},
}


@router.put(
    "/users/{user_id}/enable",
    response_model=UserInfo,
    summary="Enable a user account",
    responses=_RESPONSES,
)
async def enable_user(
    user_id: Annotated[int, Path(ge=1)],
    admin: AdminDep,
    auth: AuthServiceDep,
) -> UserInfo:
    """Re-enable a disabled account. Enabling an enabled account is a no-op."""
    user = await auth.enable_user(user_id)
    logger.info("Admin enabled user", admin=admin.username, user_id=user_id)
    return UserInfo.from_model(user)


@router.put(
    "/users/{user_id}/disable",
    response_model=UserInfo,
    summary="Disable a user account",
    responses=_RESPONSES,
)
async def disable_user(
    user_id: Annotated[int, Path(ge=1)],
    admin: AdminDep,
    auth: AuthServiceDep,
) -> UserInfo:
    """Disable an account.

    A disabled user can no longer log in, refresh, or authenticate with an
    access token issued before the change.
    """
    user = await auth.disable_user(user_id)
    logger.info("Admin disabled user", admin=admin.username, user_id=user_id)
    return UserInfo.from_model(user)
