"""FastAPI security dependencies.

The access-control middleware has already resolved the caller by the time
these run; they only read ``request.state.principal`` and enforce the
route's requirement.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from recipe_service.auth.principal import CurrentUser
from recipe_service.enums import UserRole


# Declares the bearer scheme in the OpenAPI document; the middleware does
# the actual token handling.
bearer_scheme = HTTPBearer(
    scheme_name="JWT",
    description="Access token issued by /auth/login",
    auto_error=False,
)


async def get_current_user_optional(
    request: Request,
    _credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
) -> CurrentUser | None:
    """The caller if the request carried a valid access token, else None."""
    return getattr(request.state, "principal", None)


async def get_current_user(
    user: Annotated[CurrentUser | None, Depends(get_current_user_optional)],
) -> CurrentUser:
    """Require an authenticated caller.

    Raises:
        HTTPException: 401 with ``WWW-Authenticate: Bearer`` when anonymous.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to access this resource",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


class RequireRoles:
    """Dependency requiring the caller to hold one of the given roles.

    Usage:
        @router.put("/admin/users/{user_id}/disable")
        async def disable(user: Annotated[CurrentUser, Depends(RequireAdmin)]):
            ...
    """

    def __init__(self, *roles: UserRole) -> None:
        self.roles = frozenset(roles)

    async def __call__(
        self,
        user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        """Return the caller if authorized.

        Raises:
            HTTPException: 403 if the caller's role is not accepted.
        """
        if not any(user.has_role(role) for role in self.roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role",
            )
        return user


RequireAdmin = RequireRoles(UserRole.ADMIN)

CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
