"""Authentication endpoints.

Provides:
- POST /auth/register, /auth/login, /auth/refresh for token issue
- POST /auth/validate for token introspection
- GET /auth/check-username, /auth/check-email for availability checks
- GET /auth/me and POST /auth/change-password for the signed-in user
- GET /auth/health
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import APIRouter, HTTPException, Query, status

from recipe_service.api.dependencies import AuthServiceDep
from recipe_service.auth import CurrentUserDep
from recipe_service.auth.exceptions import TokenError
from recipe_service.auth.service import UserProfile
from recipe_service.observability.logging import get_logger
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


logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    responses={
        409: {"description": "Username or email already registered"},
        422: {"description": "Invalid registration data"},
    },
)
async def register(body: RegisterRequest, auth: AuthServiceDep) -> AuthResponse:
    """Create an account with role USER and return its first token pair."""
    tokens = await auth.register(
        body.username,
        body.email,
        body.password,
        UserProfile(
            first_name=body.first_name,
            last_name=body.last_name,
            phone_number=body.phone_number,
        ),
    )
    return AuthResponse.from_tokens(tokens)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in with username or email",
    responses={401: {"description": "Invalid username/email or password"}},
)
async def login(body: LoginRequest, auth: AuthServiceDep) -> AuthResponse:
    tokens = await auth.login(body.username_or_email, body.password)
    return AuthResponse.from_tokens(tokens)


@router.post(
    "/refresh",
    response_model=AuthResponse,
    summary="Exchange a refresh token for a new token pair",
    responses={401: {"description": "Invalid, expired or wrong-type token"}},
)
async def refresh(body: RefreshTokenRequest, auth: AuthServiceDep) -> AuthResponse:
    tokens = await auth.refresh(body.refresh_token)
    return AuthResponse.from_tokens(tokens)


@router.post(
    "/validate",
    response_model=UserInfo,
    summary="Validate a token and return its user",
    responses={401: {"description": "Token invalid or user disabled"}},
)
async def validate(body: ValidateTokenRequest, auth: AuthServiceDep) -> UserInfo:
    """Return the token's user if the token verifies and the user is enabled."""
    try:
        user = await auth.get_user_from_token(body.token)
    except TokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    return UserInfo.from_model(user)


@router.get(
    "/check-username",
    response_model=UsernameAvailability,
    summary="Check whether a username is free",
)
async def check_username(
    username: Annotated[str, Query(min_length=1, max_length=50)],
    auth: AuthServiceDep,
) -> UsernameAvailability:
    return UsernameAvailability(
        username=username,
        available=await auth.is_username_available(username),
    )


@router.get(
    "/check-email",
    response_model=EmailAvailability,
    summary="Check whether an email is free",
)
async def check_email(
    email: Annotated[str, Query(min_length=1, max_length=255)],
    auth: AuthServiceDep,
) -> EmailAvailability:
    return EmailAvailability(
        email=email,
        available=await auth.is_email_available(email),
    )


@router.get(
    "/me",
    response_model=UserInfo,
    summary="Current user",
    responses={401: {"description": "Authentication required"}},
)
async def me(user: CurrentUserDep, auth: AuthServiceDep) -> UserInfo:
    return UserInfo.from_model(await auth.get_user(user.id))


@router.post(
    "/change-password",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Change the current user's password",
    responses={
        401: {"description": "Not authenticated or current password incorrect"},
    },
)
async def change_password(
    body: ChangePasswordRequest,
    user: CurrentUserDep,
    auth: AuthServiceDep,
) -> None:
    await auth.change_password(user.id, body.current_password, body.new_password)


@router.get("/health", summary="Authentication service health")
async def auth_health() -> dict[str, Any]:
    return {
        "status": "healthy",
        "service": "authentication",
        "timestamp": datetime.now(UTC),
    }
