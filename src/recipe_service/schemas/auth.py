"""Authentication request and response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Annotated

from pydantic import Field, StringConstraints, field_validator
from pydantic.networks import validate_email

from recipe_service.enums import UserRole

from .base import APIRequest, APIResponse


if TYPE_CHECKING:
    from recipe_service.auth.service import AuthTokens
    from recipe_service.db.models import User


NonBlank = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class RegisterRequest(APIRequest):
    username: str = Field(
        ..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$"
    )
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=100)
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    phone_number: str | None = Field(default=None, max_length=20)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        # Stored exactly as submitted so login and check-email match it
        validate_email(value)
        return value


class LoginRequest(APIRequest):
    username_or_email: NonBlank
    password: str = Field(..., min_length=1)


class RefreshTokenRequest(APIRequest):
    refresh_token: NonBlank


class ValidateTokenRequest(APIRequest):
    token: NonBlank


class ChangePasswordRequest(APIRequest):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=100)


class UserInfo(APIResponse):
    """Public projection of a user; never includes the password hash."""

    id: int
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: UserRole
    enabled: bool
    created_at: datetime | None = None
    last_login: datetime | None = None

    @classmethod
    def from_model(cls, user: User) -> UserInfo:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            enabled=user.enabled,
            created_at=user.created_at,
            last_login=user.last_login,
        )


class AuthResponse(APIResponse):
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserInfo

    @classmethod
    def from_tokens(cls, tokens: AuthTokens) -> AuthResponse:
        return cls(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            token_type=tokens.token_type,
            expires_in=tokens.expires_in,
            user=UserInfo.from_model(tokens.user),
        )


class UsernameAvailability(APIResponse):
    username: str
    available: bool


class EmailAvailability(APIResponse):
    email: str
    available: bool
