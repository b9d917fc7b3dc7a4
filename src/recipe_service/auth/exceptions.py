"""Authentication and token exceptions.

These carry no transport details; ``core.exceptions`` maps them to HTTP
responses at the API boundary.
"""

from __future__ import annotations


class AuthError(Exception):
    """Base exception for authentication failures."""


class DuplicateCredentialError(AuthError):
    """Username or email already belongs to another account."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Login or password check failed.

    The message never says whether the identifier or the password was wrong.
    """

    def __init__(self, message: str = "Invalid username/email or password") -> None:
        super().__init__(message)


class UserNotFoundError(AuthError):
    def __init__(self, identifier: object) -> None:
        self.identifier = identifier
        super().__init__(f"User not found: {identifier}")


class TokenError(AuthError):
    """Base exception for token lifecycle failures."""


class InvalidTokenError(TokenError):
    """Token failed signature or structural verification, or names no usable user."""


class TokenExpiredError(TokenError):
    """Token signature is valid but its expiry has passed."""


class WrongTokenTypeError(TokenError):
    """An access token was presented where a refresh token is required, or vice versa."""
