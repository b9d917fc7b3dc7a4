"""Signed access and refresh tokens.

Tokens are HMAC-signed JWTs (python-jose) carrying the username as
subject plus ``userId``, ``role`` and ``type`` claims. Access and refresh
tokens share a single configured lifetime.

:meth:`TokenService.verify` never raises for a bad token: it returns either
the decoded :class:`TokenClaims` or a :class:`TokenFailure` saying why the
token was rejected. :meth:`TokenService.decode` is the raising variant used
by the services.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import TYPE_CHECKING, Final

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from recipe_service.auth.exceptions import (
    InvalidTokenError,
    TokenExpiredError,
    WrongTokenTypeError,
)
from recipe_service.enums import UserRole
from recipe_service.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_service.core.config import Settings


logger = get_logger(__name__)

BEARER_PREFIX: Final[str] = "Bearer "


class TokenType(StrEnum):
    ACCESS = "access"
    REFRESH = "refresh"


class TokenFailure(StrEnum):
    """Why a token was rejected."""

    INVALID_SIGNATURE = "invalid_signature"
    MALFORMED = "malformed"
    EXPIRED = "expired"


class TokenClaims(BaseModel):
    """Decoded token payload."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sub: str
    user_id: int = Field(alias="userId")
    role: UserRole
    type: TokenType
    iat: datetime
    exp: datetime


class TokenService:
    """Issues and verifies tokens with a server-held symmetric key."""

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(days=1),
    ) -> None:
        if not secret_key:
            msg = "JWT secret key must not be empty"
            raise ValueError(msg)
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenService:
        return cls(
            settings.JWT_SECRET_KEY,
            algorithm=settings.auth.jwt.algorithm,
            expires_in=timedelta(seconds=settings.auth.jwt.token_expire_seconds),
        )

    @property
    def expires_in_seconds(self) -> int:
        return int(self.expires_in.total_seconds())

    def issue(
        self,
        username: str,
        user_id: int,
        role: UserRole,
        token_type: TokenType,
    ) -> str:
        """Sign a new token expiring ``expires_in`` from now."""
        now = datetime.now(UTC)
        payload = {
            "sub": username,
            "userId": user_id,
            "role": str(role),
            "type": str(token_type),
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def issue_access_token(self, username: str, user_id: int, role: UserRole) -> str:
        return self.issue(username, user_id, role, TokenType.ACCESS)

    def issue_refresh_token(self, username: str, user_id: int, role: UserRole) -> str:
        return self.issue(username, user_id, role, TokenType.REFRESH)

    def verify(self, token: str) -> TokenClaims | TokenFailure:
        """Verify signature, structure and expiry without raising."""
        try:
            jwt.get_unverified_claims(token)
        except JWTError:
            return TokenFailure.MALFORMED

        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            return TokenFailure.EXPIRED
        except JWTClaimsError:
            return TokenFailure.MALFORMED
        except JWTError:
            return TokenFailure.INVALID_SIGNATURE

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError:
            return TokenFailure.MALFORMED

    def decode(
        self, token: str, *, expected_type: TokenType | None = None
    ) -> TokenClaims:
        """Verify a token, raising on any failure.

        Raises:
            TokenExpiredError: Token expired.
            InvalidTokenError: Bad signature or malformed claims.
            WrongTokenTypeError: ``expected_type`` given and not matched.
        """
        result = self.verify(token)
        if result is TokenFailure.EXPIRED:
            msg = "Token has expired"
            raise TokenExpiredError(msg)
        if isinstance(result, TokenFailure):
            logger.debug("Token rejected", reason=str(result))
            msg = "Invalid token"
            raise InvalidTokenError(msg)
        if expected_type is not None and result.type is not expected_type:
            article = "an" if expected_type is TokenType.ACCESS else "a"
            msg = f"Token is not {article} {expected_type} token"
            raise WrongTokenTypeError(msg)
        return result

    def is_valid(self, token: str) -> bool:
        return isinstance(self.verify(token), TokenClaims)

    def is_refresh_token(self, token: str) -> bool:
        """True only for a currently valid token whose type is refresh."""
        result = self.verify(token)
        return isinstance(result, TokenClaims) and result.type is TokenType.REFRESH


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from a ``Bearer <token>`` header value, else None."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None
