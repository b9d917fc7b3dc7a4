"""Authentication service: registration, login, token refresh and account admin."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from starlette.concurrency import run_in_threadpool

from recipe_service.auth.exceptions import (
    DuplicateCredentialError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenError,
    TokenExpiredError,
    UserNotFoundError,
)
from recipe_service.auth.tokens import TokenClaims, TokenType
from recipe_service.db.models import User
from recipe_service.enums import UserRole
from recipe_service.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_service.auth.passwords import PasswordHasher
    from recipe_service.auth.tokens import TokenService
    from recipe_service.db.repositories import UserRepository


logger = get_logger(__name__)

TOKEN_TYPE_BEARER = "Bearer"


@dataclass(frozen=True, slots=True)
class AuthTokens:
    """Token pair issued on register, login and refresh."""

    access_token: str
    refresh_token: str
    expires_in: int
    user: User
    token_type: str = TOKEN_TYPE_BEARER


@dataclass(frozen=True, slots=True)
class UserProfile:
    """Optional profile fields supplied at registration."""

    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None


class AuthenticationService:
    """Account lifecycle: ``Unregistered -> Active <-> Disabled``.

    Password hashing runs in the thread pool so bcrypt's deliberate cost
    does not stall the event loop.
    """

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    # =========================================================================
    # Registration & login
    # =========================================================================

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        profile: UserProfile | None = None,
    ) -> AuthTokens:
        """Create an enabled USER account and issue its first token pair.

        Raises:
            DuplicateCredentialError: Username or email already registered.
        """
        if await self._users.exists_by_username(username):
            raise DuplicateCredentialError("username", "Username is already taken")
        if await self._users.exists_by_email(email):
            raise DuplicateCredentialError("email", "Email is already in use")

        profile = profile or UserProfile()
        user = User(
            username=username,
            email=email,
            password_hash=await run_in_threadpool(self._hasher.hash, password),
            first_name=profile.first_name,
            last_name=profile.last_name,
            phone_number=profile.phone_number,
            role=UserRole.USER,
            enabled=True,
        )
        try:
            user = await self._users.save(user)
        except IntegrityError as e:
            # A concurrent registration won the race between check and insert
            logger.warning("Registration lost uniqueness race", username=username)
            msg = "Username or email is already in use"
            raise DuplicateCredentialError("username", msg) from e

        logger.info("User registered", user_id=user.id, username=user.username)
        return self._issue_tokens(user)

    async def login(self, identifier: str, password: str) -> AuthTokens:
        """Authenticate by username or email.

        Raises:
            InvalidCredentialsError: Unknown identifier, disabled account or
                wrong password, all reported identically.
        """
        user = await self._users.find_by_username_or_email(identifier)
        # Every rejection pays for one hash check
        matches = await run_in_threadpool(
            self._verify_or_dummy, password, user.password_hash if user else None
        )
        if user is None or not user.enabled:
            logger.info("Login rejected", reason="unknown or disabled account")
            raise InvalidCredentialsError
        if not matches:
            logger.info("Login rejected", reason="password mismatch", user_id=user.id)
            raise InvalidCredentialsError

        user.last_login = datetime.now(UTC)
        await self._users.save(user)
        logger.info("User logged in", user_id=user.id)
        return self._issue_tokens(user)

    async def refresh(self, refresh_token: str) -> AuthTokens:
        """Exchange a refresh token for a brand-new token pair.

        The presented refresh token is not revoked and stays usable until
        it expires.

        Raises:
            InvalidTokenError: Token fails verification or its user is gone
                or disabled.
            WrongTokenTypeError: Token is not a refresh token.
        """
        try:
            claims = self._tokens.decode(refresh_token, expected_type=TokenType.REFRESH)
        except (InvalidTokenError, TokenExpiredError) as e:
            msg = "Invalid refresh token"
            raise InvalidTokenError(msg) from e

        user = await self._users.find_by_username_or_email(claims.sub)
        if user is None or not user.enabled:
            msg = "Invalid refresh token"
            raise InvalidTokenError(msg)
        return self._issue_tokens(user)

    # =========================================================================
    # Token introspection
    # =========================================================================

    async def validate(self, token: str) -> bool:
        """True only if the token verifies and names an existing, enabled user."""
        try:
            await self.get_user_from_token(token)
        except (TokenError, UserNotFoundError):
            return False
        return True

    async def get_user_from_token(self, token: str) -> User:
        """Resolve a valid token to its enabled user.

        Raises:
            TokenError: Token fails verification.
            InvalidTokenError: Token names a missing or disabled user.
        """
        claims: TokenClaims = self._tokens.decode(token)
        user = await self._users.find_by_username_or_email(claims.sub)
        if user is None or not user.enabled:
            msg = "Invalid token"
            raise InvalidTokenError(msg)
        return user

    # =========================================================================
    # Account management
    # =========================================================================

    async def get_user(self, user_id: int) -> User:
        user = await self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def change_password(
        self, user_id: int, current_password: str, new_password: str
    ) -> None:
        """Replace the password hash after checking the current password.

        Raises:
            UserNotFoundError: No such user.
            InvalidCredentialsError: ``current_password`` is wrong.
        """
        user = await self.get_user(user_id)
        if not await run_in_threadpool(
            self._hasher.verify, current_password, user.password_hash
        ):
            msg = "Current password is incorrect"
            raise InvalidCredentialsError(msg)
        user.password_hash = await run_in_threadpool(self._hasher.hash, new_password)
        await self._users.save(user)
        logger.info("Password changed", user_id=user.id)

    async def enable_user(self, user_id: int) -> User:
        return await self._set_enabled(user_id, enabled=True)

    async def disable_user(self, user_id: int) -> User:
        return await self._set_enabled(user_id, enabled=False)

    async def is_username_available(self, username: str) -> bool:
        return not await self._users.exists_by_username(username)

    async def is_email_available(self, email: str) -> bool:
        return not await self._users.exists_by_email(email)

    # =========================================================================
    # Internals
    # =========================================================================

    async def _set_enabled(self, user_id: int, *, enabled: bool) -> User:
        user = await self.get_user(user_id)
        if user.enabled != enabled:
            user.enabled = enabled
            await self._users.save(user)
            logger.info("User enabled flag changed", user_id=user.id, enabled=enabled)
        return user

    def _verify_or_dummy(self, password: str, digest: str | None) -> bool:
        if digest is None:
            self._hasher.verify(password, self._hasher.dummy_digest)
            return False
        return self._hasher.verify(password, digest)

    def _issue_tokens(self, user: User) -> AuthTokens:
        return AuthTokens(
            access_token=self._tokens.issue_access_token(user.username, user.id, user.role),
            refresh_token=self._tokens.issue_refresh_token(
                user.username, user.id, user.role
            ),
            expires_in=self._tokens.expires_in_seconds,
            user=user,
        )
