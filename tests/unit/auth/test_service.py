"""Unit tests for AuthenticationService.

Tests cover:
- Registration, including duplicate detection and the insert race
- Login by username or email
- Refresh and validate
- Password change and enable/disable
"""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import pytest

from recipe_service.auth.exceptions import (
    DuplicateCredentialError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserNotFoundError,
    WrongTokenTypeError,
)
from recipe_service.auth.passwords import BcryptPasswordHasher
from recipe_service.auth.service import AuthenticationService, UserProfile
from recipe_service.auth.tokens import TokenService, TokenType
from recipe_service.db.repositories import UserRepository
from recipe_service.enums import UserRole
from tests.conftest import TEST_JWT_SECRET


pytestmark = pytest.mark.unit


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(TEST_JWT_SECRET, expires_in=timedelta(hours=1))


@pytest.fixture
def users(db_session) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def auth(users: UserRepository, tokens: TokenService) -> AuthenticationService:
    return AuthenticationService(users, BcryptPasswordHasher(rounds=4), tokens)


@pytest.fixture
async def chef(auth: AuthenticationService):
    """A registered user 'chef1' with password 'Secret123'."""
    return await auth.register(
        "chef1",
        "chef1@example.com",
        "Secret123",
        UserProfile(first_name="Julia", last_name="Child"),
    )


# =============================================================================
# Registration
# =============================================================================


class TestRegister:
    """Tests for AuthenticationService.register."""

    async def test_creates_enabled_user_with_user_role(self, chef, users: UserRepository):
        """Should persist an enabled USER account."""
        stored = await users.find_by_username("chef1")

        assert stored is not None
        assert stored.enabled is True
        assert stored.role is UserRole.USER
        assert stored.first_name == "Julia"

    async def test_stores_hash_not_password(self, chef, users: UserRepository):
        """Should never persist the plaintext password."""
        stored = await users.find_by_username("chef1")

        assert stored is not None
        assert stored.password_hash != "Secret123"

    async def test_issues_access_and_refresh_tokens(self, chef, tokens: TokenService):
        """Should return one token of each type plus the lifetime."""
        assert tokens.decode(chef.access_token).type is TokenType.ACCESS
        assert tokens.decode(chef.refresh_token).type is TokenType.REFRESH
        assert chef.expires_in == 3600
        assert chef.token_type == "Bearer"
        assert chef.user.username == "chef1"

    async def test_duplicate_username(self, chef, auth: AuthenticationService, users):
        """Should reject a taken username and create nothing."""
        with pytest.raises(DuplicateCredentialError) as exc_info:
            await auth.register("chef1", "other@example.com", "Secret123")

        assert exc_info.value.field == "username"
        assert await users.find_by_email("other@example.com") is None

    async def test_duplicate_email(self, chef, auth: AuthenticationService, users):
        """Should reject a taken email and create nothing."""
        with pytest.raises(DuplicateCredentialError) as exc_info:
            await auth.register("chef2", "chef1@example.com", "Secret123")

        assert exc_info.value.field == "email"
        assert await users.find_by_username("chef2") is None

    async def test_insert_race_surfaces_as_duplicate(
        self, chef, auth: AuthenticationService, users: UserRepository
    ):
        """Should map a unique-constraint failure at insert to a duplicate error."""
        # Both pre-checks pass, as they would for two concurrent registrations
        users.exists_by_username = AsyncMock(return_value=False)
        users.exists_by_email = AsyncMock(return_value=False)

        with pytest.raises(DuplicateCredentialError):
            await auth.register("chef1", "chef1@example.com", "Secret123")


# =============================================================================
# Login
# =============================================================================


class TestLogin:
    """Tests for AuthenticationService.login."""

    @pytest.mark.parametrize("identifier", ["chef1", "chef1@example.com"])
    async def test_login_with_username_or_email(
        self, chef, auth: AuthenticationService, identifier: str
    ):
        """Should accept either identifier."""
        result = await auth.login(identifier, "Secret123")

        assert result.access_token
        assert result.user.username == "chef1"

    async def test_login_sets_last_login(self, chef, auth: AuthenticationService):
        """Should record the login time."""
        result = await auth.login("chef1", "Secret123")

        assert result.user.last_login is not None

    async def test_wrong_password_leaves_last_login(
        self, chef, auth: AuthenticationService, users: UserRepository
    ):
        """Should fail without touching lastLogin."""
        with pytest.raises(InvalidCredentialsError):
            await auth.login("chef1", "wrong-password")

        stored = await users.find_by_username("chef1")
        assert stored is not None
        assert stored.last_login is None

    async def test_unknown_user_same_error(self, auth: AuthenticationService):
        """Should not reveal whether the identifier exists."""
        with pytest.raises(InvalidCredentialsError) as unknown:
            await auth.login("nobody", "Secret123")

        assert str(unknown.value) == "Invalid username/email or password"

    async def test_disabled_user_cannot_login(self, chef, auth: AuthenticationService):
        """Should reject a disabled account."""
        await auth.disable_user(chef.user.id)

        with pytest.raises(InvalidCredentialsError):
            await auth.login("chef1", "Secret123")

    async def test_lookup_is_case_sensitive(self, chef, auth: AuthenticationService):
        """Should treat usernames case-sensitively."""
        with pytest.raises(InvalidCredentialsError):
            await auth.login("CHEF1", "Secret123")

    async def test_mixed_case_email_round_trip(self, auth: AuthenticationService):
        """Should log in and report the email taken using the exact registered string."""
        await auth.register("chef2", "chef2@EXAMPLE.com", "Secret123")

        result = await auth.login("chef2@EXAMPLE.com", "Secret123")

        assert result.user.email == "chef2@EXAMPLE.com"
        assert not await auth.is_email_available("chef2@EXAMPLE.com")

    async def test_unknown_user_still_checks_a_hash(
        self, users: UserRepository, tokens: TokenService
    ):
        """Should run one password check even when no account matches."""
        hasher = BcryptPasswordHasher(rounds=4)
        hasher.verify = Mock(wraps=hasher.verify)
        auth = AuthenticationService(users, hasher, tokens)

        with pytest.raises(InvalidCredentialsError):
            await auth.login("nobody", "Secret123")

        hasher.verify.assert_called_once_with("Secret123", hasher.dummy_digest)


# =============================================================================
# Refresh & validate
# =============================================================================


class TestRefresh:
    """Tests for AuthenticationService.refresh."""

    async def test_refresh_issues_new_pair(self, chef, auth: AuthenticationService, tokens):
        """Should issue a usable access token for the same user."""
        result = await auth.refresh(chef.refresh_token)

        assert tokens.decode(result.access_token).sub == "chef1"
        assert result.user.id == chef.user.id

    async def test_refresh_token_is_reusable(self, chef, auth: AuthenticationService):
        """Should keep accepting a refresh token after it has been used."""
        await auth.refresh(chef.refresh_token)

        again = await auth.refresh(chef.refresh_token)

        assert again.user.username == "chef1"

    async def test_access_token_rejected(self, chef, auth: AuthenticationService):
        """Should refuse an access token where a refresh token is required."""
        with pytest.raises(WrongTokenTypeError):
            await auth.refresh(chef.access_token)

    async def test_garbage_rejected(self, auth: AuthenticationService):
        """Should raise InvalidTokenError for an unverifiable token."""
        with pytest.raises(InvalidTokenError):
            await auth.refresh("not-a-token")

    async def test_disabled_user_rejected(self, chef, auth: AuthenticationService):
        """Should refuse to refresh for a disabled account."""
        await auth.disable_user(chef.user.id)

        with pytest.raises(InvalidTokenError):
            await auth.refresh(chef.refresh_token)


class TestValidate:
    """Tests for AuthenticationService.validate and get_user_from_token."""

    async def test_valid_token(self, chef, auth: AuthenticationService):
        """Should be true for a fresh token of an enabled user."""
        assert await auth.validate(chef.access_token)

    async def test_disabled_user(self, chef, auth: AuthenticationService):
        """Should be false once the user is disabled."""
        await auth.disable_user(chef.user.id)

        assert not await auth.validate(chef.access_token)

    async def test_unknown_user(self, auth: AuthenticationService, tokens: TokenService):
        """Should be false for a well-signed token naming no user."""
        token = tokens.issue_access_token("ghost", 999, UserRole.USER)

        assert not await auth.validate(token)

    async def test_garbage(self, auth: AuthenticationService):
        """Should be false for an unverifiable token."""
        assert not await auth.validate("garbage")

    async def test_get_user_from_token(self, chef, auth: AuthenticationService):
        """Should resolve the token's subject to the stored user."""
        user = await auth.get_user_from_token(chef.access_token)

        assert user.email == "chef1@example.com"


# =============================================================================
# Account management
# =============================================================================


class TestChangePassword:
    """Tests for AuthenticationService.change_password."""

    async def test_changes_password(self, chef, auth: AuthenticationService):
        """Should accept the new password and reject the old one."""
        await auth.change_password(chef.user.id, "Secret123", "NewSecret456")

        assert (await auth.login("chef1", "NewSecret456")).access_token
        with pytest.raises(InvalidCredentialsError):
            await auth.login("chef1", "Secret123")

    async def test_wrong_current_password(self, chef, auth: AuthenticationService):
        """Should refuse when the current password does not verify."""
        with pytest.raises(InvalidCredentialsError, match="Current password"):
            await auth.change_password(chef.user.id, "wrong", "NewSecret456")

    async def test_unknown_user(self, auth: AuthenticationService):
        """Should raise UserNotFoundError for an unknown id."""
        with pytest.raises(UserNotFoundError):
            await auth.change_password(999, "Secret123", "NewSecret456")


class TestEnableDisable:
    """Tests for enable_user / disable_user."""

    async def test_disable_is_idempotent(self, chef, auth: AuthenticationService):
        """Should leave a disabled account disabled."""
        await auth.disable_user(chef.user.id)
        user = await auth.disable_user(chef.user.id)

        assert user.enabled is False

    async def test_enable_restores_access(self, chef, auth: AuthenticationService):
        """Should let a re-enabled user log in again."""
        await auth.disable_user(chef.user.id)
        await auth.enable_user(chef.user.id)

        assert (await auth.login("chef1", "Secret123")).access_token

    async def test_unknown_user(self, auth: AuthenticationService):
        """Should raise UserNotFoundError."""
        with pytest.raises(UserNotFoundError):
            await auth.enable_user(42)


class TestAvailability:
    """Tests for is_username_available / is_email_available."""

    async def test_taken(self, chef, auth: AuthenticationService):
        assert not await auth.is_username_available("chef1")
        assert not await auth.is_email_available("chef1@example.com")

    async def test_free(self, auth: AuthenticationService):
        assert await auth.is_username_available("chef1")
        assert await auth.is_email_available("chef1@example.com")
