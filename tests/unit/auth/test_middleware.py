"""Unit tests for the access-control middleware.

Tests cover:
- Allow-list matching
- Resolving a bearer token to a caller
- Falling back to anonymous on any failure
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from recipe_service.auth.middleware import AccessControlMiddleware
from recipe_service.auth.tokens import TokenService
from recipe_service.db.models import User
from recipe_service.db.repositories import UserRepository
from recipe_service.enums import UserRole
from recipe_service.factory import protected_paths, public_prefixes
from tests.conftest import TEST_JWT_SECRET


pytestmark = pytest.mark.unit


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(TEST_JWT_SECRET, expires_in=timedelta(hours=1))


@pytest.fixture
def probe_app(test_settings, tokens: TokenService) -> FastAPI:
    """Minimal app echoing the principal the middleware attached."""
    app = FastAPI()
    app.state.token_service = tokens
    app.add_middleware(
        AccessControlMiddleware,
        public_prefixes=public_prefixes(test_settings),
        protected_paths=protected_paths(test_settings),
    )

    @app.get("/api/whoami")
    @app.get("/api/auth/login")
    @app.get("/api/auth/me")
    async def whoami(request: Request) -> dict[str, str | None]:
        principal = request.state.principal
        return {"username": principal.username if principal else None}

    return app


@pytest.fixture
async def client(probe_app: FastAPI, db_session):
    async with AsyncClient(
        transport=ASGITransport(app=probe_app), base_url="http://test"
    ) as ac:
        yield ac


@pytest.fixture
async def stored_user(db_session) -> User:
    user = await UserRepository(db_session).save(
        User(
            username="chef1",
            email="chef1@example.com",
            password_hash="x",
            role=UserRole.USER,
            enabled=True,
        )
    )
    await db_session.commit()
    return user


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Allow-list
# =============================================================================


class TestIsPublic:
    """Tests for AccessControlMiddleware.is_public."""

    @pytest.fixture
    def middleware(self, test_settings) -> AccessControlMiddleware:
        return AccessControlMiddleware(
            FastAPI(),
            public_prefixes=public_prefixes(test_settings),
            protected_paths=protected_paths(test_settings),
        )

    @pytest.mark.parametrize(
        "path",
        [
            "/api/auth/login",
            "/api/auth/register",
            "/api/health",
            "/api/info",
            "/docs",
            "/redoc",
            "/openapi.json",
        ],
    )
    def test_public_paths(self, middleware: AccessControlMiddleware, path: str):
        """Should skip token processing on the allow-list."""
        assert middleware.is_public(path)

    @pytest.mark.parametrize(
        "path",
        [
            "/api/auth/me",
            "/api/auth/change-password",
            "/api/recipes",
            "/api/recipes/public",
            "/api/ai/features",
            "/api/admin/users/1/disable",
        ],
    )
    def test_protected_paths(self, middleware: AccessControlMiddleware, path: str):
        """Should resolve the caller everywhere else."""
        assert not middleware.is_public(path)


# =============================================================================
# Caller resolution
# =============================================================================


class TestCallerResolution:
    """Tests for the principal attached to each request."""

    async def test_valid_access_token(self, client, stored_user, tokens: TokenService):
        """Should attach the user named by a valid access token."""
        token = tokens.issue_access_token("chef1", stored_user.id, UserRole.USER)

        response = await client.get("/api/whoami", headers=bearer(token))

        assert response.json() == {"username": "chef1"}

    async def test_protected_path_under_public_prefix(
        self, client, stored_user, tokens: TokenService
    ):
        """Should resolve the caller on /auth/me."""
        token = tokens.issue_access_token("chef1", stored_user.id, UserRole.USER)

        response = await client.get("/api/auth/me", headers=bearer(token))

        assert response.json() == {"username": "chef1"}

    async def test_public_path_ignores_token(
        self, client, stored_user, tokens: TokenService
    ):
        """Should not look at tokens on allow-listed paths."""
        token = tokens.issue_access_token("chef1", stored_user.id, UserRole.USER)

        response = await client.get("/api/auth/login", headers=bearer(token))

        assert response.json() == {"username": None}

    async def test_no_header(self, client):
        """Should proceed anonymously without a token."""
        response = await client.get("/api/whoami")

        assert response.status_code == 200
        assert response.json() == {"username": None}

    async def test_refresh_token_is_not_access(
        self, client, stored_user, tokens: TokenService
    ):
        """Should ignore a refresh token presented as a bearer token."""
        token = tokens.issue_refresh_token("chef1", stored_user.id, UserRole.USER)

        response = await client.get("/api/whoami", headers=bearer(token))

        assert response.json() == {"username": None}

    async def test_forged_token(self, client, stored_user):
        """Should ignore a token signed with another key."""
        forged = TokenService("some-other-secret-key-long-enough").issue_access_token(
            "chef1", stored_user.id, UserRole.ADMIN
        )

        response = await client.get("/api/whoami", headers=bearer(forged))

        assert response.json() == {"username": None}

    async def test_unknown_user(self, client, tokens: TokenService):
        """Should ignore a valid token naming no stored user."""
        token = tokens.issue_access_token("ghost", 42, UserRole.USER)

        response = await client.get("/api/whoami", headers=bearer(token))

        assert response.json() == {"username": None}

    async def test_disabled_user(
        self, client, stored_user, db_session, tokens: TokenService
    ):
        """Should ignore tokens of a disabled user."""
        token = tokens.issue_access_token("chef1", stored_user.id, UserRole.USER)
        stored_user.enabled = False
        await db_session.commit()

        response = await client.get("/api/whoami", headers=bearer(token))

        assert response.json() == {"username": None}

    async def test_principal_does_not_leak_between_requests(
        self, client, stored_user, tokens: TokenService
    ):
        """Should start every request anonymous."""
        token = tokens.issue_access_token("chef1", stored_user.id, UserRole.USER)
        await client.get("/api/whoami", headers=bearer(token))

        response = await client.get("/api/whoami")

        assert response.json() == {"username": None}
