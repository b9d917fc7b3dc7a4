"""Fixtures for end-to-end tests against the assembled application.

The application runs in-process through httpx's ASGI transport with its
real lifespan, so the database, token service and middleware stack are
the ones production uses (on in-memory SQLite).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import update

from recipe_service.db.models import User
from recipe_service.db.session import get_session_factory
from recipe_service.enums import UserRole
from recipe_service.factory import create_app


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from recipe_service.core.config import Settings


API = "/api"
DEFAULT_PASSWORD = "Secret123"


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Client with the application lifespan running."""
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


async def register(
    client: AsyncClient,
    username: str,
    *,
    email: str | None = None,
    password: str = DEFAULT_PASSWORD,
) -> dict[str, Any]:
    """Register a user and return the auth response body."""
    response = await client.post(
        f"{API}/auth/register",
        json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


def bearer(auth: dict[str, Any]) -> dict[str, str]:
    return {"Authorization": f"Bearer {auth['accessToken']}"}


async def promote(username: str, role: UserRole = UserRole.ADMIN) -> None:
    """Change a user's role directly in the database."""
    async with get_session_factory()() as session:
        await session.execute(
            update(User).where(User.username == username).values(role=role)
        )
        await session.commit()


@pytest.fixture
async def alice(client: AsyncClient) -> dict[str, Any]:
    return await register(client, "alice")


@pytest.fixture
async def bob(client: AsyncClient) -> dict[str, Any]:
    return await register(client, "bob")
