"""Shared test fixtures for the recipe service tests.

Every test that touches the database gets a fresh in-memory SQLite
database; the engine is created per test and disposed afterwards.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from recipe_service.core.config import Settings
from recipe_service.core.config.settings import (
    AuthSettings,
    DatabaseSettings,
    LLMSettings,
    LoggingSettings,
    PasswordSettings,
)
from recipe_service.db.session import close_database, create_all, init_database


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sqlalchemy.ext.asyncio import AsyncSession


TEST_JWT_SECRET = "test-secret-key-minimum-32-characters-long"


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an isolated in-process service."""
    return Settings(
        APP_ENV="test",
        JWT_SECRET_KEY=TEST_JWT_SECRET,
        LLM_API_KEY="",
        database=DatabaseSettings(url="sqlite+aiosqlite:///:memory:"),
        auth=AuthSettings(password=PasswordSettings(bcrypt_rounds=4)),
        logging=LoggingSettings(level="WARNING", format="text"),
        llm=LLMSettings(enabled=False),
    )


@pytest.fixture
async def db_session(test_settings: Settings) -> AsyncGenerator[AsyncSession]:
    """Session on a freshly created schema."""
    factory = init_database(test_settings)
    await create_all()
    async with factory() as session:
        yield session
    await close_database()
