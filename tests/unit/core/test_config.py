"""Unit tests for configuration loading."""

from __future__ import annotations

import pytest

from recipe_service.core.config import Settings
from recipe_service.core.config.settings import DatabaseSettings
from recipe_service.core.config.yaml_source import deep_merge


pytestmark = pytest.mark.unit


# =============================================================================
# YAML Merging
# =============================================================================


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested_keys_merged(self):
        """Should merge nested mappings key by key."""
        base = {"auth": {"jwt": {"algorithm": "HS256", "token_expire_seconds": 60}}}
        override = {"auth": {"jwt": {"token_expire_seconds": 120}}}

        merged = deep_merge(base, override)

        assert merged == {
            "auth": {"jwt": {"algorithm": "HS256", "token_expire_seconds": 120}}
        }

    def test_lists_replaced(self):
        merged = deep_merge({"origins": ["a", "b"]}, {"origins": ["c"]})

        assert merged == {"origins": ["c"]}

    def test_base_not_mutated(self):
        base = {"logging": {"level": "INFO"}}

        deep_merge(base, {"logging": {"level": "DEBUG"}})

        assert base == {"logging": {"level": "INFO"}}


# =============================================================================
# Settings
# =============================================================================


class TestSettingsSources:
    """Tests for the layered settings sources."""

    def test_test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch):
        """Should layer the test overrides on top of the base YAML."""
        monkeypatch.setenv("APP_ENV", "test")

        settings = Settings()

        assert settings.is_testing
        assert settings.database_url == "sqlite+aiosqlite:///:memory:"
        assert settings.auth.password.bcrypt_rounds == 4
        assert settings.llm.enabled is False
        # Untouched base values survive
        assert settings.auth.jwt.algorithm == "HS256"
        assert settings.pagination.max_size == 100

    def test_environment_variable_wins(self, monkeypatch: pytest.MonkeyPatch):
        """Should let nested environment variables override YAML."""
        monkeypatch.setenv("APP_ENV", "test")
        monkeypatch.setenv("AUTH__JWT__TOKEN_EXPIRE_SECONDS", "3600")

        settings = Settings()

        assert settings.auth.jwt.token_expire_seconds == 3600

    def test_init_values_win(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("APP_ENV", "test")

        settings = Settings(JWT_SECRET_KEY="from-init")

        assert settings.JWT_SECRET_KEY == "from-init"

    def test_missing_config_dir(self, monkeypatch: pytest.MonkeyPatch, tmp_path):
        """Should fall back to code defaults when no YAML is present."""
        monkeypatch.setenv("CONFIG_DIR", str(tmp_path))
        monkeypatch.setenv("APP_ENV", "development")

        settings = Settings()

        assert settings.api.v1_prefix == "/api"
        assert settings.api.cors_origins == []


class TestDatabaseUrl:
    """Tests for Settings.database_url."""

    def test_explicit_url(self):
        settings = Settings(database=DatabaseSettings(url="sqlite+aiosqlite:///x.db"))

        assert settings.database_url == "sqlite+aiosqlite:///x.db"

    def test_assembled_with_password(self):
        settings = Settings(
            database=DatabaseSettings(host="db", port=5433, name="cook", user="chef"),
            DATABASE_PASSWORD="pw",
        )

        assert settings.database_url == "postgresql+asyncpg://chef:pw@db:5433/cook"

    def test_assembled_without_credentials(self):
        settings = Settings(database=DatabaseSettings(host="db", user=None))

        assert settings.database_url == "postgresql+asyncpg://db:5432/recipes"


class TestEnvironmentFlags:
    @pytest.mark.parametrize(
        ("app_env", "production", "non_production"),
        [
            ("development", False, True),
            ("test", False, True),
            ("production", True, False),
        ],
    )
    def test_flags(self, app_env, production, non_production):
        settings = Settings(APP_ENV=app_env)

        assert settings.is_production is production
        assert settings.is_non_production is non_production
