"""Unit tests for the logging helpers."""

from __future__ import annotations

import orjson
import pytest
from loguru import logger

from recipe_service.observability.logging import (
    _patch_record,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    setup_logging,
    unbind_context,
)


pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _clean_context():
    clear_context()
    yield
    clear_context()


class TestLogContext:
    def test_bind_accumulates(self):
        bind_context(request_id="abc")
        bind_context(username="chef1")

        assert get_context() == {"request_id": "abc", "username": "chef1"}

    def test_unbind(self):
        bind_context(request_id="abc", username="chef1")

        unbind_context("username", "missing")

        assert get_context() == {"request_id": "abc"}

    def test_get_context_returns_copy(self):
        bind_context(request_id="abc")

        get_context()["request_id"] = "changed"

        assert get_context() == {"request_id": "abc"}


class TestRecordPatching:
    def test_context_merged_and_secrets_redacted(self):
        """Should attach request context and mask sensitive fields."""
        bind_context(request_id="abc")
        record = {"extra": {"password": "Secret123", "refresh_token": "t", "user_id": 7}}

        _patch_record(record)

        assert record["extra"] == {
            "request_id": "abc",
            "password": "***",
            "refresh_token": "***",
            "user_id": 7,
        }

    def test_record_fields_override_context(self):
        bind_context(path="/ctx")
        record = {"extra": {"path": "/record"}}

        _patch_record(record)

        assert record["extra"]["path"] == "/record"


class TestJsonOutput:
    def test_emits_one_json_object_per_line(self, capsys):
        setup_logging(log_level="INFO", log_format="json")
        bind_context(request_id="req-9")

        get_logger("recipe_service.test").info("Recipe created", recipe_id=5, password="x")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        payload = orjson.loads(line)
        assert payload["message"] == "Recipe created"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "recipe_service.test"
        assert payload["recipe_id"] == 5
        assert payload["request_id"] == "req-9"
        assert payload["password"] == "***"
        logger.remove()
