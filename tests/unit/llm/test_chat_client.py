"""Unit tests for ChatCompletionsClient.

Tests cover:
- Configuration checks and lifecycle
- Request construction
- Response parsing
- Error mapping and retry logic
"""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from recipe_service.llm.client import ChatCompletionsClient
from recipe_service.llm.exceptions import (
    LLMConfigurationError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from recipe_service.llm.models import LLMCompletionResult
from tests.fixtures.llm_responses import create_chat_response


pytestmark = pytest.mark.unit

BASE_URL = "https://llm.test/v1"
CHAT_URL = f"{BASE_URL}/chat/completions"

# High rate limit to disable rate limiting delays in tests
TEST_RATE_LIMIT = 10000.0


def make_client(**kwargs) -> ChatCompletionsClient:
    defaults = {
        "api_key": "test-api-key",
        "model": "gpt-4o-mini",
        "base_url": BASE_URL,
        "requests_per_minute": TEST_RATE_LIMIT,
        "max_retries": 2,
    }
    return ChatCompletionsClient(**{**defaults, **kwargs})


class TestChatCompletionsClientInitialization:
    """Tests for client configuration and lifecycle."""

    def test_requires_api_key(self):
        """Should refuse to build without an API key."""
        with pytest.raises(LLMConfigurationError, match="LLM_API_KEY"):
            make_client(api_key="")

    def test_requires_positive_rate(self):
        with pytest.raises(LLMConfigurationError):
            make_client(requests_per_minute=0)

    def test_chat_url_strips_trailing_slash(self):
        assert make_client(base_url=f"{BASE_URL}/").chat_url == CHAT_URL

    def test_from_settings(self, test_settings):
        """Should take model and URL from settings and the key from secrets."""
        settings = test_settings.model_copy(update={"LLM_API_KEY": "sk-test"})

        client = ChatCompletionsClient.from_settings(settings)

        assert client.api_key == "sk-test"
        assert client.model == settings.llm.model

    async def test_initialize_and_shutdown(self):
        """Should create the HTTP client once and close it on shutdown."""
        client = make_client()

        await client.initialize()
        http_client = client._http_client
        await client.initialize()

        assert http_client is not None
        assert client._http_client is http_client

        await client.shutdown()
        assert client._http_client is None


class TestGenerate:
    """Tests for ChatCompletionsClient.generate."""

    @respx.mock
    async def test_returns_completion(self):
        """Should return the first choice's content and token usage."""
        respx.post(CHAT_URL).mock(
            return_value=httpx.Response(200, json=create_chat_response('{"ok": true}'))
        )
        client = make_client()

        result = await client.generate("Say hi as JSON")

        assert isinstance(result, LLMCompletionResult)
        assert result.raw_response == '{"ok": true}'
        assert result.model == "gpt-4o-mini"
        assert result.prompt_tokens == 120
        assert result.completion_tokens == 80
        await client.shutdown()

    @respx.mock
    async def test_request_body(self):
        """Should send system and user messages, JSON mode and options."""
        route = respx.post(CHAT_URL).mock(
            return_value=httpx.Response(200, json=create_chat_response("{}"))
        )
        client = make_client(temperature=0.7, max_tokens=500)

        await client.generate(
            "Prompt text",
            system="You are a chef.",
            json_mode=True,
            options={"temperature": 0.2},
        )

        request = route.calls.last.request
        body = json.loads(request.content)
        assert request.headers["Authorization"] == "Bearer test-api-key"
        assert body["model"] == "gpt-4o-mini"
        assert body["messages"] == [
            {"role": "system", "content": "You are a chef."},
            {"role": "user", "content": "Prompt text"},
        ]
        assert body["response_format"] == {"type": "json_object"}
        assert body["temperature"] == 0.2
        assert body["max_tokens"] == 500
        await client.shutdown()

    @respx.mock
    async def test_plain_text_mode(self):
        """Should omit response_format and the system message when not requested."""
        route = respx.post(CHAT_URL).mock(
            return_value=httpx.Response(200, json=create_chat_response("hello"))
        )
        client = make_client()

        await client.generate("Prompt text", model="other-model")

        body = json.loads(route.calls.last.request.content)
        assert "response_format" not in body
        assert body["model"] == "other-model"
        assert [m["role"] for m in body["messages"]] == ["user"]
        await client.shutdown()


class TestErrorHandling:
    """Tests for error mapping and retries."""

    @respx.mock
    async def test_rate_limited(self):
        respx.post(CHAT_URL).mock(
            return_value=httpx.Response(429, headers={"retry-after": "30"})
        )
        client = make_client()

        with pytest.raises(LLMRateLimitError, match="30"):
            await client.generate("Prompt")
        await client.shutdown()

    @respx.mock
    async def test_server_error_not_retried(self):
        """Should raise LLMResponseError on a 5xx without retrying."""
        route = respx.post(CHAT_URL).mock(return_value=httpx.Response(500))
        client = make_client()

        with pytest.raises(LLMResponseError, match="500"):
            await client.generate("Prompt")

        assert route.call_count == 1
        await client.shutdown()

    @respx.mock
    async def test_unreadable_body(self):
        respx.post(CHAT_URL).mock(return_value=httpx.Response(200, json={"choices": []}))
        client = make_client()

        with pytest.raises(LLMResponseError):
            await client.generate("Prompt")
        await client.shutdown()

    @respx.mock
    async def test_timeout_retried_then_raised(self):
        """Should retry timeouts max_retries times before giving up."""
        route = respx.post(CHAT_URL).mock(side_effect=httpx.ReadTimeout("slow"))
        client = make_client(max_retries=2)

        with pytest.raises(LLMTimeoutError):
            await client.generate("Prompt")

        assert route.call_count == 3
        await client.shutdown()

    @respx.mock
    async def test_connection_error_then_success(self):
        """Should recover when a retry succeeds."""
        route = respx.post(CHAT_URL).mock(
            side_effect=[
                httpx.ConnectError("refused"),
                httpx.Response(200, json=create_chat_response("{}")),
            ]
        )
        client = make_client()

        result = await client.generate("Prompt")

        assert result.raw_response == "{}"
        assert route.call_count == 2
        await client.shutdown()

    @respx.mock
    async def test_connection_error_exhausted(self):
        respx.post(CHAT_URL).mock(side_effect=httpx.ConnectError("refused"))
        client = make_client(max_retries=1)

        with pytest.raises(LLMUnavailableError, match="Cannot connect"):
            await client.generate("Prompt")
        await client.shutdown()
