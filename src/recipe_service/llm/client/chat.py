"""HTTP client for OpenAI-compatible chat-completions providers.

Works against any provider exposing ``POST {base_url}/chat/completions``
with bearer-token auth (OpenAI, Groq, Together, a local vLLM, ...).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
from aiolimiter import AsyncLimiter
from pydantic import ValidationError

from recipe_service.llm.exceptions import (
    LLMConfigurationError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from recipe_service.llm.models import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    LLMCompletionResult,
)
from recipe_service.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_service.core.config import Settings


logger = get_logger(__name__)


class ChatCompletionsClient:
    """Async HTTP client for an OpenAI-compatible chat-completions API.

    Attributes:
        base_url: Provider API base URL.
        model: Default model name.
        api_key: Bearer token for the provider.
        timeout: HTTP request timeout in seconds.
        max_retries: Maximum retry attempts for timeouts and connection errors.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float = 60.0,
        max_retries: int = 2,
        requests_per_minute: float = 60.0,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Provider API key.
            model: Default model name.
            base_url: Provider API base URL (without ``/chat/completions``).
            timeout: HTTP request timeout in seconds (default: 60).
            max_retries: Maximum retries for transient failures (default: 2).
            requests_per_minute: Client-side rate limit (default: 60).
            temperature: Default sampling temperature.
            max_tokens: Default completion token cap.
            transport: Optional httpx transport override.
        """
        if not api_key:
            msg = "LLM_API_KEY must be set when the LLM provider is enabled"
            raise LLMConfigurationError(msg)
        if requests_per_minute <= 0:
            msg = "requests_per_minute must be positive"
            raise LLMConfigurationError(msg)

        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None
        # One request per (60/rpm) seconds, no initial burst
        self._rate_limiter = AsyncLimiter(1, 60.0 / requests_per_minute)

    @classmethod
    def from_settings(cls, settings: Settings) -> ChatCompletionsClient:
        llm = settings.llm
        return cls(
            api_key=settings.LLM_API_KEY,
            model=llm.model,
            base_url=llm.url,
            timeout=llm.timeout,
            max_retries=llm.max_retries,
            requests_per_minute=llm.requests_per_minute,
            temperature=llm.temperature,
            max_tokens=llm.max_tokens,
        )

    @property
    def chat_url(self) -> str:
        """Get the chat completions endpoint URL."""
        return f"{self.base_url}/chat/completions"

    async def initialize(self) -> None:
        """Initialize the HTTP client with auth headers."""
        if self._http_client is not None:
            return

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            transport=self._transport,
        )
        logger.info("Chat client initialized", model=self.model, base_url=self.base_url)

    async def shutdown(self) -> None:
        """Close the HTTP client and release connections."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            logger.debug("Chat client shutdown")

    async def _execute_with_retry(self, request: ChatRequest) -> ChatResponse:
        """Execute request, retrying timeouts and connection errors."""
        if self._http_client is None:
            await self.initialize()

        assert self._http_client is not None

        last_exception: Exception | None = None

        for attempt in range(self.max_retries + 1):
            await self._rate_limiter.acquire()

            try:
                response = await self._http_client.post(
                    self.chat_url,
                    json=request.model_dump(exclude_none=True),
                )

                if response.status_code == 429:
                    retry_after = response.headers.get("retry-after", "60")
                    msg = f"LLM rate limit exceeded, retry after {retry_after}s"
                    raise LLMRateLimitError(msg)

                response.raise_for_status()
                return ChatResponse.model_validate(response.json())

            except httpx.TimeoutException as e:
                last_exception = e
                logger.warning(
                    "LLM request timeout",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    timeout=self.timeout,
                )
                if attempt < self.max_retries:
                    continue
                msg = f"LLM timeout after {self.timeout}s"
                raise LLMTimeoutError(msg) from e

            except httpx.HTTPStatusError as e:
                logger.error(
                    "LLM request failed",
                    status_code=e.response.status_code,
                    url=self.chat_url,
                )
                msg = f"LLM provider returned {e.response.status_code}"
                raise LLMResponseError(msg) from e

            except httpx.RequestError as e:
                last_exception = e
                logger.warning(
                    "LLM connection error",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    error=str(e),
                )
                if attempt < self.max_retries:
                    continue
                msg = f"Cannot connect to LLM provider: {e}"
                raise LLMUnavailableError(msg) from e

            except (ValueError, ValidationError) as e:
                msg = "LLM provider returned an unreadable completion"
                raise LLMResponseError(msg) from e

        msg = "Max retries exceeded"
        raise LLMUnavailableError(msg) from last_exception

    async def generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        system: str | None = None,
        json_mode: bool = False,
        options: dict[str, Any] | None = None,
    ) -> LLMCompletionResult:
        """Generate a text completion.

        Args:
            prompt: Input prompt text.
            model: Model to use (defaults to client's default model).
            system: Optional system prompt for context.
            json_mode: Request ``{"type": "json_object"}`` output.
            options: ``temperature`` and ``max_tokens`` overrides.

        Returns:
            LLMCompletionResult with the raw response text.

        Raises:
            LLMUnavailableError: If the provider cannot be reached.
            LLMTimeoutError: If the request times out.
            LLMResponseError: If the provider returns an error.
            LLMRateLimitError: If the provider rate limits the request.
        """
        options = options or {}

        messages: list[ChatMessage] = []
        if system:
            messages.append(ChatMessage(role="system", content=system))
        messages.append(ChatMessage(role="user", content=prompt))

        request = ChatRequest(
            model=model or self.model,
            messages=messages,
            response_format={"type": "json_object"} if json_mode else None,
            temperature=options.get("temperature", self.temperature),
            max_tokens=options.get("max_tokens", self.max_tokens),
        )

        response = await self._execute_with_retry(request)

        usage = response.usage
        return LLMCompletionResult(
            raw_response=response.choices[0].message.content,
            model=response.model,
            prompt_tokens=usage.prompt_tokens if usage else None,
            completion_tokens=usage.completion_tokens if usage else None,
        )
