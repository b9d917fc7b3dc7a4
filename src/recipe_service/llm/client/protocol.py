"""LLM Client Protocol definition.

Services depend on this interface rather than a concrete provider so tests
can substitute a fake client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:
    from recipe_service.llm.models import LLMCompletionResult


@runtime_checkable
class LLMClientProtocol(Protocol):
    """Protocol for LLM client implementations."""

    async def initialize(self) -> None:
        """Initialize client resources (HTTP connections, etc.)."""
        ...

    async def shutdown(self) -> None:
        """Release client resources."""
        ...

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
            model: Model override (uses client default if None).
            system: Optional system prompt.
            json_mode: Ask the provider to answer with a JSON object.
            options: Generation options (temperature, max_tokens).

        Returns:
            LLMCompletionResult with the raw response text.

        Raises:
            LLMUnavailableError: Service unreachable or disabled.
            LLMTimeoutError: Request timed out.
            LLMResponseError: HTTP error from service.
            LLMRateLimitError: Provider rejected the request with 429.
        """
        ...
