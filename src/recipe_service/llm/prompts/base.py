"""Base class for LLM prompts.

Provides a standardized interface for defining prompts with:
- A system prompt setting the persona
- Model-specific generation options
- A ``format`` method rendering the user prompt from input variables
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar


class BasePrompt(ABC):
    """Base class for all LLM prompts.

    Example:
        ```python
        class SummaryPrompt(BasePrompt):
            system_prompt = "You are a concise food writer."

            def format(self, **kwargs: Any) -> str:
                return f"Summarise this recipe as JSON:\\n\\n{kwargs['text']}"
        ```
    """

    system_prompt: ClassVar[str | None] = None
    """Optional system prompt to set context for the LLM."""

    temperature: ClassVar[float | None] = None
    """Temperature for generation (None = client default)."""

    max_tokens: ClassVar[int | None] = None
    """Maximum tokens to generate (None = client default)."""

    json_mode: ClassVar[bool] = True
    """Ask the provider for a JSON object response."""

    @abstractmethod
    def format(self, **kwargs: Any) -> str:
        """Format the prompt template with input variables.

        Args:
            **kwargs: Variables to substitute into template.

        Returns:
            Formatted prompt string ready for LLM.

        Raises:
            ValueError: If required variables are missing.
        """
        ...

    @property
    def name(self) -> str:
        """Prompt identifier for logging."""
        return self.__class__.__name__

    def get_options(self) -> dict[str, Any]:
        """Get generation options for this prompt."""
        options: dict[str, Any] = {}
        if self.temperature is not None:
            options["temperature"] = self.temperature
        if self.max_tokens is not None:
            options["max_tokens"] = self.max_tokens
        return options


def require(kwargs: dict[str, Any], key: str) -> Any:
    """Return ``kwargs[key]`` or raise ValueError naming the missing key."""
    value = kwargs.get(key)
    if value is None:
        msg = f"Missing required '{key}' argument"
        raise ValueError(msg)
    return value
