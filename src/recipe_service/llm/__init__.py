"""LLM integration module.

Provides a client for OpenAI-compatible chat-completions providers and the
prompt templates used by the AI helper endpoints.
"""

from recipe_service.llm.client import ChatCompletionsClient, LLMClientProtocol
from recipe_service.llm.exceptions import (
    InvalidAiResponseError,
    LLMConfigurationError,
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from recipe_service.llm.models import LLMCompletionResult
from recipe_service.llm.prompts import BasePrompt


__all__ = [
    "BasePrompt",
    "ChatCompletionsClient",
    "InvalidAiResponseError",
    "LLMClientProtocol",
    "LLMCompletionResult",
    "LLMConfigurationError",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponseError",
    "LLMTimeoutError",
    "LLMUnavailableError",
]
