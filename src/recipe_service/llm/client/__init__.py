"""LLM client implementations."""

from recipe_service.llm.client.chat import ChatCompletionsClient
from recipe_service.llm.client.protocol import LLMClientProtocol


__all__ = ["ChatCompletionsClient", "LLMClientProtocol"]
