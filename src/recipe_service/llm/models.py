"""LLM client data models.

Request/response bodies for OpenAI-compatible ``/chat/completions`` APIs.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LLMCompletionResult(BaseModel):
    """Internal result from an LLM completion."""

    model_config = ConfigDict(frozen=True)

    raw_response: str = Field(..., description="Raw text response from LLM")
    model: str = Field(..., description="Model that generated response")
    prompt_tokens: int | None = Field(default=None, description="Input token count")
    completion_tokens: int | None = Field(
        default=None, description="Output token count"
    )


# =============================================================================
# Chat completions API models
# =============================================================================


class ChatMessage(BaseModel):
    """Single message in chat format."""

    role: str = Field(..., description="Message role: system, user, or assistant")
    content: str = Field(..., description="Message content")


class ChatRequest(BaseModel):
    """Request body for the /chat/completions endpoint."""

    model: str = Field(..., description="Model name (e.g., 'gpt-4o-mini')")
    messages: list[ChatMessage] = Field(..., description="Chat messages")
    response_format: dict[str, str] | None = Field(
        default=None,
        description="Response format: {'type': 'json_object'} for JSON mode",
    )
    temperature: float = Field(default=0.7, description="Sampling temperature")
    max_tokens: int | None = Field(default=None, description="Maximum tokens to generate")
    stream: bool = False


class ChatUsage(BaseModel):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int | None = None


class ChatChoice(BaseModel):
    index: int = 0
    message: ChatMessage
    finish_reason: str | None = None


class ChatResponse(BaseModel):
    """Response from the /chat/completions endpoint."""

    id: str | None = None
    model: str = Field(..., description="Model that generated response")
    choices: list[ChatChoice] = Field(..., min_length=1)
    usage: ChatUsage | None = None
