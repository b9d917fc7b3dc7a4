"""LLM client exceptions.

These are caught at the API boundary and reported as service-unavailable,
never as internal errors.
"""

from __future__ import annotations


class LLMError(Exception):
    """Base exception for LLM client errors."""


class LLMUnavailableError(LLMError):
    """Raised when the LLM service cannot be reached.

    This includes connection errors, timeouts, and a disabled provider.
    """


class LLMTimeoutError(LLMUnavailableError):
    """Raised when an LLM request times out after all retries."""


class LLMResponseError(LLMError):
    """Raised when the LLM returns an HTTP 4xx/5xx error response."""


class LLMRateLimitError(LLMError):
    """Raised when the LLM service rate limits the request."""


class LLMConfigurationError(LLMError):
    """Raised when the LLM client is misconfigured."""


class InvalidAiResponseError(LLMError):
    """The completion did not contain a parseable JSON object."""
