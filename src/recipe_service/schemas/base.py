"""Base schema configuration for all Pydantic API models.

Usage:
    - APIRequest: incoming request bodies (unknown fields ignored)
    - APIResponse: outgoing response bodies (unknown fields forbidden)

Both serialize with camelCase aliases and accept either naming on input.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


# Decimals leave the API as JSON numbers rather than strings.
DecimalNumber = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class _BaseSchema(BaseModel):
    """Private base schema with common configuration."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        serialize_by_alias=True,
    )


class APIRequest(_BaseSchema):
    """Base class for incoming API request schemas."""

    model_config = ConfigDict(
        extra="ignore",
        str_strip_whitespace=True,
    )


class APIResponse(_BaseSchema):
    """Base class for outgoing API response schemas."""

    model_config = ConfigDict(
        extra="forbid",
    )
