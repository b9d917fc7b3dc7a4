"""Schemas shared across endpoints."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import Field

from .base import APIResponse


if TYPE_CHECKING:
    from recipe_service.db.repositories import Page


T = TypeVar("T")


class PageResponse(APIResponse, Generic[T]):
    """One page of a paginated listing."""

    content: list[T]
    page: int = Field(..., ge=0, description="Zero-based page index")
    size: int = Field(..., ge=1)
    total_elements: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    first: bool
    last: bool

    @classmethod
    def from_page(cls, page: Page[Any], convert: Callable[[Any], T]) -> PageResponse[T]:
        return cls(
            content=[convert(item) for item in page.content],
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            first=page.first,
            last=page.last,
        )
