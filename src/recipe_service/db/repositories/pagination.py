"""Paging and sorting primitives shared by list queries."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar


T = TypeVar("T")
R = TypeVar("R")


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def _missing_(cls, value: object) -> SortDirection | None:
        # Accept "ASC", "Desc", ...
        if isinstance(value, str):
            return cls.__members__.get(value.upper())
        return None


class SortField(StrEnum):
    """Fields list endpoints may sort by, in API naming."""

    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    TITLE = "title"
    AVERAGE_RATING = "averageRating"
    RATING_COUNT = "ratingCount"
    COOKING_TIME = "cookingTimeMinutes"
    PREP_TIME = "prepTimeMinutes"
    SERVINGS = "servings"


@dataclass(frozen=True, slots=True)
class PageRequest:
    """Zero-based page request with a sort field in API (camelCase) naming."""

    page: int = 0
    size: int = 20
    sort_by: SortField = SortField.CREATED_AT
    sort_dir: SortDirection = SortDirection.DESC

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """One page of results plus the totals needed to navigate."""

    content: list[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0

    @property
    def first(self) -> bool:
        return self.page == 0

    @property
    def last(self) -> bool:
        return self.page + 1 >= self.total_pages

    def map(self, fn: Callable[[T], R]) -> Page[R]:
        return Page(
            content=[fn(item) for item in self.content],
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
        )
