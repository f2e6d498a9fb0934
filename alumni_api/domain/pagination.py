"""Pagination math shared by listing endpoints."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_PAGE = 100_000
MAX_LIMIT = 100


@dataclass
class Page:
    total: int
    total_pages: int
    current_page: int
    has_next_page: bool
    has_prev_page: bool
    per_page: int
    results: list[Any] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "totalPages": self.total_pages,
            "currentPage": self.current_page,
            "hasNextPage": self.has_next_page,
            "hasPrevPage": self.has_prev_page,
            "perPage": self.per_page,
            "results": self.results,
        }


def normalize(page: int | None, limit: int | None) -> tuple[int, int]:
    """Fall back to the defaults for missing or non-positive values and cap both at their maximum."""
    page_number = min(page, MAX_PAGE) if page and page > 0 else DEFAULT_PAGE
    per_page = min(limit, MAX_LIMIT) if limit and limit > 0 else DEFAULT_LIMIT
    return page_number, per_page


def offset_for(page: int, per_page: int) -> int:
    return (page - 1) * per_page


def build_page(total: int, page: int, per_page: int, results: list[Any]) -> Page:
    total_pages = math.ceil(total / per_page) if per_page else 0
    return Page(
        total=total,
        total_pages=total_pages,
        current_page=page,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
        per_page=per_page,
        results=results,
    )
