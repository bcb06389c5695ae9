from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from datatable_engine.exceptions import InvalidPageSizeError

T = TypeVar("T")


@dataclass(frozen=True)
class PageWindow(Generic[T]):
    rows: tuple[T, ...]
    page: int
    page_size: int
    total: int
    total_pages: int


def validate_page_size(page_size: object) -> int:
    if isinstance(page_size, bool) or not isinstance(page_size, int):
        raise InvalidPageSizeError(f"page_size must be an integer, got {page_size!r}")
    if page_size <= 0:
        raise InvalidPageSizeError(f"page_size must be >= 1, got {page_size}")
    return page_size


def total_pages(total: int, page_size: int) -> int:
    return (total + page_size - 1) // page_size


def paginate(rows: Sequence[T], page_size: int, page: int) -> PageWindow[T]:
    total = len(rows)
    start = max(page - 1, 0) * page_size
    end = max(page, 0) * page_size
    return PageWindow(
        rows=tuple(rows[start:end]),
        page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages(total, page_size),
    )


def can_previous(page: int) -> bool:
    return page > 1


def can_next(page: int, pages: int) -> bool:
    return pages > 1 and page < pages
