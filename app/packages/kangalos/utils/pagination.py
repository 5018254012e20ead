"""Offset pagination helpers.

``compute_meta`` turns ``(total, page, limit)`` into the navigation block every
list endpoint returns under ``meta.pagination``. It is a pure function and
accepts pages beyond the last one: such a page simply has ``count == 0``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, Optional, TypedDict, TypeVar

T = TypeVar("T")


class PaginationLinks(TypedDict):
    first: str
    last: str
    prev: Optional[str]
    next: Optional[str]


class PaginationMeta(TypedDict):
    total: int
    count: int
    perPage: int
    currentPage: int
    totalPages: int
    links: PaginationLinks


def _link(base_url: str, page: int, limit: int) -> str:
    return f"{base_url}?page={page}&limit={limit}"


def compute_meta(total: int, page: int, limit: int, base_url: str) -> PaginationMeta:
    if total < 0:
        raise ValueError("total must be non-negative")
    if page < 1 or limit < 1:
        raise ValueError("page and limit must be positive")

    total_pages = math.ceil(total / limit)
    count = max(0, min(limit, total - (page - 1) * limit))

    return {
        "total": total,
        "count": count,
        "perPage": limit,
        "currentPage": page,
        "totalPages": total_pages,
        "links": {
            "first": _link(base_url, 1, limit),
            "last": _link(base_url, total_pages or 1, limit),
            "prev": _link(base_url, page - 1, limit) if page > 1 else None,
            "next": _link(base_url, page + 1, limit) if page < total_pages else None,
        },
    }


@dataclass
class PaginatedResult(Generic[T]):
    """一次分页查询的结果：当前页数据与同一过滤条件下的总数。"""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    def meta(self, base_url: str) -> PaginationMeta:
        return compute_meta(self.total, self.page, self.limit, base_url)
