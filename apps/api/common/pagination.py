# apps/api/common/pagination.py
from __future__ import annotations

import math
from dataclasses import dataclass

from django.conf import settings


def _int_or_default(raw, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class PageRequest:
    """(page, limit) pair, clamped to page >= 1 and 1 <= limit <= max."""

    page: int
    limit: int

    @classmethod
    def build(cls, page=None, limit=None, *, default_limit: int | None = None) -> "PageRequest":
        default_limit = default_limit or settings.POSTS_DEFAULT_PAGE_SIZE
        max_limit = settings.POSTS_MAX_PAGE_SIZE
        page = max(1, _int_or_default(page, 1))
        limit = min(max(1, _int_or_default(limit, default_limit)), max_limit)
        return cls(page=page, limit=limit)

    @classmethod
    def from_query(cls, query_params, *, default_limit: int | None = None) -> "PageRequest":
        return cls.build(
            query_params.get("page"),
            query_params.get("limit"),
            default_limit=default_limit,
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def build_pagination(page_request: PageRequest, total: int) -> dict:
    total_pages = math.ceil(total / page_request.limit) if total else 0
    return {
        "page": page_request.page,
        "limit": page_request.limit,
        "total": total,
        "total_pages": total_pages,
        "has_next": page_request.page < total_pages,
        "has_prev": page_request.page > 1,
    }


def parse_csv(raw) -> list[str]:
    """Split a comma-joined value: "a, b,,c" -> ["a", "b", "c"]."""
    if not raw:
        return []
    return [part.strip() for part in str(raw).split(",") if part.strip()]
