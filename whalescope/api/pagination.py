"""Pagination helpers shared by the list endpoints."""

import math
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

from fastapi import Query
from pydantic import BaseModel, Field

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class PaginationMeta(BaseModel):
    """Pagination block returned with every list response."""

    page: int = Field(..., description="Current page, 1-indexed")
    limit: int = Field(..., description="Items per page")
    total: int = Field(..., description="Total number of matching items")
    totalPages: int = Field(..., description="Number of pages")
    hasNext: bool = Field(..., description="Whether a next page exists")
    hasPrev: bool = Field(..., description="Whether a previous page exists")


@dataclass
class PageParams:
    page: int
    limit: int


def page_params(
    page: int = Query(1, description="Page number (1-indexed)"),
    limit: int = Query(DEFAULT_PAGE_SIZE, description=f"Items per page (max {MAX_PAGE_SIZE})")
) -> PageParams:
    """Read pagination query parameters, clamping them into range.

    Out of range values are not rejected: the page is raised to 1 and the
    limit clamped to [1, 100].
    """
    return PageParams(
        page=max(1, page),
        limit=min(MAX_PAGE_SIZE, max(1, limit)),
    )


def paginate(items: Sequence[Any], params: PageParams) -> Tuple[List[Any], PaginationMeta]:
    """Slice one page out of a list.

    Args:
        items: All matching items, already filtered and sorted
        params: Requested page and page size

    Returns:
        Tuple of (items on the page, pagination metadata)
    """
    total = len(items)
    total_pages = math.ceil(total / params.limit)
    start = (params.page - 1) * params.limit

    meta = PaginationMeta(
        page=params.page,
        limit=params.limit,
        total=total,
        totalPages=total_pages,
        hasNext=params.page < total_pages,
        hasPrev=params.page > 1,
    )
    return list(items[start:start + params.limit]), meta
