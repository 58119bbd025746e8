from __future__ import annotations

from typing import Optional, Sequence

from services.featured.models import RankedPage, ResultEntry
from services.listings.errors import PageRequestError


def total_pages(total_count: int, page_size: int) -> int:
    return (total_count + page_size - 1) // page_size


class Paginator:
    """Slices the merged sequence into a 1-based page.

    ``merged`` may be a prefix of the full sequence as long as it covers the requested
    page; ``total_count`` then carries the length of the full sequence.
    """

    def paginate(
        self,
        merged: Sequence[ResultEntry],
        page: int,
        page_size: int,
        *,
        total_count: Optional[int] = None,
    ) -> RankedPage:
        if page < 1:
            raise PageRequestError("page must be >= 1")
        if page_size < 1:
            raise PageRequestError("page_size must be >= 1")
        total = len(merged) if total_count is None else max(total_count, len(merged))
        start = (page - 1) * page_size
        results = list(merged[start : start + page_size])
        return RankedPage(
            page=page,
            page_size=page_size,
            total_count=total,
            total_pages=total_pages(total, page_size),
            featured_count=sum(1 for entry in results if entry.featured),
            results=results,
        )
