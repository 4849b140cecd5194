# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Page-number pagination over SQLAlchemy queries.
"""
import math
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Query


@dataclass
class Page:
    """One page of query results plus the numbers needed for navigation."""
    items: list[Any]
    total: int
    per_page: int
    current_page: int

    @property
    def last_page(self) -> int:
        return max(math.ceil(self.total / self.per_page), 1)

    @property
    def has_next(self) -> bool:
        return self.current_page < self.last_page

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    def as_dict(self, url: Optional[Any] = None) -> dict:
        """Render pagination metadata.

        Args:
            url: starlette URL of the current request, used to build the
                next/previous links (None leaves them empty)
        """
        next_url = prev_url = None
        if url is not None:
            if self.has_next:
                next_url = str(url.include_query_params(page=self.current_page + 1))
            if self.has_previous:
                prev_url = str(url.include_query_params(page=self.current_page - 1))
        return {
            "total": self.total,
            "per_page": self.per_page,
            "current_page": self.current_page,
            "last_page": self.last_page,
            "next_page_url": next_url,
            "prev_page_url": prev_url,
        }


def paginate(query: Query, page: int, per_page: int) -> Page:
    """Run ``query`` for one page.

    Args:
        query: Ordered query
        page: 1-based page number (values below 1 mean page 1)
        per_page: Page size

    Returns:
        Page: Items of the requested page and the total row count
    """
    page = max(page, 1)
    total = query.order_by(None).count()
    items = query.offset((page - 1) * per_page).limit(per_page).all()
    return Page(items=items, total=total, per_page=per_page, current_page=page)
