"""
Offset pagination over Oracle Fusion REST collections.

Each step requests one page of ``limit`` items at the current ``offset``
and reports an explicit outcome:

- PAGE: items were returned (``has_more`` tells whether to continue)
- EXHAUSTED: the response carried no ``items`` list
- FAILED: the request failed (after retries, when a policy is set)

A failed request ends pagination quietly; it is logged and recorded on
``Pager.failed`` rather than raised. Unparsable bodies raise
``PageFormatError`` unless a retry policy absorbs them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

import httpx

from ..exceptions import PageFormatError, RetryError
from .context import SourceContext
from .retry import RetryPolicy

logger = logging.getLogger(__name__)


class PageStatus(str, Enum):
    PAGE = "page"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


@dataclass
class Page:
    """One batch of items as returned by the server."""

    items: List[Dict[str, Any]]
    has_more: bool
    offset: int


@dataclass
class PageOutcome:
    status: PageStatus
    page: Optional[Page] = None
    error: Optional[str] = None


@dataclass
class PageCursor:
    """Pagination state: offset advances by page_size per page."""

    page_size: int
    offset: int = 0
    has_more: bool = True

    def advance(self, has_more: bool) -> None:
        self.offset += self.page_size
        self.has_more = has_more


@dataclass
class Pager:
    """Lazy, finite, single-use sequence of pages.

    Usage:
        pager = Pager(context, url, ["SupplierId", "Supplier"])
        async for page in pager.pages():
            ...
    """

    context: SourceContext
    url: str
    fields: Sequence[str]
    order_by: Optional[str] = None
    params: Dict[str, str] = field(default_factory=dict)
    retry: Optional[RetryPolicy] = None
    description: str = "items"
    failed: bool = field(default=False, init=False)
    _consumed: bool = field(default=False, init=False, repr=False)

    def build_params(self, offset: int) -> Dict[str, str]:
        """Query parameters for the page at ``offset``."""
        params = {
            "limit": str(self.context.page_size),
            "onlyData": "true",
            "totalResults": "true",
            "fields": ",".join(self.fields),
        }
        if self.order_by:
            params["orderBy"] = f"{self.order_by}:desc"
        params.update(self.params)
        params["offset"] = str(offset)
        return params

    async def _request_page(self, offset: int) -> Optional[Page]:
        """Issue one page request; None means the body had no items."""
        response = await self.context.client.get(
            self.url,
            params=self.build_params(offset),
            headers=self.context.headers,
        )
        response.raise_for_status()

        try:
            body = response.json()
        except ValueError as e:
            raise PageFormatError(f"Could not parse {self.description} page at offset {offset}") from e

        if not isinstance(body, dict):
            raise PageFormatError(f"Unexpected {self.description} page body at offset {offset}")

        items = body.get("items")
        if items is None:
            return None
        if not isinstance(items, list):
            raise PageFormatError(f"'items' is not a list in {self.description} page at offset {offset}")

        return Page(items=items, has_more=bool(body.get("hasMore", False)), offset=offset)

    async def fetch(self, offset: int) -> PageOutcome:
        """Fetch one page and classify the result."""
        try:
            if self.retry is not None:
                page = await self.retry.run(
                    self._request_page,
                    offset,
                    description=f"{self.description} page at offset {offset}",
                )
            else:
                page = await self._request_page(offset)
        except (RetryError, httpx.HTTPError) as e:
            return PageOutcome(PageStatus.FAILED, error=str(e))

        if page is None:
            return PageOutcome(PageStatus.EXHAUSTED)
        return PageOutcome(PageStatus.PAGE, page=page)

    async def pages(self) -> AsyncIterator[Page]:
        """Yield pages until the server reports no more data."""
        if self._consumed:
            raise RuntimeError("Pager has already been consumed")
        self._consumed = True

        cursor = PageCursor(page_size=self.context.page_size)
        while cursor.has_more:
            logger.info(
                f"Retrieving {self.description}, {cursor.offset} - "
                f"{cursor.offset + cursor.page_size}..."
            )
            outcome = await self.fetch(cursor.offset)

            if outcome.status is PageStatus.FAILED:
                self.failed = True
                logger.warning(f"Stopping {self.description} pagination: {outcome.error}")
                return
            if outcome.status is PageStatus.EXHAUSTED:
                return

            yield outcome.page
            cursor.advance(outcome.page.has_more)
