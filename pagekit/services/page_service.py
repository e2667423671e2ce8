"""
Page Service - page resolution and batch traversal.

PageResolver turns (statement, raw params) into a Page:
- normalizes page/per_page/total (never raises on bad input)
- counts the full result set with a shape-aware strategy, unless the
  caller supplied a total
- fetches exactly one OFFSET/LIMIT window

BatchWalker reads a whole result set through PageResolver in fixed-size
batches. The total is counted once on the first batch and handed forward,
so the count query runs at most once per walk.

Both take a PaginationConfig at construction time. Errors from the store
propagate unchanged.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Optional, Union

from sqlalchemy.sql import Select

from pagekit.config import PaginationConfig
from pagekit.repositories.query_shape import build_count_statement, classify_query
from pagekit.schemas.page import PageParams, PageResponse
from pagekit.utils.pagination import (
    calculate_offset,
    calculate_total_pages,
    normalize_page,
    normalize_per_page,
    normalize_total,
)

logger = logging.getLogger(__name__)

Params = Union[PageParams, Mapping[str, Any], None]


def coerce_params(params: Params) -> PageParams:
    if isinstance(params, PageParams):
        return params
    return PageParams.from_mapping(params)


@dataclass(frozen=True)
class Page:
    """
    One page of a result set.

    page_number is the requested page after normalization; it is not
    clamped to pages, so a page past the end simply has no entries.
    """

    entries: List[Any]
    total_entries: int
    page_number: int
    per_page: int
    pages: int
    query: Optional[Select] = field(default=None, compare=False, repr=False)

    @property
    def has_next(self) -> bool:
        return self.page_number < self.pages

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def next_page(self) -> Optional[int]:
        return self.page_number + 1 if self.has_next else None

    @property
    def previous_page(self) -> Optional[int]:
        return self.page_number - 1 if self.has_previous else None

    def to_dict(self) -> dict:
        """JSON-safe fields only; the query is left out."""
        return {
            "entries": list(self.entries),
            "total_entries": self.total_entries,
            "page_number": self.page_number,
            "per_page": self.per_page,
            "pages": self.pages,
        }

    def to_response(self) -> PageResponse:
        return PageResponse.model_validate(self)


class PageResolver:
    """
    Resolve a single page of a statement.

    Example:
        >>> resolver = PageResolver(PaginationConfig(store=SessionStore(db)))
        >>> page = resolver.resolve(select(Item).order_by(Item.id), {"page": "2"})
        >>> page.page_number, page.pages
        (2, 3)
    """

    def __init__(self, config: PaginationConfig):
        self.config = config

    def resolve(self, query: Select, params: Params = None, **fetch_options: Any) -> Page:
        """
        Build the Page for query and the raw request params.

        Args:
            query: Statement describing the full result set, already
                filtered/sorted/grouped as needed
            params: PageParams or a mapping with "page", "per_page", "total"
            **fetch_options: Forwarded untouched to Store.fetch_window()

        Returns:
            Page with entries, counts and the original query

        Raises:
            ConfigurationError: If no store is bound
        """
        self.config.require_store()
        params = coerce_params(params)

        page_number = normalize_page(params.page)
        per_page = normalize_per_page(params.per_page, self.config.per_page)
        total = self.total_entries(query, params)

        return Page(
            entries=self.entries(query, page_number, per_page, **fetch_options),
            total_entries=total,
            page_number=page_number,
            per_page=per_page,
            pages=calculate_total_pages(total, per_page),
            query=query,
        )

    def total_entries(self, query: Select, params: PageParams) -> int:
        """Caller-supplied total if any, otherwise a shape-aware count."""
        override = normalize_total(params.total)
        if override is not None:
            return override

        store = self.config.require_store()
        count_query = build_count_statement(query, classify_query(query))
        return store.count_scalar(count_query)

    def entries(
        self, query: Select, page_number: int, per_page: int, **fetch_options: Any
    ) -> List[Any]:
        if isinstance(per_page, bool) or not isinstance(per_page, int) or per_page <= 0:
            return []

        store = self.config.require_store()
        offset = calculate_offset(page_number, per_page)
        return list(store.fetch_window(query, offset, per_page, **fetch_options))


class BatchWalker:
    """
    Read a complete result set in batches of per_group rows.

    The result is the same as one unpaged fetch, in the same order, but no
    single query returns more than per_group rows.
    """

    def __init__(self, config: PaginationConfig, resolver: Optional[PageResolver] = None):
        self.config = config
        self.resolver = resolver or PageResolver(config)

    def iter_batches(self, query: Select, params: Params = None) -> Iterator[Page]:
        """
        Yield each batch as a Page, in ascending page order.

        Stops after the batch whose page_number equals pages, or after the
        first batch when the result set is empty.
        """
        params = coerce_params(params)
        batch_size = normalize_per_page(params.per_group, self.config.per_group)

        page = self.resolver.resolve(
            query, PageParams(per_page=batch_size, total=params.total)
        )
        yield page

        while page.pages != 0 and page.page_number != page.pages:
            logger.debug(
                "Batch %d of %d done, fetching next", page.page_number, page.pages
            )
            page = self.resolver.resolve(
                query,
                PageParams(
                    page=page.page_number + 1,
                    per_page=batch_size,
                    total=page.total_entries,
                ),
            )
            yield page

    def walk_all(self, query: Select, params: Params = None) -> List[Any]:
        """
        Return every row of query, fetched batch by batch.

        Params may carry "per_group" (batch size) and "total" (trusted
        count, skips the count query).
        """
        collected: List[Any] = []
        for page in self.iter_batches(query, params):
            collected.extend(page.entries)
        return collected
