"""
pagekit - offset/limit pagination for SQLAlchemy statements.

Module-level helpers use the default config installed with configure():

    import pagekit
    from pagekit.repositories import SessionStore

    pagekit.configure(store=SessionStore(db))
    page = pagekit.new(select(Item).order_by(Item.id), {"page": "2"})
    everything = pagekit.in_groups(select(Item).order_by(Item.id))

For explicit wiring, build PageResolver/BatchWalker with a PaginationConfig.
"""

from typing import Any, List

from sqlalchemy.sql import Select

from pagekit.config import PaginationConfig, Settings, configure, get_config
from pagekit.exceptions import ConfigurationError, PaginationError, RouteNotConfiguredError
from pagekit.services.page_service import (
    BatchWalker,
    Page,
    PageResolver,
    Params,
)
from pagekit.schemas.page import PageParams, PageResponse
from pagekit.web.html import (
    build_url,
    next_path,
    page_links,
    paginate,
    previous_path,
    translate,
)


def new(query: Select, params: Params = None, **fetch_options: Any) -> Page:
    """Resolve one page of query using the default config."""
    return PageResolver(get_config()).resolve(query, params, **fetch_options)


def in_groups(query: Select, params: Params = None) -> List[Any]:
    """Fetch every row of query in batches using the default config."""
    return BatchWalker(get_config()).walk_all(query, params)


__all__ = [
    "new",
    "in_groups",
    "configure",
    "get_config",
    "PaginationConfig",
    "Settings",
    "Page",
    "PageParams",
    "PageResponse",
    "PageResolver",
    "BatchWalker",
    "PaginationError",
    "ConfigurationError",
    "RouteNotConfiguredError",
    "paginate",
    "next_path",
    "previous_path",
    "page_links",
    "build_url",
    "translate",
]
