"""
HTML helpers for rendering pagination controls.

The default markup uses Tailwind CSS classes and is rendered from
pagekit/templates/pagekit/*.html. Pass a template name or a render callable
to paginate() to replace it.

Every helper takes the current request so page links keep the query
parameters already present (filters, sorting...).
"""

import logging
from typing import Any, Callable, Optional, Union
from urllib.parse import urlencode

from fastapi import Request
from markupsafe import Markup

from pagekit.config import PaginationConfig, get_config
from pagekit.exceptions import RouteNotConfiguredError
from pagekit.services.page_service import Page
from pagekit.utils.template_config import templates
from pagekit.utils.pagination import normalize_page
from pagekit.utils.template_filters import translate as _translate

logger = logging.getLogger(__name__)

MACROS_TEMPLATE = "pagekit/macros.html"
PAGINATION_TEMPLATE = "pagekit/pagination.html"

BASE_CLASSES = "relative inline-flex items-center px-4 py-2 text-sm font-medium"
ENABLED_CLASSES = f"{BASE_CLASSES} text-gray-700 bg-white border border-gray-300"
DISABLED_CLASSES = f"{BASE_CLASSES} text-gray-500 bg-white border border-gray-300"

PREVIOUS_CLASSES = f"{ENABLED_CLASSES} rounded-l-lg hover:bg-gray-50"
PREVIOUS_DISABLED_CLASSES = f"{DISABLED_CLASSES} rounded-l-lg cursor-not-allowed"
NEXT_CLASSES = f"{ENABLED_CLASSES} rounded-r-lg hover:bg-gray-50"
NEXT_DISABLED_CLASSES = f"{DISABLED_CLASSES} rounded-r-lg cursor-not-allowed"
PAGE_CLASSES = f"{ENABLED_CLASSES} hover:bg-gray-50"
CURRENT_PAGE_CLASSES = f"{BASE_CLASSES} text-white bg-blue-600 border border-blue-600"

Renderer = Callable[[Request, str, Page], Optional[Markup]]


def _macros():
    return templates.get_template(MACROS_TEMPLATE).module


def translate(text: str, config: Optional[PaginationConfig] = None) -> str:
    """Translate a label using the configured translator, if any."""
    return _translate(text, config)


def paginate(
    request: Request,
    path: str,
    page: Page,
    template: Union[str, Renderer, None] = None,
    config: Optional[PaginationConfig] = None,
) -> Optional[Markup]:
    """
    Render navigation controls for a page.

    Args:
        request: Current request (its query params are kept in links)
        path: URL path ("/items") or route name ("list_items")
        page: Page returned by PageResolver
        template: Template name rendered instead of the default, or a
            callable (request, path, page) returning markup
        config: Config supplying translator/url_resolver (default: global)

    Returns:
        Markup, or None when everything fits on one page
    """
    if callable(template):
        return template(request, path, page)

    if page.total_entries < page.per_page:
        return None

    config = config or get_config()
    context = {
        "request": request,
        "path": path,
        "page": page,
        "pages_text": translate("Pages", config),
        "of_text": translate("of", config),
        "previous": previous_path(request, path, page.page_number, config=config),
        "next": next_path(request, path, page.page_number, page.pages, config=config),
    }
    rendered = templates.get_template(template or PAGINATION_TEMPLATE).render(context)
    return Markup(rendered)


def next_path(
    request: Request,
    path: str,
    current_page: Any,
    total_pages: int,
    config: Optional[PaginationConfig] = None,
) -> Markup:
    """Link to the following page, or a disabled "Next" on the last page."""
    label = translate("Next", config)
    current = normalize_page(current_page)
    if total_pages > current:
        url = build_url(request, path, current + 1, config=config)
        return _macros().link(label, url, NEXT_CLASSES)
    return _macros().disabled(label, NEXT_DISABLED_CLASSES)


def previous_path(
    request: Request,
    path: str,
    current_page: Any,
    config: Optional[PaginationConfig] = None,
) -> Markup:
    """Link to the preceding page, or a disabled "Previous" on the first page."""
    label = translate("Previous", config)
    current = normalize_page(current_page)
    if current > 1:
        url = build_url(request, path, current - 1, config=config)
        return _macros().link(label, url, PREVIOUS_CLASSES)
    return _macros().disabled(label, PREVIOUS_DISABLED_CLASSES)


def page_links(
    request: Request,
    path: str,
    page: Page,
    config: Optional[PaginationConfig] = None,
) -> Markup:
    """One link per page, the current page highlighted, separated by spaces."""
    macros = _macros()
    links = []
    for number in range(1, page.pages + 1):
        if number == page.page_number:
            links.append(macros.current(number, CURRENT_PAGE_CLASSES))
        else:
            url = build_url(request, path, number, config=config)
            links.append(macros.link(number, url, PAGE_CLASSES))
    return Markup(" ").join(links)


def build_url(
    request: Request,
    path: str,
    page_number: int,
    config: Optional[PaginationConfig] = None,
) -> str:
    """
    Build the URL of a page, keeping the request's query params.

    A path starting with "/" (or a full URL) is used as is. Anything else is
    treated as a route name and resolved through config.url_resolver, or
    request.url_for() when no resolver is configured.

    Example:
        >>> build_url(request, "/items?sort=desc", 3)
        '/items?sort=desc&page=3'

    Repeated keys in the request (?tag=a&tag=b) are all kept; page is
    replaced.
    """
    params = [
        (key, value)
        for key, value in request.query_params.multi_items()
        if key != "page"
    ]
    params.append(("page", page_number))
    query = urlencode(params)

    if _is_route_name(path):
        path = _resolve_route(request, path, config or get_config())

    if "?" in path:
        return f"{path}&{query}"
    return f"{path}?{query}"


def _is_route_name(path: str) -> bool:
    return not (path.startswith("/") or "?" in path or "://" in path)


def _resolve_route(request: Request, name: str, config: PaginationConfig) -> str:
    logger.debug("Resolving route %s for page link", name)
    if config.url_resolver is not None:
        return str(config.url_resolver(request, name))
    url_for = getattr(request, "url_for", None)
    if url_for is None:
        raise RouteNotConfiguredError(
            f"Cannot resolve route '{name}': configure a url_resolver "
            "or pass a path starting with '/'"
        )
    return str(url_for(name))
