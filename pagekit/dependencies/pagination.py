"""
Pagination Parameters Dependency

Provides a FastAPI dependency that collects raw pagination query params.
Values are taken as plain strings on purpose: invalid input such as
?page=abc must fall back to defaults in the resolver instead of turning
into a 422 validation error.
"""

from typing import Optional

from fastapi import Query

from pagekit.schemas.page import PageParams


async def get_page_params(
    page: Optional[str] = Query(None),
    per_page: Optional[str] = Query(None),
    total: Optional[str] = Query(None),
) -> PageParams:
    """
    Dependency returning the request's raw PageParams.

    Usage:
        @router.get("/items")
        async def list_items(
            params: PageParams = Depends(get_page_params),
            db: Session = Depends(get_db),
        ):
            page = PageResolver(config).resolve(select(Item), params)
            ...
    """
    return PageParams(page=page, per_page=per_page, total=total)
