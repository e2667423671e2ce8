from pagekit.schemas.page import PageInput, PageParams, PageResponse

__all__ = [
    # Pagination schemas
    "PageInput",
    "PageParams",
    "PageResponse",
]
