"""
Repository layer for pagekit.

Repositories hold everything that talks to the database: the Store
collaborator and the count statement strategies.
"""

from pagekit.repositories.store import (
    Store,
    SessionStore,
    selects_single_entity,
)

from pagekit.repositories.query_shape import (
    QueryShape,
    classify_query,
    build_count_statement,
    strip_for_count,
)

__all__ = [
    "Store",
    "SessionStore",
    "selects_single_entity",
    "QueryShape",
    "classify_query",
    "build_count_statement",
    "strip_for_count",
]
