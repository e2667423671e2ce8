"""
Store - the storage collaborator used by the pagination core.

The core needs exactly three capabilities from a backing store:
- fetch_window(): run a statement restricted to OFFSET/LIMIT
- count_scalar(): run a count statement and return the integer
- raw_sql_count(): count the rows produced by a textual SQL query

SessionStore implements them on top of a SQLAlchemy Session. Errors raised
by SQLAlchemy are propagated unchanged; nothing is retried here.
"""

import logging
from typing import Any, List, Mapping, Optional, Protocol, Sequence

from sqlalchemy import text
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

logger = logging.getLogger(__name__)


class Store(Protocol):
    def fetch_window(
        self, query: Select, offset: int, limit: int, **options: Any
    ) -> Sequence[Any]: ...

    def count_scalar(self, count_query: Select) -> int: ...

    def raw_sql_count(
        self, sql: str, params: Optional[Mapping[str, Any]] = None
    ) -> int: ...


def selects_single_entity(query: Select) -> bool:
    """True when the statement selects exactly one mapped entity, e.g. select(Item)."""
    descriptions = query.column_descriptions
    if len(descriptions) != 1:
        return False
    entity = descriptions[0].get("entity")
    return entity is not None and descriptions[0].get("expr") is entity


class SessionStore:
    """
    Store backed by a SQLAlchemy Session.

    Rows are returned as ORM objects when the statement selects a single
    entity, as scalars for a single column, and as Row tuples otherwise.

    Example:
        >>> store = SessionStore(db)
        >>> resolver = PageResolver(PaginationConfig(store=store))
    """

    def __init__(self, session: Session):
        self.session = session

    def fetch_window(
        self, query: Select, offset: int, limit: int, **options: Any
    ) -> List[Any]:
        """
        Fetch limit rows starting at offset.

        Keyword options are forwarded to Session.execute(), for example
        execution_options or bind_arguments to route reads to a replica.
        """
        logger.debug("Fetching window offset=%d limit=%d", offset, limit)
        result = self.session.execute(query.offset(offset).limit(limit), **options)

        if selects_single_entity(query):
            # Joined eager loading of collections requires uniquing
            if query._with_options:
                result = result.unique()
            return list(result.scalars().all())
        if len(query.selected_columns) == 1:
            return list(result.scalars().all())
        return list(result.all())

    def count_scalar(self, count_query: Select) -> int:
        return int(self.session.execute(count_query).scalar() or 0)

    def raw_sql_count(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> int:
        """
        Count the rows produced by a textual query.

        Args:
            sql: SELECT statement text, using :name bind parameters
            params: Values for the bind parameters

        Example:
            >>> store.raw_sql_count("SELECT category FROM items GROUP BY category")
            4
        """
        count_sql = text(f"SELECT count(*) FROM ({sql}) AS count_subquery")
        return int(self.session.execute(count_sql, dict(params or {})).scalar() or 0)
