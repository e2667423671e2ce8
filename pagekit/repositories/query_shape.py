"""
Query shape classification and count statement construction.

A plain COUNT over a grouped, distinct or outer-joined statement gives the
wrong answer, while wrapping every statement in a subquery is always right
but slower. The statement is classified first and the cheapest correct
count is built for its shape:

- SIMPLE: no GROUP BY, no DISTINCT, no outer joins
  -> SELECT count(pk) FROM <original froms> WHERE ...
- GROUPED_OR_DISTINCT: GROUP BY or DISTINCT present
  -> SELECT count(*) FROM (<statement with its selection>) AS anon
- JOINED: LEFT/RIGHT/FULL OUTER join present
  -> SELECT count(*) FROM (SELECT 1 FROM <joins> WHERE ...) AS anon

In every case ORDER BY, LIMIT/OFFSET and loader strategy options are
stripped. with_loader_criteria() options filter rows, so they are kept and
the count goes through a subquery that still selects the filtered entity.
The original statement is never modified; Select is generative.
"""

import enum
import logging
from typing import Any, Optional

from sqlalchemy import func, inspect, literal_column, select
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm.util import LoaderCriteriaOption
from sqlalchemy.sql import Select
from sqlalchemy.sql.selectable import Join

logger = logging.getLogger(__name__)


class QueryShape(str, enum.Enum):
    SIMPLE = "simple"
    GROUPED_OR_DISTINCT = "grouped_or_distinct"
    JOINED = "joined"


def has_group_by(stmt: Select) -> bool:
    return bool(stmt._group_by_clauses)


def has_distinct(stmt: Select) -> bool:
    return bool(stmt._distinct or stmt._distinct_on)


def _is_outer(join: Join) -> bool:
    if join.isouter or join.full:
        return True
    return any(
        isinstance(side, Join) and _is_outer(side) for side in (join.left, join.right)
    )


def has_outer_join(stmt: Select) -> bool:
    """
    True if the statement contains a LEFT/RIGHT/FULL OUTER join.

    Looks at joins added with Select.join()/outerjoin() as well as Join
    objects passed to select_from(). Inner joins do not count.
    """
    for _target, _onclause, _from, flags in stmt._setup_joins:
        if flags.get("isouter") or flags.get("full"):
            return True
    return any(isinstance(f, Join) and _is_outer(f) for f in stmt._from_obj)


def classify_query(stmt: Select) -> QueryShape:
    """
    Decide which counting strategy a statement needs.

    Grouping and DISTINCT take precedence over joins: the subquery they get
    keeps the selection, which is what makes the count correct.
    """
    if has_group_by(stmt) or has_distinct(stmt):
        return QueryShape.GROUPED_OR_DISTINCT
    if has_outer_join(stmt):
        return QueryShape.JOINED
    return QueryShape.SIMPLE


def has_loader_criteria(stmt: Select) -> bool:
    return any(isinstance(opt, LoaderCriteriaOption) for opt in stmt._with_options)


def strip_for_count(stmt: Select) -> Select:
    """
    Drop ORDER BY, LIMIT/OFFSET and loader strategy options from a statement copy.

    with_loader_criteria() options are kept: they change which rows match.
    """
    stripped = stmt.order_by(None).limit(None).offset(None)
    if stripped._with_options:
        kept = tuple(
            opt for opt in stripped._with_options if isinstance(opt, LoaderCriteriaOption)
        )
        stripped = stripped._generate()
        stripped._with_options = kept
    return stripped


def primary_key_column(stmt: Select) -> Optional[Any]:
    """
    Single-column primary key of the first mapped entity in the selection.

    Returns None for Core-only statements, composite keys or statements
    whose first column is not tied to a mapped class.
    """
    descriptions = stmt.column_descriptions
    if not descriptions:
        return None
    entity = descriptions[0].get("entity")
    if entity is None:
        return None
    try:
        mapper = inspect(entity).mapper
    except NoInspectionAvailable:
        return None
    if len(mapper.primary_key) != 1:
        return None
    if inspect(entity).is_aliased_class:
        return getattr(entity, mapper.get_property_by_column(mapper.primary_key[0]).key)
    return mapper.primary_key[0]


def build_count_statement(stmt: Select, shape: Optional[QueryShape] = None) -> Select:
    """
    Build the SELECT that counts the rows of stmt.

    Args:
        stmt: Statement describing the full, unpaged result set
        shape: Precomputed shape; classified here when omitted

    Returns:
        A statement returning a single integer
    """
    shape = shape or classify_query(stmt)
    stripped = strip_for_count(stmt)

    if has_loader_criteria(stripped):
        # criteria attach to the selected entity, which a bare count would drop
        count_stmt = select(func.count()).select_from(stripped.subquery())
    elif shape is QueryShape.SIMPLE:
        pk = primary_key_column(stripped)
        counter = func.count(pk) if pk is not None else func.count()
        count_stmt = stripped.with_only_columns(counter, maintain_column_froms=True)
    elif shape is QueryShape.GROUPED_OR_DISTINCT:
        count_stmt = select(func.count()).select_from(stripped.subquery())
    else:
        rows = stripped.with_only_columns(
            literal_column("1").label("one"), maintain_column_froms=True
        )
        count_stmt = select(func.count()).select_from(rows.subquery())

    logger.debug("Counting %s query", shape.value)
    return count_stmt
