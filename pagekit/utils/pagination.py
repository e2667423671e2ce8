"""
Generic pagination utilities.

Pure functions for parameter normalization and pagination math. They do
not touch the database and never raise on bad input: anything that cannot
be understood falls back to a safe default.

For the database-facing side, see:
- Counting strategies: pagekit.repositories.query_shape
- Page resolution and batch walking: pagekit.services.page_service
"""

import logging
import re
from typing import Optional, Union

logger = logging.getLogger(__name__)

RawParam = Union[int, str, None]

_LEADING_INT = re.compile(r"[+-]?\d+")


def parse_int(value: str) -> Optional[int]:
    """
    Parse the leading integer of a string.

    Trailing garbage is ignored ("12abc" -> 12); a string that does not
    start with an integer returns None.

    Example:
        >>> parse_int("2")
        2
        >>> parse_int("10items")
        10
        >>> parse_int("invalid") is None
        True
    """
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group())


def _as_int(value: RawParam) -> Optional[int]:
    # bool is an int subclass but never a meaningful page number
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return parse_int(value)
    return None


def normalize_page(value: RawParam) -> int:
    """
    Normalize a raw page number to an integer >= 1.

    Missing, non-numeric or unsupported values give 1.
    """
    parsed = _as_int(value)
    if parsed is None:
        if value is not None:
            logger.debug("Unparseable page %r, using 1", value)
        return 1
    return max(1, parsed)


def normalize_per_page(value: RawParam, default: int) -> int:
    """
    Normalize a raw page size to a positive integer.

    Missing, zero, negative, non-numeric or unsupported values give default.
    """
    parsed = _as_int(value)
    if parsed is None or parsed <= 0:
        if value is not None:
            logger.debug("Invalid per_page %r, using default %d", value, default)
        return default
    return parsed


def normalize_total(value: RawParam) -> Optional[int]:
    """
    Normalize a caller-supplied total.

    Returns None when no override was given (the count must be computed),
    otherwise a non-negative integer. Negative or unparseable values clamp to 0.
    """
    if value is None:
        return None
    parsed = _as_int(value)
    if parsed is None or parsed < 0:
        logger.debug("Invalid total override %r, using 0", value)
        return 0
    return parsed


def calculate_offset(page: int, per_page: int) -> int:
    """Offset of the first row of a page (never negative)."""
    return max(0, per_page * (page - 1))


def calculate_total_pages(total: int, per_page: int) -> int:
    """
    Number of pages needed for total items.

    Integer ceiling division, so large totals do not suffer from float
    rounding. Returns 0 for an empty result set or an invalid page size.

    Example:
        >>> calculate_total_pages(30, 10)
        3
        >>> calculate_total_pages(31, 10)
        4
        >>> calculate_total_pages(0, 10)
        0
    """
    if isinstance(per_page, bool) or not isinstance(per_page, int) or per_page <= 0:
        return 0
    if total <= 0:
        return 0
    return (total + per_page - 1) // per_page
