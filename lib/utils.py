# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import re
from datetime import datetime, timezone
from typing import Any

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# page * limit must stay inside MongoDB's signed 64-bit skip/limit
MAX_QUERY_INT = 2**31 - 1


# =============================================================================
# Query String Utilities
# =============================================================================

def parse_positive_int(value: Any, default: int) -> int:
    """
    Parse a page/limit query value, falling back to `default`.

    Only the leading integer is read, so "3abc" parses as 3. Missing,
    non-numeric, zero, negative and out-of-range (above MAX_QUERY_INT)
    values all return `default`.

    Example:
        parse_positive_int("2", 1)     # 2
        parse_positive_int("abc", 10)  # 10
        parse_positive_int(None, 10)   # 10
    """
    if value is None:
        return default
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    else:
        match = _LEADING_INT.match(str(value))
        if not match:
            return default
        # Too many digits to be in range; also keeps int() off huge strings
        if len(match.group(1).lstrip("+-0")) > len(str(MAX_QUERY_INT)):
            return default
        number = int(match.group(1))
    return number if 1 <= number <= MAX_QUERY_INT else default


def page_offset(page: int, limit: int) -> int:
    """Number of documents to skip to reach the start of `page`."""
    return (page - 1) * limit


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now() -> datetime:
    """
    Current UTC time truncated to milliseconds.

    MongoDB stores dates with millisecond precision; truncating up front
    keeps the value returned by a write equal to the value read back.
    """
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)
