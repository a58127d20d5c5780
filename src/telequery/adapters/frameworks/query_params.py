"""Query parameter parsing utilities for framework adapters.

This module provides lenient parsing of the time bound parameters shared by
the query endpoints.
"""

import math


def _parse_time_param(raw: str | None) -> int | None:
    """Parse a millisecond timestamp query parameter.

    Args:
        raw: Raw parameter value, or None if missing.

    Returns:
        Timestamp as int, or None (unbounded) if missing or invalid.
        Negative values are real bounds, so an end before every record
        selects nothing. NaN and infinite values return None.
    """
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return int(value)
