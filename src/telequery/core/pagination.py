"""Page slicing for filtered record sets."""

import math
from collections.abc import Sequence

from telequery.core.models import Page, TelemetryRecord


def _validate(page: int, page_size: int) -> None:
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size <= 0:
        raise ValueError(f"page_size must be > 0, got {page_size}")


def paginate(
    records: Sequence[TelemetryRecord], page: int, page_size: int
) -> list[TelemetryRecord]:
    """Return the records of a 1-based page.

    Pages beyond the end are empty rather than an error.

    Raises:
        ValueError: If page < 1 or page_size <= 0.
    """
    _validate(page, page_size)
    start = (page - 1) * page_size
    return list(records[start : start + page_size])


def total_pages(total_items: int, page_size: int) -> int:
    """Number of pages needed to show total_items, never less than 1."""
    if page_size <= 0:
        raise ValueError(f"page_size must be > 0, got {page_size}")
    return max(1, math.ceil(total_items / page_size))


def page_of(records: Sequence[TelemetryRecord], page: int, page_size: int) -> Page:
    """Slice a page and bundle it with its display values."""
    return Page(
        items=paginate(records, page, page_size),
        page=page,
        page_size=page_size,
        total_items=len(records),
    )
