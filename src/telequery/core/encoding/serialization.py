"""Flat dict serialization of query models.

Field names follow the wire format: camelCase, timestamps as integers,
unbounded times as None, sets as sorted lists.
"""

from typing import Any

from telequery.core.models import (
    AggregatedResult,
    EventType,
    FilterCriteria,
    Page,
    TelemetryRecord,
)


def record_to_dict(record: TelemetryRecord) -> dict[str, Any]:
    """Convert a TelemetryRecord to a flat dict."""
    return {
        "id": record.id,
        "timestamp": record.timestamp,
        "value": record.value,
        "eventType": record.event_type.value,
        "source": record.source,
    }


def record_from_dict(data: dict[str, Any]) -> TelemetryRecord:
    """Build a TelemetryRecord from a flat dict.

    Raises:
        ValueError: If eventType is not a known event type.
        KeyError: If a field is missing.
    """
    return TelemetryRecord(
        id=str(data["id"]),
        timestamp=int(data["timestamp"]),
        value=float(data["value"]),
        event_type=EventType(data["eventType"]),
        source=str(data["source"]),
    )


def criteria_to_dict(criteria: FilterCriteria) -> dict[str, Any]:
    """Convert FilterCriteria to a flat dict."""
    return {
        "startTime": criteria.start_time,
        "endTime": criteria.end_time,
        "eventTypes": sorted(t.value for t in criteria.event_types),
        "sources": sorted(criteria.sources),
    }


def criteria_from_dict(data: dict[str, Any]) -> FilterCriteria:
    """Build FilterCriteria from a flat dict; missing keys mean no restriction."""
    start = data.get("startTime")
    end = data.get("endTime")
    return FilterCriteria(
        start_time=None if start is None else int(start),
        end_time=None if end is None else int(end),
        event_types=frozenset(EventType(t) for t in data.get("eventTypes") or []),
        sources=frozenset(data.get("sources") or []),
    )


def result_to_dict(result: AggregatedResult) -> dict[str, Any]:
    """Convert an AggregatedResult to a flat dict."""
    return {
        "value": result.value,
        "count": result.count,
        "method": result.method.value,
    }


def page_to_dict(page: Page) -> dict[str, Any]:
    """Convert the display values of a Page to a flat dict (items excluded)."""
    return {
        "page": page.page,
        "pageSize": page.page_size,
        "totalItems": page.total_items,
        "totalPages": page.total_pages,
    }
