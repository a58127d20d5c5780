"""Core domain models for telemetry queries."""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventType(str, Enum):
    """Category of a telemetry event."""

    REQUEST = "request"
    ERROR = "error"
    WARNING = "warning"
    METRIC = "metric"
    TRACE = "trace"


class AggregationMethod(str, Enum):
    """Scalar reduction applied to a filtered record set."""

    COUNT = "count"
    AVERAGE = "average"
    P95 = "p95"


@dataclass(frozen=True)
class TelemetryRecord:
    """A single telemetry event.

    Attributes:
        id: Unique identifier.
        timestamp: Unix timestamp in milliseconds.
        value: Numeric measurement (latency, status code, CPU %, ...).
        event_type: Category of the event.
        source: Name of the emitting service.
    """

    id: str
    timestamp: int
    value: float
    event_type: EventType
    source: str


def _as_set(values: Iterable[Any] | str) -> frozenset[Any]:
    # A bare string is one value, not an iterable of characters
    if isinstance(values, str):
        return frozenset({values})
    return frozenset(values)


def _coerce_event_types(
    values: Iterable[EventType | str] | str,
) -> frozenset[EventType]:
    return frozenset(EventType(v) for v in _as_set(values))


@dataclass(frozen=True)
class FilterCriteria:
    """Time-range and categorical constraints for a query.

    Attributes:
        start_time: Inclusive lower bound in ms, or None for unbounded.
        end_time: Inclusive upper bound in ms, or None for unbounded.
        event_types: Allowed event types. Empty means no restriction.
        sources: Allowed sources. Empty means no restriction.
    """

    start_time: int | None = None
    end_time: int | None = None
    event_types: frozenset[EventType] = field(default_factory=frozenset)
    sources: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # Accept lists, tuples and single values from callers.
        object.__setattr__(self, "event_types", _coerce_event_types(self.event_types))
        object.__setattr__(self, "sources", _as_set(self.sources))

    @property
    def is_unrestricted(self) -> bool:
        """True when the criteria match every record."""
        return (
            self.start_time is None
            and self.end_time is None
            and not self.event_types
            and not self.sources
        )


@dataclass(frozen=True)
class AggregatedResult:
    """Result of reducing a record set to a scalar.

    Attributes:
        value: The aggregated value.
        count: Number of records that were aggregated.
        method: The aggregation method that produced the value.
    """

    value: float
    count: int
    method: AggregationMethod


@dataclass(frozen=True)
class Page:
    """A bounded, ordered view into a filtered record set."""

    items: list[TelemetryRecord]
    page: int
    page_size: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_items / self.page_size))


@dataclass(frozen=True)
class QueryOutcome:
    """Filtered records and their aggregate for one dispatched request."""

    request_id: int
    records: list[TelemetryRecord]
    result: AggregatedResult
