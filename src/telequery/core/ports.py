"""Port interfaces for record stores and query engines.

These protocols define the contracts that adapters must implement.
The HTTP adapter depends only on these interfaces, not concrete implementations.
"""

from collections.abc import Sequence
from typing import NamedTuple, Protocol, runtime_checkable

from telequery.core.models import (
    AggregatedResult,
    AggregationMethod,
    EventType,
    FilterCriteria,
    QueryOutcome,
    TelemetryRecord,
)


class TimeRange(NamedTuple):
    """Earliest and latest timestamp (ms) of a record collection."""

    min: int
    max: int


@runtime_checkable
class RecordStorePort(Protocol):
    """Port for read-only access to a timestamp-sorted record collection.

    Examples: InMemoryRecordStore.
    """

    @property
    def records(self) -> Sequence[TelemetryRecord]:
        """All records, ordered by timestamp ascending."""
        ...

    def sources(self) -> list[str]:
        """Sorted unique sources present in the collection."""
        ...

    def event_types(self) -> list[EventType]:
        """Event types available for filtering."""
        ...

    def time_range(self) -> TimeRange:
        """Earliest and latest timestamp in the collection."""
        ...


@runtime_checkable
class QueryEnginePort(Protocol):
    """Port for running filter and aggregation off the caller's path.

    Examples: OffloadCoordinator.
    """

    async def query(
        self,
        records: Sequence[TelemetryRecord],
        criteria: FilterCriteria,
        method: AggregationMethod | str,
    ) -> QueryOutcome | None:
        """Filter records and aggregate the result.

        Returns:
            The outcome, or None if a newer query superseded this one.
        """
        ...

    async def execute(
        self,
        records: Sequence[TelemetryRecord],
        criteria: FilterCriteria,
        method: AggregationMethod | str,
    ) -> tuple[list[TelemetryRecord], AggregatedResult]:
        """Filter records and aggregate without the supersede policy.

        Returns:
            The filtered records and their aggregate.
        """
        ...
