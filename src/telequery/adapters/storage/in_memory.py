"""In-memory record store."""

import random
import time
from collections.abc import Iterable

from telequery.core.catalog import DEFAULT_CATALOG, GeneratorConfig
from telequery.core.generator import generate
from telequery.core.models import EventType, TelemetryRecord
from telequery.core.ports import TimeRange


class InMemoryRecordStore:
    """In-memory implementation of RecordStorePort.

    Holds the full record collection as an immutable tuple. The collection
    is produced once and never modified, so it can be handed to worker
    processes and concurrent queries without copying guards.

    Args:
        records: Records sorted by timestamp ascending.
        config: Catalog the records were drawn from (used for event_types).

    Raises:
        ValueError: If records are not sorted by timestamp.
    """

    def __init__(
        self,
        records: Iterable[TelemetryRecord],
        config: GeneratorConfig = DEFAULT_CATALOG,
    ) -> None:
        self._records: tuple[TelemetryRecord, ...] = tuple(records)
        self._config = config
        for previous, current in zip(self._records, self._records[1:]):
            if current.timestamp < previous.timestamp:
                raise ValueError("records must be sorted by timestamp ascending")

    @classmethod
    def generate(
        cls,
        count: int,
        config: GeneratorConfig = DEFAULT_CATALOG,
        *,
        seed: int | None = None,
        now: int | None = None,
    ) -> "InMemoryRecordStore":
        """Create a store filled with synthetic records."""
        records = generate(count, config, rng=random.Random(seed), now=now)
        return cls(records, config)

    @property
    def records(self) -> tuple[TelemetryRecord, ...]:
        """All records, ordered by timestamp ascending."""
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def sources(self) -> list[str]:
        """Sorted unique sources present in the collection."""
        return sorted({r.source for r in self._records})

    def event_types(self) -> list[EventType]:
        """Event types available in the catalog."""
        return self._config.event_types

    def time_range(self) -> TimeRange:
        """Earliest and latest timestamp; the current time for an empty store."""
        if not self._records:
            now = int(time.time() * 1000)
            return TimeRange(min=now, max=now)
        first, last = self._records[0], self._records[-1]
        return TimeRange(min=first.timestamp, max=last.timestamp)
