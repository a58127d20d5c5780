"""telequery: an in-memory telemetry query engine.

Generates timestamp-sorted telemetry records, filters them with binary search
on the time range, aggregates the result (count, average, p95), slices pages
for display, and offloads filter + aggregate to a worker process.

Example:
    ```python
    from telequery import FilterCriteria, OffloadCoordinator, generate, paginate

    records = generate(50_000)
    async with OffloadCoordinator() as coordinator:
        outcome = await coordinator.query(records, FilterCriteria(), "p95")
    first_page = paginate(outcome.records, page=1, page_size=50)
    ```
"""

from telequery.adapters.offload import OffloadCoordinator
from telequery.adapters.storage import InMemoryRecordStore
from telequery.core.aggregation import aggregate, summarize
from telequery.core.catalog import DEFAULT_CATALOG, GeneratorConfig
from telequery.core.filtering import filter_records
from telequery.core.generator import generate
from telequery.core.models import (
    AggregatedResult,
    AggregationMethod,
    EventType,
    FilterCriteria,
    Page,
    QueryOutcome,
    TelemetryRecord,
)
from telequery.core.pagination import page_of, paginate, total_pages

__all__ = [
    "DEFAULT_CATALOG",
    "AggregatedResult",
    "AggregationMethod",
    "EventType",
    "FilterCriteria",
    "GeneratorConfig",
    "InMemoryRecordStore",
    "OffloadCoordinator",
    "Page",
    "QueryOutcome",
    "TelemetryRecord",
    "aggregate",
    "filter_records",
    "generate",
    "page_of",
    "paginate",
    "summarize",
    "total_pages",
]
