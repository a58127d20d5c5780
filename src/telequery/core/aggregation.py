"""Aggregation of telemetry records to a single scalar."""

import math
from collections.abc import Callable, Sequence

from telequery.core.models import AggregatedResult, AggregationMethod, TelemetryRecord


def calculate_count(records: Sequence[TelemetryRecord]) -> float:
    """Number of records."""
    return float(len(records))


def calculate_average(records: Sequence[TelemetryRecord]) -> float:
    """Arithmetic mean of record values, 0.0 for no records."""
    if not records:
        return 0.0
    return sum(r.value for r in records) / len(records)


def calculate_p95(records: Sequence[TelemetryRecord]) -> float:
    """95th percentile of record values using the nearest-rank index.

    The index is floor(n * 0.95) into the ascending values, clamped to the
    last element. Returns 0.0 for no records.
    """
    if not records:
        return 0.0
    values = sorted(r.value for r in records)
    index = min(math.floor(len(values) * 0.95), len(values) - 1)
    return values[index]


_REDUCERS: dict[AggregationMethod, Callable[[Sequence[TelemetryRecord]], float]] = {
    AggregationMethod.COUNT: calculate_count,
    AggregationMethod.AVERAGE: calculate_average,
    AggregationMethod.P95: calculate_p95,
}


def aggregate(
    records: Sequence[TelemetryRecord],
    method: AggregationMethod | str,
) -> AggregatedResult:
    """Reduce records to a scalar with the given method.

    Args:
        records: Records to aggregate.
        method: AggregationMethod or its string value.

    Returns:
        AggregatedResult whose count is always len(records).

    Raises:
        ValueError: If method is not a known aggregation method.
    """
    method = AggregationMethod(method)
    return AggregatedResult(
        value=_REDUCERS[method](records),
        count=len(records),
        method=method,
    )


def summarize(records: Sequence[TelemetryRecord]) -> dict[AggregationMethod, float]:
    """Compute every aggregation method at once."""
    return {method: reducer(records) for method, reducer in _REDUCERS.items()}
