"""Filtering of timestamp-sorted telemetry records.

The time predicate is resolved with two binary searches over the sorted
sequence, so only the contiguous time-bounded slice is scanned for the
categorical predicates. Callers must pass records sorted by timestamp
ascending; the input is never reordered.
"""

from bisect import bisect_left, bisect_right
from collections.abc import Sequence
from operator import attrgetter

from telequery.core.models import FilterCriteria, TelemetryRecord

_timestamp_key = attrgetter("timestamp")


def find_start_index(records: Sequence[TelemetryRecord], start_time: int) -> int:
    """Return the first index whose timestamp is >= start_time.

    Returns len(records) when every timestamp is smaller.
    """
    return bisect_left(records, start_time, key=_timestamp_key)


def find_end_index(records: Sequence[TelemetryRecord], end_time: int) -> int:
    """Return the last index whose timestamp is <= end_time.

    Returns -1 when every timestamp is larger.
    """
    return bisect_right(records, end_time, key=_timestamp_key) - 1


def _matches_categories(record: TelemetryRecord, criteria: FilterCriteria) -> bool:
    if criteria.event_types and record.event_type not in criteria.event_types:
        return False
    if criteria.sources and record.source not in criteria.sources:
        return False
    return True


def filter_records(
    records: Sequence[TelemetryRecord], criteria: FilterCriteria
) -> list[TelemetryRecord]:
    """Return the records satisfying all criteria, in their original order.

    Args:
        records: Records sorted by timestamp ascending.
        criteria: Time bounds (inclusive) and categorical constraints.

    Returns:
        A new list, possibly empty. An inverted time range yields [].
    """
    if criteria.is_unrestricted:
        return list(records)

    start = 0 if criteria.start_time is None else find_start_index(
        records, criteria.start_time
    )
    end = (
        len(records) - 1
        if criteria.end_time is None
        else find_end_index(records, criteria.end_time)
    )
    time_slice = records[start : end + 1] if start <= end else []

    if not criteria.event_types and not criteria.sources:
        return list(time_slice)
    return [r for r in time_slice if _matches_categories(r, criteria)]


def filter_records_linear(
    records: Sequence[TelemetryRecord], criteria: FilterCriteria
) -> list[TelemetryRecord]:
    """Full-scan filter that does not depend on ordering.

    Produces the same output as filter_records for sorted input; kept as a
    reference implementation.
    """
    result = []
    for record in records:
        if criteria.start_time is not None and record.timestamp < criteria.start_time:
            continue
        if criteria.end_time is not None and record.timestamp > criteria.end_time:
            continue
        if _matches_categories(record, criteria):
            result.append(record)
    return result
