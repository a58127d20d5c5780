"""Filter-then-aggregate unit of work executed by the offload coordinator.

This module is imported inside worker processes, so it only depends on the
pure core functions.
"""

import logging
from collections.abc import Sequence

from telequery.core.aggregation import aggregate
from telequery.core.filtering import filter_records
from telequery.core.models import (
    AggregatedResult,
    AggregationMethod,
    FilterCriteria,
    TelemetryRecord,
)
from telequery.core.timing import timed_operation

logger = logging.getLogger(__name__)


def process_query(
    records: Sequence[TelemetryRecord],
    criteria: FilterCriteria,
    method: AggregationMethod,
) -> tuple[list[TelemetryRecord], AggregatedResult]:
    """Filter records and aggregate the filtered subset.

    Both the worker process and the synchronous fallback call this function,
    so the two modes produce identical results.
    """
    with timed_operation(logger, "Filter & aggregate", method=method.value):
        filtered = filter_records(records, criteria)
        result = aggregate(filtered, method)
    logger.debug("Filtered %d records from %d", len(filtered), len(records))
    return filtered, result
