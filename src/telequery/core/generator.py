"""Synthetic telemetry record generation."""

import itertools
import logging
import math
import random
import time
from collections.abc import Callable

from telequery.core.catalog import DEFAULT_CATALOG, GeneratorConfig
from telequery.core.models import EventType, TelemetryRecord
from telequery.core.timing import timed_operation

logger = logging.getLogger(__name__)


def _request_latency(rng: random.Random, long_tail_probability: float) -> float:
    # Mostly 10-200ms with a slow tail up to 1000ms
    if rng.random() < 1.0 - long_tail_probability:
        return 10 + rng.random() * 190
    return 200 + rng.random() * 800


def _error_status(rng: random.Random) -> float:
    return float(400 + math.floor(rng.random() * 200))


def _warning_severity(rng: random.Random) -> float:
    return float(1 + math.floor(rng.random() * 10))


def _metric_percent(rng: random.Random) -> float:
    return rng.random() * 100


def _trace_duration(rng: random.Random) -> float:
    return 5 + rng.random() * 500


_VALUE_SAMPLERS: dict[EventType, Callable[[random.Random], float]] = {
    EventType.ERROR: _error_status,
    EventType.WARNING: _warning_severity,
    EventType.METRIC: _metric_percent,
    EventType.TRACE: _trace_duration,
}


def generate_value(
    event_type: EventType,
    rng: random.Random,
    config: GeneratorConfig = DEFAULT_CATALOG,
) -> float:
    """Draw a value from the distribution associated with an event type.

    Args:
        event_type: Category that selects the distribution.
        rng: Random source.
        config: Generator configuration (long-tail share for requests).

    Returns:
        The drawn value, rounded to two decimals.
    """
    if event_type is EventType.REQUEST:
        value = _request_latency(rng, config.long_tail_probability)
    else:
        value = _VALUE_SAMPLERS[event_type](rng)
    return round(value, 2)


def _timestamp(rng: random.Random, window_start: int, window_ms: int) -> int:
    # Sinusoidal bias over a random phase emulates diurnal peaks
    phase = rng.random()
    bias = math.sin(phase * math.pi * 2) * 0.3 + 0.5
    return math.floor(window_start + rng.random() * bias * window_ms)


def generate(
    count: int,
    config: GeneratorConfig = DEFAULT_CATALOG,
    *,
    rng: random.Random | None = None,
    now: int | None = None,
) -> list[TelemetryRecord]:
    """Generate synthetic telemetry records sorted by timestamp.

    Args:
        count: Number of records to produce.
        config: Catalogs and weights to draw from.
        rng: Random source; a fresh unseeded one is used when omitted.
        now: End of the time window in ms; defaults to the current time.

    Returns:
        Exactly ``count`` records ordered by timestamp ascending.

    Raises:
        ValueError: If count is negative.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if rng is None:
        rng = random.Random()
    if now is None:
        now = int(time.time() * 1000)

    window_start = now - config.window_ms
    event_types = config.event_types
    cum_weights = list(
        itertools.accumulate(weight for _, weight in config.event_weights)
    )

    records: list[TelemetryRecord] = []
    with timed_operation(logger, "Generating records", count=count):
        for index in range(count):
            timestamp = _timestamp(rng, window_start, config.window_ms)
            event_type = rng.choices(event_types, cum_weights=cum_weights)[0]
            source = config.sources[math.floor(rng.random() * len(config.sources))]
            records.append(
                TelemetryRecord(
                    id=f"evt_{index}_{timestamp}",
                    timestamp=timestamp,
                    value=generate_value(event_type, rng, config),
                    event_type=event_type,
                    source=source,
                )
            )
        records.sort(key=lambda r: r.timestamp)

    if records:
        logger.info(
            "Generated %d records spanning %d..%d",
            count,
            records[0].timestamp,
            records[-1].timestamp,
        )
    return records
