"""Catalogs and weights used by the record generator."""

from dataclasses import dataclass

from telequery.core.models import EventType

SEVEN_DAYS_MS = 7 * 24 * 60 * 60 * 1000

DEFAULT_SOURCES = (
    "api-gateway",
    "auth-service",
    "payment-service",
    "user-service",
    "notification-service",
    "analytics-service",
    "database-primary",
    "database-replica",
    "cache-redis",
    "message-queue",
    "cdn-edge",
    "logging-service",
)

# Ordered as the cumulative draw walks them.
DEFAULT_EVENT_WEIGHTS = (
    (EventType.REQUEST, 0.50),
    (EventType.METRIC, 0.20),
    (EventType.TRACE, 0.15),
    (EventType.WARNING, 0.10),
    (EventType.ERROR, 0.05),
)


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable configuration for synthetic record generation.

    Attributes:
        sources: Service names drawn uniformly for each record.
        event_weights: (EventType, weight) pairs for the categorical draw.
        window_ms: Width of the trailing time window records fall in.
        long_tail_probability: Share of request latencies drawn from the
            slow tail instead of the common range.
    """

    sources: tuple[str, ...] = DEFAULT_SOURCES
    event_weights: tuple[tuple[EventType, float], ...] = DEFAULT_EVENT_WEIGHTS
    window_ms: int = SEVEN_DAYS_MS
    long_tail_probability: float = 0.1

    def __post_init__(self) -> None:
        if not self.sources:
            raise ValueError("sources must not be empty")
        if not self.event_weights:
            raise ValueError("event_weights must not be empty")
        if any(weight < 0 for _, weight in self.event_weights):
            raise ValueError("event weights must be non-negative")
        if sum(weight for _, weight in self.event_weights) <= 0:
            raise ValueError("event weights must sum to a positive value")
        if self.window_ms < 0:
            raise ValueError("window_ms must be non-negative")
        if not 0.0 <= self.long_tail_probability <= 1.0:
            raise ValueError("long_tail_probability must be between 0 and 1")

    @property
    def event_types(self) -> list[EventType]:
        """Event types in catalog order."""
        return [event_type for event_type, _ in self.event_weights]


DEFAULT_CATALOG = GeneratorConfig()
