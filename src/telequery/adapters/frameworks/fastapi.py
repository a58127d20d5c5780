"""FastAPI adapter for telemetry query endpoints."""

import json
import logging
from collections.abc import Callable
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Response

from telequery.adapters.frameworks.query_params import _parse_time_param
from telequery.core.encoding.ndjson import encode_records
from telequery.core.encoding.serialization import (
    criteria_to_dict,
    page_to_dict,
    record_to_dict,
    result_to_dict,
)
from telequery.core.models import AggregationMethod, EventType, FilterCriteria
from telequery.core.pagination import page_of
from telequery.core.ports import QueryEnginePort, RecordStorePort

logger = logging.getLogger(__name__)


def filter_criteria(
    start: Annotated[str | None, Query()] = None,
    end: Annotated[str | None, Query()] = None,
    event_type: Annotated[list[EventType], Query()] = [],  # noqa: B006
    source: Annotated[list[str], Query()] = [],  # noqa: B006
) -> FilterCriteria:
    """Build FilterCriteria from query parameters.

    Args:
        start: Inclusive lower bound in ms. Invalid values mean unbounded.
        end: Inclusive upper bound in ms. Invalid values mean unbounded.
        event_type: Repeatable event type restriction.
        source: Repeatable source restriction.
    """
    return FilterCriteria(
        start_time=_parse_time_param(start),
        end_time=_parse_time_param(end),
        event_types=frozenset(event_type),
        sources=frozenset(source),
    )


def _json_response(status: int, body: dict[str, Any]) -> Response:
    return Response(
        content=json.dumps(body),
        status_code=status,
        media_type="application/json",
    )


def _guarded(log_message: str, build: Callable[[], Response]) -> Response:
    """Build a response, answering 500 if encoding fails."""
    try:
        return build()
    except Exception:
        logger.exception(log_message)
        return _json_response(500, {"error": "Internal Server Error"})


def create_query_router(
    store: RecordStorePort,
    engine: QueryEnginePort,
    default_page_size: int = 50,
    max_page_size: int = 500,
) -> APIRouter:
    """Create a FastAPI router with /query, /query/export and /catalog endpoints.

    Every request is an independent caller: queries run through
    engine.execute(), so concurrent requests never cancel each other.

    Args:
        store: Record store implementing RecordStorePort.
        engine: Query engine implementing QueryEnginePort.
        default_page_size: Page size used when the request omits page_size.
        max_page_size: Largest page size a request may ask for.

    Returns:
        APIRouter with the query endpoints configured.
    """
    router = APIRouter()
    Criteria = Annotated[FilterCriteria, Depends(filter_criteria)]

    @router.get("/query")
    async def run_query(
        criteria: Criteria,
        method: Annotated[AggregationMethod, Query()] = AggregationMethod.COUNT,
        page: Annotated[int, Query(ge=1)] = 1,
        page_size: Annotated[int, Query(ge=1, le=max_page_size)] = default_page_size,
    ) -> Response:
        """Return the aggregate and one page of the filtered records."""
        filtered, result = await engine.execute(store.records, criteria, method)

        def build() -> Response:
            current = page_of(filtered, page, page_size)
            return _json_response(
                200,
                {
                    "criteria": criteria_to_dict(criteria),
                    "aggregate": result_to_dict(result),
                    "pagination": page_to_dict(current),
                    "records": [record_to_dict(r) for r in current.items],
                },
            )

        return _guarded("Error encoding query endpoint", build)

    @router.get("/query/export")
    async def export_query(criteria: Criteria) -> Response:
        """Return every filtered record in NDJSON format."""
        filtered, _ = await engine.execute(
            store.records, criteria, AggregationMethod.COUNT
        )
        return _guarded(
            "Error encoding export endpoint",
            lambda: Response(
                content=encode_records(filtered),
                media_type="application/x-ndjson",
            ),
        )

    @router.get("/catalog")
    async def get_catalog() -> Response:
        """Return the values available for filtering."""
        time_range = store.time_range()
        return _json_response(
            200,
            {
                "eventTypes": [t.value for t in store.event_types()],
                "sources": store.sources(),
                "timeRange": {"min": time_range.min, "max": time_range.max},
            },
        )

    return router
