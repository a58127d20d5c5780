"""Example FastAPI application serving telemetry queries.

Run with:
    uvicorn examples.fastapi_example:app --reload

Endpoints:
    /catalog                         - Event types, sources and time range
    /query                           - Count of all records, first page
    /query?method=p95&event_type=request&source=api-gateway
                                     - p95 latency of gateway requests
    /query?start=<ms>&end=<ms>&page=2&page_size=100
                                     - Second page of a time window
    /query/export?event_type=error   - NDJSON export of filtered records
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from telequery.adapters.frameworks.fastapi import create_query_router
from telequery.adapters.offload import OffloadCoordinator
from telequery.adapters.storage import InMemoryRecordStore

logging.basicConfig(level=logging.INFO)

# Generated once, read-only afterwards
store = InMemoryRecordStore.generate(100_000)
coordinator = OffloadCoordinator()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    async with coordinator:
        yield


app = FastAPI(title="Telemetry Query Example", lifespan=lifespan)
app.include_router(create_query_router(store, coordinator))
