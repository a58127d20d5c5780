"""Offload coordinator for running queries off the event loop.

Queries are executed in a single worker process so the event loop stays
responsive. Inputs and outputs cross the process boundary by pickling, so
the worker never shares mutable state with the caller.

Overlapping requests follow a supersede policy: every request takes a
monotonically increasing id, and a response is delivered only if its id is
still the latest one issued. Superseded work is not cancelled; its result is
discarded when it arrives. execute() bypasses the policy for callers that
are independent of each other.
"""

import asyncio
import itertools
import logging
from collections.abc import Callable, Sequence
from concurrent.futures import BrokenExecutor, Executor, ProcessPoolExecutor
from typing import Any

from telequery.adapters.offload.worker import process_query
from telequery.core.models import (
    AggregatedResult,
    AggregationMethod,
    FilterCriteria,
    QueryOutcome,
    TelemetryRecord,
)

logger = logging.getLogger(__name__)

QueryCallback = Callable[[QueryOutcome], None]


class OffloadCoordinator:
    """Runs filter and aggregation in an isolated worker process.

    Implements QueryEnginePort. When the worker is disabled or unavailable,
    the same computation runs synchronously on the caller's path.

    Example:
        ```python
        async with OffloadCoordinator() as coordinator:
            outcome = await coordinator.query(records, criteria, "p95")
        ```
    """

    def __init__(
        self,
        executor: Executor | None = None,
        *,
        use_worker: bool = True,
    ) -> None:
        """Initialize the coordinator.

        Args:
            executor: Executor to run queries on. Defaults to a lazily created
                single-worker ProcessPoolExecutor owned by the coordinator.
            use_worker: False forces the synchronous fallback.
        """
        self._executor = executor
        self._owns_executor = executor is None
        self._use_worker = use_worker
        self._sequence = itertools.count(1)
        self._latest_id = 0
        self._latest: QueryOutcome | None = None
        self._in_flight: set[int] = set()
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def latest(self) -> QueryOutcome | None:
        """Most recently delivered outcome."""
        return self._latest

    @property
    def pending(self) -> bool:
        """True while any dispatched request has not completed."""
        return bool(self._in_flight)

    @property
    def worker_active(self) -> bool:
        """True unless the coordinator has fallen back to synchronous mode."""
        return self._use_worker

    def _next_request_id(self) -> int:
        self._latest_id = next(self._sequence)
        return self._latest_id

    def _get_executor(self) -> Executor | None:
        """Get or create the worker pool, or None in fallback mode."""
        if not self._use_worker:
            return None
        if self._executor is None:
            try:
                self._executor = ProcessPoolExecutor(max_workers=1)
            except (OSError, NotImplementedError) as e:
                self._fall_back(e)
                return None
        return self._executor

    def _fall_back(self, error: BaseException) -> None:
        logger.warning(
            "Worker process unavailable, running queries synchronously: %s", error
        )
        self._use_worker = False

    async def _compute(
        self,
        records: Sequence[TelemetryRecord],
        criteria: FilterCriteria,
        method: AggregationMethod,
    ) -> tuple[list[TelemetryRecord], AggregatedResult]:
        executor = self._get_executor()
        if executor is not None:
            try:
                future = executor.submit(process_query, records, criteria, method)
                return await asyncio.wrap_future(future)
            except (BrokenExecutor, OSError) as e:
                self._fall_back(e)
        return process_query(records, criteria, method)

    def _accept(
        self,
        request_id: int,
        records: list[TelemetryRecord],
        result: AggregatedResult,
    ) -> QueryOutcome | None:
        """Record an outcome unless a newer request has been issued."""
        if request_id != self._latest_id:
            logger.debug(
                "Discarding stale result for request %d (latest is %d)",
                request_id,
                self._latest_id,
            )
            return None
        self._latest = QueryOutcome(
            request_id=request_id, records=records, result=result
        )
        return self._latest

    async def _run(
        self,
        request_id: int,
        records: Sequence[TelemetryRecord],
        criteria: FilterCriteria,
        method: AggregationMethod,
    ) -> QueryOutcome | None:
        self._in_flight.add(request_id)
        try:
            filtered, result = await self._compute(records, criteria, method)
        finally:
            self._in_flight.discard(request_id)
        return self._accept(request_id, filtered, result)

    async def query(
        self,
        records: Sequence[TelemetryRecord],
        criteria: FilterCriteria,
        method: AggregationMethod | str,
    ) -> QueryOutcome | None:
        """Filter records and aggregate the result without blocking the loop.

        Args:
            records: Records sorted by timestamp ascending.
            criteria: Filter criteria.
            method: AggregationMethod or its string value.

        Returns:
            The outcome, or None if a newer request superseded this one
            before its result arrived.

        Raises:
            ValueError: If method is not a known aggregation method.
        """
        method = AggregationMethod(method)
        return await self._run(self._next_request_id(), records, criteria, method)

    async def execute(
        self,
        records: Sequence[TelemetryRecord],
        criteria: FilterCriteria,
        method: AggregationMethod | str,
    ) -> tuple[list[TelemetryRecord], AggregatedResult]:
        """Filter and aggregate on the worker without taking a request id.

        Independent callers such as separate HTTP requests use this entry
        point; it neither supersedes nor is superseded by other queries, and
        leaves latest untouched.

        Raises:
            ValueError: If method is not a known aggregation method.
        """
        method = AggregationMethod(method)
        return await self._compute(records, criteria, method)

    def dispatch(
        self,
        records: Sequence[TelemetryRecord],
        criteria: FilterCriteria,
        method: AggregationMethod | str,
        callback: QueryCallback,
    ) -> int:
        """Schedule a query and return its request id immediately.

        The callback fires at most once, on the event loop thread, and only
        if the request is still the latest when its result arrives. Must be
        called with a running event loop.

        Raises:
            ValueError: If method is not a known aggregation method.
        """
        method = AggregationMethod(method)
        loop = asyncio.get_running_loop()
        request_id = self._next_request_id()
        self._in_flight.add(request_id)

        async def run_and_notify() -> None:
            outcome = await self._run(request_id, records, criteria, method)
            if outcome is not None:
                callback(outcome)

        task = loop.create_task(run_and_notify())
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return request_id

    def _task_done(self, task: "asyncio.Task[Any]") -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Dispatched query failed", exc_info=error)

    def query_sync(
        self,
        records: Sequence[TelemetryRecord],
        criteria: FilterCriteria,
        method: AggregationMethod | str,
    ) -> QueryOutcome:
        """Run a query synchronously on the caller's thread (non-async contexts).

        Takes a request id like any other query, so it supersedes requests
        still in flight.
        """
        method = AggregationMethod(method)
        request_id = self._next_request_id()
        filtered, result = process_query(records, criteria, method)
        outcome = self._accept(request_id, filtered, result)
        assert outcome is not None
        return outcome

    def close(self) -> None:
        """Shut down the worker pool if the coordinator created it."""
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=True, cancel_futures=True)
            self._executor = None

    async def __aenter__(self) -> "OffloadCoordinator":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()
