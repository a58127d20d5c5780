"""BDD step definitions for offloaded query superseding."""

import asyncio
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from telequery.adapters.offload import OffloadCoordinator
from telequery.core.models import FilterCriteria, QueryOutcome, TelemetryRecord
from tests.factories import BASE_TIME, ManualExecutor, evenly_spaced


@dataclass
class OffloadScenarioContext:
    """Shared state between steps in an offload scenario."""

    records: list[TelemetryRecord] = field(default_factory=list)
    executor: ManualExecutor | None = None
    coordinator: OffloadCoordinator | None = None
    requests: list[FilterCriteria] = field(default_factory=list)
    delivered: list[QueryOutcome] = field(default_factory=list)


@pytest.fixture
def ctx() -> OffloadScenarioContext:
    """Fresh scenario context for each test."""
    return OffloadScenarioContext()


async def _drain(coordinator: OffloadCoordinator) -> None:
    while coordinator.pending:
        await asyncio.sleep(0)


# === Given ===


@given(parsers.parse("{count:d} records spaced 1ms apart"))
def step_records(ctx: OffloadScenarioContext, count: int) -> None:
    ctx.records = evenly_spaced(count)


@given("a coordinator backed by a manually completed worker")
def step_manual_coordinator(ctx: OffloadScenarioContext) -> None:
    ctx.executor = ManualExecutor()
    ctx.coordinator = OffloadCoordinator(ctx.executor)


@given("a coordinator in synchronous fallback mode")
def step_fallback_coordinator(ctx: OffloadScenarioContext) -> None:
    ctx.coordinator = OffloadCoordinator(use_worker=False)


# === When ===


@when(parsers.parse("request {number:d} asks for records up to offset {offset:d}"))
def step_request(ctx: OffloadScenarioContext, number: int, offset: int) -> None:
    assert len(ctx.requests) == number - 1
    ctx.requests.append(FilterCriteria(end_time=BASE_TIME + offset))


def _dispatch_all(ctx: OffloadScenarioContext) -> None:
    assert ctx.coordinator is not None
    for criteria in ctx.requests:
        ctx.coordinator.dispatch(ctx.records, criteria, "count", ctx.delivered.append)


@when(parsers.parse("the worker finishes request {first:d} then request {second:d}"))
def step_finish_in_order(ctx: OffloadScenarioContext, first: int, second: int) -> None:
    assert ctx.coordinator is not None and ctx.executor is not None
    executor = ctx.executor

    async def scenario() -> None:
        _dispatch_all(ctx)
        while len(executor.submitted) < len(ctx.requests):
            await asyncio.sleep(0)
        executor.complete(first - 1)
        executor.complete(second - 1)
        await _drain(ctx.coordinator)

    asyncio.run(scenario())


@when("the requests are dispatched together")
def step_dispatch_together(ctx: OffloadScenarioContext) -> None:
    assert ctx.coordinator is not None

    async def scenario() -> None:
        _dispatch_all(ctx)
        await _drain(ctx.coordinator)

    asyncio.run(scenario())


@when("the requests are issued one after another")
def step_issue_sequentially(ctx: OffloadScenarioContext) -> None:
    assert ctx.coordinator is not None
    for criteria in ctx.requests:
        ctx.delivered.append(ctx.coordinator.query_sync(ctx.records, criteria, "count"))


# === Then ===


@then(parsers.parse("only request {number:d} is delivered"))
def step_only_delivered(ctx: OffloadScenarioContext, number: int) -> None:
    assert [o.request_id for o in ctx.delivered] == [number]
    assert ctx.coordinator is not None
    assert ctx.coordinator.latest is ctx.delivered[0]


@then(parsers.parse("the delivered count is {count:d}"))
def step_delivered_count(ctx: OffloadScenarioContext, count: int) -> None:
    assert ctx.delivered[-1].result.value == count
    assert ctx.delivered[-1].result.count == count


@then(parsers.parse("requests {first:d} and {second:d} are delivered in order"))
def step_delivered_in_order(
    ctx: OffloadScenarioContext, first: int, second: int
) -> None:
    assert [o.request_id for o in ctx.delivered] == [first, second]
