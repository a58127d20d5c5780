"""Shared test fixtures for all test modules."""

import pytest

from tests.factories import BASE_TIME, ManualExecutor, evenly_spaced

try:
    import httpx
except ImportError:
    httpx = None


@pytest.fixture
def thousand_records():
    """1000 records, timestamps 1ms apart starting at BASE_TIME."""
    return evenly_spaced(1000)


@pytest.fixture
def base_time() -> int:
    """Timestamp of the first record in evenly spaced fixtures."""
    return BASE_TIME


@pytest.fixture
def manual_executor() -> ManualExecutor:
    """Executor whose futures are resolved explicitly by the test."""
    return ManualExecutor()


@pytest.fixture
def sync_coordinator():
    """Coordinator running in synchronous fallback mode."""
    from telequery.adapters.offload import OffloadCoordinator

    coordinator = OffloadCoordinator(use_worker=False)
    yield coordinator
    coordinator.close()


@pytest.fixture
def record_store():
    """Deterministic store of generated records."""
    from telequery.adapters.storage import InMemoryRecordStore

    return InMemoryRecordStore.generate(2000, seed=42, now=BASE_TIME)


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            async with asgi_test_client(app) as client:
                response = await client.get("/query")
    """
    if httpx is None:
        pytest.skip("httpx not installed")

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client
