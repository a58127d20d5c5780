"""Offloading of queries to an isolated worker process."""

from telequery.adapters.offload.coordinator import OffloadCoordinator, QueryCallback
from telequery.adapters.offload.worker import process_query

__all__ = ["OffloadCoordinator", "QueryCallback", "process_query"]
