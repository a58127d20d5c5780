"""Encoders for telemetry query models."""

from telequery.core.encoding.ndjson import encode_records
from telequery.core.encoding.serialization import (
    criteria_from_dict,
    criteria_to_dict,
    page_to_dict,
    record_from_dict,
    record_to_dict,
    result_to_dict,
)

__all__ = [
    "criteria_from_dict",
    "criteria_to_dict",
    "encode_records",
    "page_to_dict",
    "record_from_dict",
    "record_to_dict",
    "result_to_dict",
]
