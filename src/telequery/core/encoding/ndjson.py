"""NDJSON encoder for telemetry records."""

import json
from collections.abc import Iterable

from telequery.core.encoding.serialization import record_to_dict
from telequery.core.models import TelemetryRecord


def encode_records(records: Iterable[TelemetryRecord]) -> str:
    """Encode telemetry records to newline-delimited JSON.

    Args:
        records: An iterable of TelemetryRecord objects.

    Returns:
        NDJSON string with one JSON object per line.
        Empty string if no records.
    """
    lines = [json.dumps(record_to_dict(record)) for record in records]

    if not lines:
        return ""

    return "\n".join(lines) + "\n"
