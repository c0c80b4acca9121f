"""
Traffic sample reader.

Reads a JSON array of captured request/response pairs and validates the
fields every later stage relies on. Any malformed sample rejects the whole
batch; there is no partial recovery.

Usage::

    from apidrift.ingestion.traffic_reader import load_traffic_file

    samples = load_traffic_file(Path("traffic.json"))
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

from apidrift.errors import TrafficValidationError
from apidrift.models import TrafficSample, parse_timestamp
from apidrift.types import HttpMethod

logger = logging.getLogger(__name__)

VALID_HTTP_METHODS = [m.value for m in HttpMethod]


def _invalid(index: int, field: str, expected: str) -> TrafficValidationError:
    return TrafficValidationError(
        f"Sample at index {index}: missing or invalid '{field}' field "
        f"(expected {expected})"
    )


def _validate_sample(sample: Any, index: int) -> TrafficSample:
    if not isinstance(sample, dict):
        raise TrafficValidationError(
            f"Sample at index {index}: expected object, got {type(sample).__name__}"
        )

    timestamp = sample.get("timestamp")
    if not isinstance(timestamp, str):
        raise _invalid(index, "timestamp", "string")
    try:
        parse_timestamp(timestamp)
    except ValueError:
        raise _invalid(index, "timestamp", "ISO 8601 timestamp") from None

    method = sample.get("method")
    if not isinstance(method, str) or method not in VALID_HTTP_METHODS:
        raise _invalid(index, "method", f"one of {', '.join(VALID_HTTP_METHODS)}")

    path = sample.get("path")
    if not isinstance(path, str):
        raise _invalid(index, "path", "string")

    status_code = sample.get("statusCode")
    if isinstance(status_code, float) and status_code.is_integer():
        status_code = int(status_code)
    if isinstance(status_code, bool) or not isinstance(status_code, int):
        raise _invalid(index, "statusCode", "integer")

    return TrafficSample(
        timestamp=timestamp,
        method=HttpMethod(method),
        path=path,
        status_code=status_code,
        request_body=sample.get("requestBody"),
        response_body=sample.get("responseBody"),
    )


def read_traffic_samples(content: Union[str, list[Any]]) -> list[TrafficSample]:
    """Parse and validate traffic samples.

    Args:
        content: JSON text, or an already-decoded list.

    Returns:
        Validated samples in input order.

    Raises:
        TrafficValidationError: On malformed JSON, a non-array root, an
            empty array, or any invalid sample.
    """
    if isinstance(content, str):
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as exc:
            raise TrafficValidationError(f"Failed to parse JSON: {exc}") from exc
    else:
        parsed = content

    if not isinstance(parsed, list):
        raise TrafficValidationError("Expected JSON array of traffic samples")

    if not parsed:
        raise TrafficValidationError("Traffic samples array is empty")

    samples = [_validate_sample(sample, index) for index, sample in enumerate(parsed)]
    logger.debug("Read %d traffic samples", len(samples))
    return samples


def load_traffic_file(path: Path) -> list[TrafficSample]:
    """Read and validate a traffic sample file."""
    if not path.exists():
        raise TrafficValidationError(f"Traffic file not found: {path}")
    return read_traffic_samples(path.read_text(encoding="utf-8"))
