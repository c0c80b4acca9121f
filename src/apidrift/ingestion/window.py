"""Observation window and endpoint grouping for a batch of samples."""

from __future__ import annotations

from apidrift.errors import TrafficValidationError
from apidrift.models import ObservationWindow, TrafficSample, format_timestamp, parse_timestamp
from apidrift.types import HttpMethod


def build_observation_window(samples: list[TrafficSample]) -> ObservationWindow:
    """Window spanning the earliest and latest sample timestamps."""
    if not samples:
        raise TrafficValidationError(
            "Cannot build observation window from empty samples array"
        )

    timestamps = [parse_timestamp(s.timestamp) for s in samples]
    return ObservationWindow(
        start_time=format_timestamp(min(timestamps)),
        end_time=format_timestamp(max(timestamps)),
        sample_count=len(samples),
    )


def endpoint_key(method: HttpMethod, path: str) -> str:
    return f"{method.value} {path}"


def group_by_endpoint(samples: list[TrafficSample]) -> dict[str, list[TrafficSample]]:
    """Group samples by ``"METHOD path"`` in first-seen order."""
    groups: dict[str, list[TrafficSample]] = {}
    for sample in samples:
        groups.setdefault(endpoint_key(sample.method, sample.path), []).append(sample)
    return groups


def parse_endpoint_key(key: str) -> tuple[HttpMethod, str]:
    method, _, path = key.partition(" ")
    return HttpMethod(method), path
