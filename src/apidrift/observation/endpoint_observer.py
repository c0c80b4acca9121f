"""Endpoint-level aggregation of request/response fields and status codes."""

from __future__ import annotations

import logging

from apidrift.models import EndpointObservation, ObservationWindow, TrafficSample
from apidrift.observation.field_observer import FieldObserver
from apidrift.types import HttpMethod

logger = logging.getLogger(__name__)


def build_endpoint_observation(
    method: HttpMethod,
    path: str,
    samples: list[TrafficSample],
    window: ObservationWindow,
) -> EndpointObservation:
    """Aggregate one endpoint's samples.

    Observers are created per call and discarded with it, so no state is
    shared between endpoints or runs.
    """
    request_observer = FieldObserver()
    response_observer = FieldObserver()
    status_codes: dict[int, int] = {}

    for sample in samples:
        request_observer.observe(sample.request_body)
        response_observer.observe(sample.response_body)
        status_codes[sample.status_code] = status_codes.get(sample.status_code, 0) + 1

    observation = EndpointObservation(
        method=method,
        path=path,
        window=window,
        response_fields=response_observer.get_observations(),
        request_fields=request_observer.get_observations(),
        status_codes=status_codes,
    )
    logger.debug(
        "Observed %s %s: %d samples, %d response fields, %d status codes",
        method.value,
        path,
        len(samples),
        len(observation.response_fields),
        len(status_codes),
    )
    return observation
