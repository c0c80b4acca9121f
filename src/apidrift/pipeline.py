"""
Single-run analysis.

Samples and contract endpoints in, ``DriftReport`` out::

    window -> group by endpoint -> observe -> detect -> filter/sort

A run that detects nothing at all yields the affirmative empty report.
"""

from __future__ import annotations

import logging
from typing import Sequence

from apidrift.comparison.drift_detector import detect_drift
from apidrift.comparison.spec_loader import build_spec_index
from apidrift.ingestion.window import build_observation_window, group_by_endpoint, parse_endpoint_key
from apidrift.models import DriftFinding, DriftReport, SpecEndpoint, TrafficSample
from apidrift.observation.endpoint_observer import build_endpoint_observation
from apidrift.otel import emit_drift_report
from apidrift.report.builder import build_drift_report
from apidrift.report.empty_state import create_empty_report

logger = logging.getLogger(__name__)


def analyze_traffic(
    samples: Sequence[TrafficSample],
    spec_endpoints: Sequence[SpecEndpoint],
    apply_default_filter: bool = True,
) -> DriftReport:
    """Analyze one batch of validated samples against contract endpoints."""
    samples = list(samples)
    window = build_observation_window(samples)
    spec_index = build_spec_index(list(spec_endpoints))
    groups = group_by_endpoint(samples)

    logger.debug(
        "Analyzing %d samples across %d endpoints (%d in contract)",
        len(samples),
        len(groups),
        len(spec_index),
    )

    findings: list[DriftFinding] = []
    for key, endpoint_samples in groups.items():
        method, path = parse_endpoint_key(key)
        observation = build_endpoint_observation(method, path, endpoint_samples, window)
        findings.extend(detect_drift(spec_index.get(key), observation))

    if not findings:
        report = create_empty_report(window, len(groups))
    else:
        report = build_drift_report(
            findings, window, len(groups), apply_default_filter=apply_default_filter
        )

    emit_drift_report(report)
    return report
