"""
OTel span event emission helpers for drift reports.

All functions are guarded by ``_HAS_OTEL`` so they degrade gracefully
when OTel is not installed, and by the ``otel_enabled`` setting.

Usage::

    from apidrift.otel import emit_drift_report, emit_change_events

    emit_drift_report(report)
    emit_change_events(changes)
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

from apidrift.config import get_config
from apidrift.models import ChangeEvent, DriftReport, DriftReportV2
from apidrift.types import ChangeType, SeverityLevel

try:
    from opentelemetry import trace as otel_trace

    _HAS_OTEL = True
except ImportError:  # pragma: no cover
    _HAS_OTEL = False

logger = logging.getLogger(__name__)


def _add_span_event(name: str, attributes: dict[str, str | int | float | bool]) -> None:
    """Add an event to the current OTel span if available."""
    if not _HAS_OTEL or not get_config().otel_enabled:
        return
    span = otel_trace.get_current_span()
    if span and span.is_recording():
        span.add_event(name=name, attributes=attributes)


def emit_drift_report(report: DriftReport) -> None:
    """Emit a span event summarising one run's findings.

    Event name: ``apidrift.report``
    """
    by_severity = Counter(finding.severity for finding in report.findings)
    attrs: dict[str, str | int | float | bool] = {
        "apidrift.report.endpoints_analyzed": report.endpoints_analyzed,
        "apidrift.report.findings": len(report.findings),
        "apidrift.report.filtered": report.filtered,
        "apidrift.report.sample_count": report.window.sample_count,
    }
    for severity in SeverityLevel:
        attrs[f"apidrift.report.{severity.value}_count"] = by_severity.get(severity, 0)

    _add_span_event("apidrift.report", attrs)


def emit_change_events(changes: Sequence[ChangeEvent]) -> None:
    """Emit a span event counting change events per type.

    Event name: ``apidrift.changes``
    """
    by_type = Counter(change.change_type for change in changes)
    attrs: dict[str, str | int | float | bool] = {
        "apidrift.changes.total": len(changes),
    }
    for change_type in ChangeType:
        attrs[f"apidrift.changes.{change_type.value}"] = by_type.get(change_type, 0)

    if changes:
        logger.info("Detected %d changes since the previous run", len(changes))

    _add_span_event("apidrift.changes", attrs)


def emit_longitudinal_report(report: DriftReportV2) -> None:
    """Emit a span event describing a longitudinal report.

    Event name: ``apidrift.longitudinal``
    """
    attrs: dict[str, str | int | float | bool] = {
        "apidrift.run.id": report.run.run_id,
        "apidrift.run.service_name": report.run.service_name,
        "apidrift.run.environment": report.run.environment,
        "apidrift.longitudinal.has_previous_run": report.previous_run is not None,
        "apidrift.longitudinal.trends": len(report.trends),
        "apidrift.longitudinal.continuity": report.continuity is not None,
        "apidrift.longitudinal.spec_changed": report.spec_change is not None,
    }
    if report.spec_change is not None:
        logger.info(
            "Contract changed since run %s",
            report.previous_run.run_id if report.previous_run else "<unknown>",
        )

    _add_span_event("apidrift.longitudinal", attrs)
