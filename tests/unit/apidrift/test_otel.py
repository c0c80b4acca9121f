"""Tests for OTel span event emission helpers."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from apidrift.config import get_config
from apidrift.models import ChangeEvent, DriftReportV2, FindingScope, RunMetadata, SpecChange
from apidrift.otel import emit_change_events, emit_drift_report, emit_longitudinal_report
from apidrift.types import ChangeType, HttpMethod, SeverityLevel


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_span():
    """Create a mock OTel span that is recording."""
    span = MagicMock()
    span.is_recording.return_value = True
    return span


@pytest.fixture
def mock_otel(mock_span):
    """Patch OTel to return our mock span."""
    with patch("apidrift.otel._HAS_OTEL", True), \
         patch("apidrift.otel.otel_trace") as mock_trace:
        mock_trace.get_current_span.return_value = mock_span
        yield mock_span


def _make_change(change_type: ChangeType) -> ChangeEvent:
    return ChangeEvent(
        change_id="c",
        change_type=change_type,
        scope=FindingScope(method=HttpMethod.GET, path="/users"),
    )


# ---------------------------------------------------------------------------
# emit_drift_report
# ---------------------------------------------------------------------------


class TestEmitDriftReport:
    def test_emits_counts_by_severity(self, mock_otel, make_finding, make_report):
        report = make_report(
            [
                make_finding(field_path="a", severity=SeverityLevel.HIGH),
                make_finding(field_path="b", severity=SeverityLevel.HIGH),
                make_finding(field_path="c", severity=SeverityLevel.LOW),
            ],
            endpoints_analyzed=4,
        )
        emit_drift_report(report)

        call_args = mock_otel.add_event.call_args
        assert call_args.kwargs["name"] == "apidrift.report"
        attrs = call_args.kwargs["attributes"]
        assert attrs["apidrift.report.endpoints_analyzed"] == 4
        assert attrs["apidrift.report.findings"] == 3
        assert attrs["apidrift.report.high_count"] == 2
        assert attrs["apidrift.report.medium_count"] == 0
        assert attrs["apidrift.report.low_count"] == 1
        assert attrs["apidrift.report.filtered"] is False

    def test_no_event_when_span_not_recording(self, mock_otel, make_report):
        mock_otel.is_recording.return_value = False
        emit_drift_report(make_report())
        mock_otel.add_event.assert_not_called()

    def test_no_event_when_disabled(self, mock_otel, make_report):
        get_config(otel_enabled=False)
        emit_drift_report(make_report())
        mock_otel.add_event.assert_not_called()

    def test_no_event_without_otel(self, make_report):
        with patch("apidrift.otel._HAS_OTEL", False):
            emit_drift_report(make_report())


class TestEmitChangeEvents:
    def test_counts_per_change_type(self, mock_otel):
        emit_change_events(
            [
                _make_change(ChangeType.FINDING_APPEARED),
                _make_change(ChangeType.FINDING_APPEARED),
                _make_change(ChangeType.SEVERITY_SHIFT),
            ]
        )
        call_args = mock_otel.add_event.call_args
        assert call_args.kwargs["name"] == "apidrift.changes"
        attrs = call_args.kwargs["attributes"]
        assert attrs["apidrift.changes.total"] == 3
        assert attrs["apidrift.changes.finding_appeared"] == 2
        assert attrs["apidrift.changes.severity_shift"] == 1
        assert attrs["apidrift.changes.confidence_shift"] == 0


class TestEmitLongitudinalReport:
    def test_attributes(self, mock_otel, make_report):
        report = DriftReportV2(
            report=make_report(),
            run=RunMetadata(
                run_id="run-9",
                executed_at="2024-01-01T00:00:00.000Z",
                service_name="users-api",
                environment="prod",
                spec_hash="b",
                tool_version="0.2.0",
            ),
            spec_change=SpecChange(previous_hash="a", current_hash="b", note="changed"),
        )
        emit_longitudinal_report(report)

        call_args = mock_otel.add_event.call_args
        assert call_args.kwargs["name"] == "apidrift.longitudinal"
        attrs = call_args.kwargs["attributes"]
        assert attrs["apidrift.run.id"] == "run-9"
        assert attrs["apidrift.longitudinal.spec_changed"] is True
        assert attrs["apidrift.longitudinal.has_previous_run"] is False
        assert attrs["apidrift.longitudinal.continuity"] is False
        assert attrs["apidrift.longitudinal.trends"] == 0
