"""Tests for filtering, sorting and single-run report assembly."""

from __future__ import annotations

from apidrift.report.builder import (
    DEFAULT_MIN_CONSISTENCY_PERCENTAGE,
    DEFAULT_MIN_SAMPLE_COUNT,
    DEFAULT_MIN_SEVERITY,
    build_drift_report,
    filter_findings,
    sort_findings,
)
from apidrift.report.empty_state import create_empty_report
from apidrift.types import DriftType, SeverityLevel


# ---------------------------------------------------------------------------
# filter_findings
# ---------------------------------------------------------------------------


class TestFilterFindings:
    def test_default_thresholds(self, make_finding):
        keep = make_finding(severity=SeverityLevel.MEDIUM, sample_count=5, consistency=10.0)
        low = make_finding(severity=SeverityLevel.LOW)
        few = make_finding(sample_count=4)
        faint = make_finding(consistency=9.9)
        assert filter_findings([keep, low, few, faint]) == [keep]

    def test_custom_thresholds(self, make_finding):
        low = make_finding(severity=SeverityLevel.LOW, sample_count=1, consistency=1.0)
        assert filter_findings(
            [low],
            min_severity=SeverityLevel.LOW,
            min_sample_count=1,
            min_consistency_percentage=0,
        ) == [low]

    def test_min_severity_high(self, make_finding):
        medium = make_finding(severity=SeverityLevel.MEDIUM)
        assert filter_findings([medium], min_severity="high") == []

    def test_idempotent(self, make_finding):
        findings = [
            make_finding(field_path=f"f{i}", severity=severity, sample_count=count)
            for i, (severity, count) in enumerate(
                [(SeverityLevel.HIGH, 3), (SeverityLevel.MEDIUM, 50), (SeverityLevel.LOW, 99)]
            )
        ]
        once = filter_findings(findings)
        assert filter_findings(once) == once


# ---------------------------------------------------------------------------
# sort_findings
# ---------------------------------------------------------------------------


class TestSortFindings:
    def test_severity_then_samples_then_field_path(self, make_finding):
        a = make_finding(field_path="b", severity=SeverityLevel.MEDIUM, sample_count=10)
        b = make_finding(field_path="a", severity=SeverityLevel.MEDIUM, sample_count=10)
        c = make_finding(field_path="z", severity=SeverityLevel.MEDIUM, sample_count=50)
        d = make_finding(field_path="y", severity=SeverityLevel.HIGH, sample_count=1)
        assert sort_findings([a, b, c, d]) == [d, c, b, a]

    def test_missing_field_path_sorts_first_among_ties(self, make_finding):
        named = make_finding(field_path="a")
        status = make_finding(DriftType.UNDOCUMENTED_STATUS_CODE, status_code=500)
        assert sort_findings([named, status]) == [status, named]

    def test_sorting_twice_equals_once(self, make_finding):
        findings = [
            make_finding(field_path=p, severity=s, sample_count=n)
            for p, s, n in [
                ("x", SeverityLevel.LOW, 5),
                ("a", SeverityLevel.HIGH, 5),
                ("m", SeverityLevel.HIGH, 7),
                ("b", SeverityLevel.MEDIUM, 5),
            ]
        ]
        once = sort_findings(findings)
        assert sort_findings(once) == once

    def test_does_not_mutate_input(self, make_finding):
        findings = [make_finding(field_path="b"), make_finding(field_path="a")]
        sort_findings(findings)
        assert [f.field_path for f in findings] == ["b", "a"]


# ---------------------------------------------------------------------------
# build_drift_report / create_empty_report
# ---------------------------------------------------------------------------


class TestBuildDriftReport:
    def test_filtered_report_records_criteria(self, make_finding, window):
        findings = [make_finding(field_path="a"), make_finding(field_path="b", severity=SeverityLevel.LOW)]
        report = build_drift_report(findings, window, endpoints_analyzed=2)

        assert report.filtered is True
        assert [f.field_path for f in report.findings] == ["a"]
        assert report.filter_criteria.min_severity == DEFAULT_MIN_SEVERITY
        assert report.filter_criteria.min_sample_count == DEFAULT_MIN_SAMPLE_COUNT
        assert report.filter_criteria.min_consistency_percentage == DEFAULT_MIN_CONSISTENCY_PERCENTAGE
        assert report.endpoints_analyzed == 2
        assert report.observation_complete is None

    def test_unfiltered_report_keeps_everything_sorted(self, make_finding, window):
        findings = [
            make_finding(field_path="b", severity=SeverityLevel.LOW),
            make_finding(field_path="a"),
        ]
        report = build_drift_report(findings, window, 1, apply_default_filter=False)
        assert report.filtered is False
        assert report.filter_criteria is None
        assert [f.field_path for f in report.findings] == ["a", "b"]

    def test_wire_form_uses_camel_case(self, make_finding, window):
        report = build_drift_report([make_finding()], window, 1)
        data = report.to_dict()
        assert data["endpointsAnalyzed"] == 1
        assert data["filterCriteria"] == {
            "minSeverity": "medium",
            "minSampleCount": 5,
            "minConsistencyPercentage": 10.0,
        }
        finding = data["findings"][0]
        assert finding["fieldPath"] == "email"
        assert finding["confidence"]["windowDurationMs"] == 3_600_000
        assert "statusCode" not in finding
        assert "observationComplete" not in data


class TestCreateEmptyReport:
    def test_affirmative_empty_state(self, window):
        report = create_empty_report(window, 3)
        assert report.findings == []
        assert report.filtered is True
        assert report.observation_complete is True
        assert report.endpoints_analyzed == 3
        assert report.filter_criteria.min_sample_count == DEFAULT_MIN_SAMPLE_COUNT
