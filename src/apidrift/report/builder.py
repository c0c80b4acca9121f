"""
Report builder.

Filters and orders one run's findings into a ``DriftReport``. The default
thresholds are part of the report contract and are recorded in
``filter_criteria`` whenever they are applied.
"""

from __future__ import annotations

import logging
from typing import Sequence

from apidrift.models import DriftFinding, DriftReport, FilterCriteria, ObservationWindow
from apidrift.types import SEVERITY_RANK, SeverityLevel

logger = logging.getLogger(__name__)

DEFAULT_MIN_SEVERITY = SeverityLevel.MEDIUM
DEFAULT_MIN_SAMPLE_COUNT = 5
DEFAULT_MIN_CONSISTENCY_PERCENTAGE = 10.0


def default_filter_criteria() -> FilterCriteria:
    return FilterCriteria(
        min_severity=DEFAULT_MIN_SEVERITY,
        min_sample_count=DEFAULT_MIN_SAMPLE_COUNT,
        min_consistency_percentage=DEFAULT_MIN_CONSISTENCY_PERCENTAGE,
    )


def filter_findings(
    findings: Sequence[DriftFinding],
    min_severity: SeverityLevel = DEFAULT_MIN_SEVERITY,
    min_sample_count: int = DEFAULT_MIN_SAMPLE_COUNT,
    min_consistency_percentage: float = DEFAULT_MIN_CONSISTENCY_PERCENTAGE,
) -> list[DriftFinding]:
    """Keep findings meeting all three thresholds."""
    min_rank = SEVERITY_RANK[SeverityLevel(min_severity)]
    return [
        finding
        for finding in findings
        if SEVERITY_RANK[finding.severity] >= min_rank
        and finding.confidence.sample_count >= min_sample_count
        and finding.confidence.consistency_percentage >= min_consistency_percentage
    ]


def _sort_key(finding: DriftFinding) -> tuple[int, int, str]:
    return (
        -SEVERITY_RANK[finding.severity],
        -finding.confidence.sample_count,
        finding.field_path or "",
    )


def sort_findings(findings: Sequence[DriftFinding]) -> list[DriftFinding]:
    """Severity desc, then sample count desc, then field path asc."""
    return sorted(findings, key=_sort_key)


def build_drift_report(
    findings: Sequence[DriftFinding],
    window: ObservationWindow,
    endpoints_analyzed: int,
    apply_default_filter: bool = True,
) -> DriftReport:
    if apply_default_filter:
        kept = filter_findings(findings)
        report = DriftReport(
            window=window,
            endpoints_analyzed=endpoints_analyzed,
            findings=sort_findings(kept),
            filtered=True,
            filter_criteria=default_filter_criteria(),
        )
    else:
        report = DriftReport(
            window=window,
            endpoints_analyzed=endpoints_analyzed,
            findings=sort_findings(findings),
            filtered=False,
        )

    logger.info(
        "Drift report: %d endpoints analyzed, %d of %d findings reported",
        endpoints_analyzed,
        len(report.findings),
        len(findings),
    )
    return report
