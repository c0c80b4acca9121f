"""
Trend builder.

Summarises how each finding of the current run behaved across stored
history. Findings absent from the current run get no trend.

Usage::

    from apidrift.trends.builder import build_trends

    trends = build_trends(report.findings, [newest_report, older_report])
"""

from __future__ import annotations

import logging
from typing import Sequence

from apidrift.diff.matcher import create_scope, group_by_scope, scope_key
from apidrift.models import DriftFinding, DriftReport, TrendSummary
from apidrift.trends.analyzers import (
    assess_stability,
    calculate_confidence_trend,
    calculate_frequency_band,
)

logger = logging.getLogger(__name__)


def build_trends(
    current_findings: Sequence[DriftFinding],
    historical_reports: Sequence[DriftReport],
) -> list[TrendSummary]:
    """One ``TrendSummary`` per current finding.

    Args:
        current_findings: Findings of the run being reported.
        historical_reports: Earlier single-run reports, newest first.
    """
    history_maps = [group_by_scope(report.findings) for report in reversed(historical_reports)]

    trends: list[TrendSummary] = []
    for finding in current_findings:
        scope = create_scope(finding)
        key = scope_key(scope)

        sample_counts: list[int] = []
        percentages: list[float] = []
        presence: list[bool] = []
        for scope_map in history_maps:
            past = scope_map.get(key)
            sample_counts.append(past.confidence.sample_count if past else 0)
            percentages.append((past.observed.percentage or 0.0) if past else 0.0)
            presence.append(past is not None)

        sample_counts.append(finding.confidence.sample_count)
        percentages.append(finding.observed.percentage or 0.0)
        presence.append(True)

        # Absent runs must not dilute a rare-but-present finding
        present_percentages = [pct for pct in percentages if pct > 0]
        avg_percentage = (
            sum(present_percentages) / len(present_percentages) if present_percentages else 0.0
        )

        trends.append(
            TrendSummary(
                scope=scope,
                observation_count=len(history_maps) + 1,
                frequency_band=calculate_frequency_band(avg_percentage),
                confidence_trend=calculate_confidence_trend(sample_counts),
                stability=assess_stability(presence),
            )
        )

    logger.debug(
        "Built %d trends over %d historical runs", len(trends), len(history_maps)
    )
    return trends
