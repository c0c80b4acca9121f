"""Affirmative report for a run that detected no drift at all."""

from __future__ import annotations

from apidrift.models import DriftReport, ObservationWindow
from apidrift.report.builder import default_filter_criteria


def create_empty_report(window: ObservationWindow, endpoints_analyzed: int) -> DriftReport:
    """A complete observation with nothing to report.

    ``observation_complete`` distinguishes "looked and found nothing" from
    a report that simply has no findings after filtering.
    """
    return DriftReport(
        window=window,
        endpoints_analyzed=endpoints_analyzed,
        findings=[],
        filtered=True,
        filter_criteria=default_filter_criteria(),
        observation_complete=True,
    )
