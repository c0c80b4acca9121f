"""Single-run and longitudinal report assembly."""

from apidrift.report.builder import (
    DEFAULT_MIN_CONSISTENCY_PERCENTAGE,
    DEFAULT_MIN_SAMPLE_COUNT,
    DEFAULT_MIN_SEVERITY,
    build_drift_report,
    default_filter_criteria,
    filter_findings,
    sort_findings,
)
from apidrift.report.empty_state import create_empty_report
from apidrift.report.export import EXPORT_FORMATS, export_report
from apidrift.report.longitudinal import build_report_v2

__all__ = [
    "DEFAULT_MIN_CONSISTENCY_PERCENTAGE",
    "DEFAULT_MIN_SAMPLE_COUNT",
    "DEFAULT_MIN_SEVERITY",
    "EXPORT_FORMATS",
    "build_drift_report",
    "build_report_v2",
    "create_empty_report",
    "default_filter_criteria",
    "export_report",
    "filter_findings",
    "sort_findings",
]
