"""
Longitudinal report builder.

Wraps one run's ``DriftReport`` with cross-run context: run metadata, the
previous run reference, a contract-change note, change events against the
previous run, trends over recent runs, and the continuity signal.

The single-run report is embedded as-is. Saving the result is left to the
caller so that a dry run can build without persisting.

Usage::

    from apidrift.report.longitudinal import build_report_v2
    from apidrift.storage import get_storage

    storage = get_storage("file", base_dir=".drift-reports")
    v2 = build_report_v2(
        report,
        service_name="users-api",
        environment="staging",
        spec_hash=calculate_spec_hash(spec_path),
        tool_version=__version__,
        storage=storage,
    )
    storage.save_report(v2)
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from apidrift.continuity import build_continuity_signal
from apidrift.diff.change_detector import IdFactory, detect_changes, new_id
from apidrift.models import (
    DriftReport,
    DriftReportV2,
    PreviousRunRef,
    RunMetadata,
    SpecChange,
    format_timestamp,
)
from apidrift.otel import emit_change_events, emit_longitudinal_report
from apidrift.storage.base import ReportStorage
from apidrift.trends.builder import build_trends

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 5
SPEC_CHANGE_NOTE = "Specification changed between compared runs"

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_report_v2(
    v1_report: DriftReport,
    *,
    service_name: str,
    environment: str,
    spec_hash: str,
    tool_version: str,
    storage: ReportStorage,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
    id_factory: IdFactory = new_id,
    clock: Clock = utc_now,
) -> DriftReportV2:
    """
    Build the longitudinal report for one run.

    Args:
        v1_report: This run's single-run report, embedded unchanged
        service_name: Service the traffic was captured from
        environment: Environment the traffic was captured in
        spec_hash: Hash of the contract document used for this run
        tool_version: apidrift version recorded in the run metadata
        storage: Report history
        history_limit: Number of recent runs consulted for trends
        id_factory: Produces the run ID and change IDs
        clock: Produces the execution timestamp

    Returns:
        DriftReportV2 (not yet saved)
    """
    run = RunMetadata(
        run_id=id_factory(),
        executed_at=format_timestamp(clock()),
        service_name=service_name,
        environment=environment,
        spec_hash=spec_hash,
        tool_version=tool_version,
    )

    previous_ref = storage.get_previous_run(service_name, environment)
    previous: Optional[DriftReportV2] = None
    if previous_ref is not None:
        previous = storage.load_report(previous_ref.run_id)
        if previous is None:
            logger.info("Previous run %s could not be loaded", previous_ref.run_id)

    spec_change: Optional[SpecChange] = None
    if previous is not None and previous.run.spec_hash != spec_hash:
        spec_change = SpecChange(
            previous_hash=previous.run.spec_hash,
            current_hash=spec_hash,
            note=SPEC_CHANGE_NOTE,
        )

    changes = (
        detect_changes(previous.report, v1_report, id_factory=id_factory)
        if previous is not None
        else []
    )

    historical: list[DriftReport] = []
    loaded_runs: set[str] = set()
    for ref in storage.list_recent_runs(service_name, environment, history_limit):
        if ref.run_id == run.run_id or ref.run_id in loaded_runs:
            continue
        if previous is not None and ref.run_id == previous.run.run_id:
            stored = previous
        else:
            stored = storage.load_report(ref.run_id)
        if stored is None:
            continue
        historical.append(stored.report)
        loaded_runs.add(ref.run_id)

    if previous is not None:
        loaded_runs.add(previous.run.run_id)

    trends = build_trends(v1_report.findings, historical)
    continuity = build_continuity_signal(
        len(loaded_runs), changes, len(v1_report.findings)
    )

    report = DriftReportV2(
        report=v1_report,
        run=run,
        previous_run=(
            PreviousRunRef(run_id=previous_ref.run_id, executed_at=previous_ref.executed_at)
            if previous_ref is not None
            else None
        ),
        spec_change=spec_change,
        changes=changes,
        trends=trends,
        continuity=continuity,
    )

    logger.info(
        "Longitudinal report %s: %d changes, %d trends over %d stored runs",
        run.run_id,
        len(changes),
        len(trends),
        len(loaded_runs),
    )
    emit_change_events(changes)
    emit_longitudinal_report(report)
    return report
