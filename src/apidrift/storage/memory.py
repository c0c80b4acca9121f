"""
In-memory report storage.

Holds reports for the lifetime of the process. Used by tests and by
one-shot runs that want longitudinal output without persisting it.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from apidrift.models import DriftReportV2, PreviousRunRef, parse_timestamp
from apidrift.storage.base import BaseReportStorage, StorageType, register_backend

logger = logging.getLogger(__name__)


@register_backend(StorageType.MEMORY)
class MemoryReportStorage(BaseReportStorage):
    """Report storage backed by a dict keyed by run ID."""

    def __init__(self) -> None:
        self._reports: Dict[str, DriftReportV2] = {}

    def save_report(self, report: DriftReportV2) -> None:
        self._reports[report.run.run_id] = report
        logger.debug("Stored report %s in memory", report.run.run_id)

    def load_report(self, run_id: str) -> Optional[DriftReportV2]:
        return self._reports.get(run_id)

    def list_recent_runs(
        self, service_name: str, environment: str, limit: int
    ) -> List[PreviousRunRef]:
        runs = [
            report.run
            for report in self._reports.values()
            if report.run.service_name == service_name
            and report.run.environment == environment
        ]
        runs.sort(key=lambda run: parse_timestamp(run.executed_at), reverse=True)
        return [
            PreviousRunRef(run_id=run.run_id, executed_at=run.executed_at)
            for run in runs[:limit]
        ]
