"""
File-based report storage.

Stores one JSON document per run plus a per service/environment index:

    <storage_dir>/
    ├── <run_id>.json
    └── <service>-<environment>-index.json

The index lists ``{runId, executedAt}`` entries newest first and is trimmed
to ``index_limit`` entries. Report files of trimmed runs are left in place.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from apidrift.models import DriftReportV2, PreviousRunRef, parse_timestamp
from apidrift.storage.base import BaseReportStorage, StorageType, register_backend

logger = logging.getLogger(__name__)

DEFAULT_INDEX_LIMIT = 100

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def _safe_name(value: str) -> str:
    return _UNSAFE_CHARS.sub("_", value)


@register_backend(StorageType.FILE)
class FileReportStorage(BaseReportStorage):
    """
    File-based report storage.

    Ideal for:
    - CI jobs that cache the storage directory between runs
    - Local development
    """

    def __init__(
        self,
        base_dir: Optional[str | Path] = None,
        index_limit: int = DEFAULT_INDEX_LIMIT,
    ):
        self.base_dir = Path(base_dir or ".drift-reports")
        self.index_limit = index_limit
        logger.debug("FileReportStorage initialized at %s", self.base_dir)

    def _report_path(self, run_id: str) -> Path:
        return self.base_dir / f"{_safe_name(run_id)}.json"

    def _index_path(self, service_name: str, environment: str) -> Path:
        return self.base_dir / f"{_safe_name(service_name)}-{_safe_name(environment)}-index.json"

    def _read_index(self, service_name: str, environment: str) -> List[PreviousRunRef]:
        index_path = self._index_path(service_name, environment)
        if not index_path.exists():
            return []
        try:
            with open(index_path, encoding="utf-8") as f:
                entries = json.load(f)
            return [PreviousRunRef.model_validate(entry) for entry in entries]
        except (OSError, json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.warning("Failed to read run index %s: %s", index_path, e)
            return []

    def save_report(self, report: DriftReportV2) -> None:
        """Write the report file and record the run in its index."""
        self.base_dir.mkdir(parents=True, exist_ok=True)

        report_path = self._report_path(report.run.run_id)
        with open(report_path, "w", encoding="utf-8") as f:
            json.dump(report.to_dict(), f, indent=2)

        run = report.run
        entries = [
            entry
            for entry in self._read_index(run.service_name, run.environment)
            if entry.run_id != run.run_id
        ]
        entries.append(PreviousRunRef(run_id=run.run_id, executed_at=run.executed_at))
        entries.sort(key=lambda entry: parse_timestamp(entry.executed_at), reverse=True)
        entries = entries[: self.index_limit]

        index_path = self._index_path(run.service_name, run.environment)
        with open(index_path, "w", encoding="utf-8") as f:
            json.dump([entry.to_dict() for entry in entries], f, indent=2)

        logger.debug("Saved report %s to %s", run.run_id, report_path)

    def load_report(self, run_id: str) -> Optional[DriftReportV2]:
        """Load a report by run ID; unreadable files count as absent."""
        report_path = self._report_path(run_id)
        if not report_path.exists():
            return None

        try:
            with open(report_path, encoding="utf-8") as f:
                data = json.load(f)
            return DriftReportV2.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("Failed to load report %s: %s", report_path, e)
            return None

    def list_recent_runs(
        self, service_name: str, environment: str, limit: int
    ) -> List[PreviousRunRef]:
        """Indexed runs, newest first."""
        return self._read_index(service_name, environment)[:limit]
