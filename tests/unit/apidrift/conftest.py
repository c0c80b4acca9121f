"""Shared fixtures for apidrift unit tests."""

from __future__ import annotations

from typing import Any, Callable, Optional

import pytest

from apidrift.models import (
    ConfidenceInputs,
    DocumentedEvidence,
    DriftFinding,
    DriftReport,
    ObservationWindow,
    ObservedEvidence,
    parse_finding,
)
from apidrift.types import DriftType, HttpMethod, SeverityLevel


@pytest.fixture
def window() -> ObservationWindow:
    return ObservationWindow(
        start_time="2024-01-01T00:00:00.000Z",
        end_time="2024-01-01T01:00:00.000Z",
        sample_count=100,
    )


@pytest.fixture
def make_finding(window: ObservationWindow) -> Callable[..., DriftFinding]:
    """Factory for findings with sensible defaults per variant."""

    def _make(
        type: DriftType = DriftType.UNDOCUMENTED_FIELD,
        *,
        method: HttpMethod = HttpMethod.GET,
        path: str = "/users",
        field_path: Optional[str] = "email",
        status_code: Optional[int] = None,
        severity: SeverityLevel = SeverityLevel.HIGH,
        sample_count: int = 100,
        percentage: float = 90.0,
        consistency: Optional[float] = None,
    ) -> DriftFinding:
        data: dict[str, Any] = {
            "type": DriftType(type).value,
            "method": method,
            "path": path,
            "observed": ObservedEvidence(types=["string"], percentage=percentage),
            "confidence": ConfidenceInputs(
                sample_count=sample_count,
                consistency_percentage=percentage if consistency is None else consistency,
                window_duration_ms=3_600_000,
            ),
            "severity": severity,
            "window": window,
        }
        if type in (DriftType.UNDOCUMENTED_STATUS_CODE, DriftType.MISSING_STATUS_CODE):
            data["status_code"] = status_code if status_code is not None else 500
            data["documented"] = DocumentedEvidence(status_codes=[200])
        else:
            data["field_path"] = field_path
            if status_code is not None:
                data["status_code"] = status_code
            if type == DriftType.MISSING_FIELD:
                data["documented"] = DocumentedEvidence(types=["string"], required=True)
            elif type == DriftType.TYPE_MISMATCH:
                data["documented"] = DocumentedEvidence(types=["number"])
        return parse_finding(data)

    return _make


@pytest.fixture
def make_report(window: ObservationWindow) -> Callable[..., DriftReport]:
    def _make(findings: Optional[list[DriftFinding]] = None, endpoints_analyzed: int = 1) -> DriftReport:
        return DriftReport(
            window=window,
            endpoints_analyzed=endpoints_analyzed,
            findings=findings or [],
        )

    return _make
