"""
Enumerations shared across apidrift.

All enums subclass ``str`` so members compare equal to their wire values
(``SeverityLevel.HIGH == "high"``) and serialise as plain strings.
"""

from __future__ import annotations

from enum import Enum


class HttpMethod(str, Enum):
    """The seven canonical HTTP methods accepted in traffic samples."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class SeverityLevel(str, Enum):
    """
    Statistical strength of a finding's signal.

    Describes the sampled data only. ``high`` means a strong, consistent
    signal, not "this matters more".
    """
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


SEVERITY_RANK: dict[SeverityLevel, int] = {
    SeverityLevel.LOW: 0,
    SeverityLevel.MEDIUM: 1,
    SeverityLevel.HIGH: 2,
}


class DriftType(str, Enum):
    """Kind of divergence between the contract and observed traffic."""
    UNDOCUMENTED_FIELD = "undocumented-field"
    MISSING_FIELD = "missing-field"
    TYPE_MISMATCH = "type-mismatch"
    UNDOCUMENTED_STATUS_CODE = "undocumented-status-code"
    MISSING_STATUS_CODE = "missing-status-code"


class ChangeType(str, Enum):
    """Transition detected for one finding scope between two runs."""
    FINDING_APPEARED = "finding_appeared"
    FINDING_DISAPPEARED = "finding_disappeared"
    SEVERITY_SHIFT = "severity_shift"
    FREQUENCY_SHIFT = "frequency_shift"
    CONFIDENCE_SHIFT = "confidence_shift"


class FrequencyBand(str, Enum):
    """Average observed occurrence of a finding across runs."""
    RARE = "rare"
    INTERMITTENT = "intermittent"
    COMMON = "common"
    DOMINANT = "dominant"


class ConfidenceTrend(str, Enum):
    """Direction of sample-count evolution across runs."""
    STRENGTHENING = "strengthening"
    WEAKENING = "weakening"
    STABLE = "stable"
    INSUFFICIENT_DATA = "insufficient_data"


class Stability(str, Enum):
    """Presence pattern of a finding across runs."""
    STABLE = "stable"
    VOLATILE = "volatile"
    EMERGING = "emerging"
