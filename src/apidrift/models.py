"""
Pydantic v2 models for traffic, observations, findings and reports.

Every record is immutable (``frozen=True``) once constructed: a finding's
severity and confidence inputs are derived once by the drift detector and
never recomputed, and longitudinal processing only ever wraps a single-run
report, it never edits it.

Python code uses snake_case attributes. Serialised reports use the
camelCase wire names (``statusCode``, ``fieldPath``, ``windowDurationMs``)
so stored history stays readable by other consumers. Use ``to_dict()`` for
the wire form; absent optional fields are omitted rather than written as
``null``.

Drift findings are a discriminated union on ``type``. Each variant
enforces the fields it needs at construction time, so a ``type-mismatch``
finding cannot exist without ``documented.types``::

    from apidrift.models import parse_finding

    finding = parse_finding(raw_dict)   # picks the variant from raw_dict["type"]
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel

from apidrift.types import (
    ChangeType,
    ConfidenceTrend,
    DriftType,
    FrequencyBand,
    HttpMethod,
    SeverityLevel,
    Stability,
)

# Arbitrary decoded JSON: None | bool | int | float | str | dict | list
JsonValue = Any


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Render a datetime as UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class _Record(BaseModel):
    """Common configuration for all apidrift records."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Wire form: camelCase keys, absent optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Input and observation records
# ---------------------------------------------------------------------------


class TrafficSample(_Record):
    """One captured request/response pair, already validated by the reader."""

    model_config = ConfigDict(extra="ignore")

    timestamp: str
    method: HttpMethod
    path: str
    status_code: int
    request_body: JsonValue = None
    response_body: JsonValue = None


class ObservationWindow(_Record):
    """Time range covered by a set of samples (min/max sample timestamps)."""

    start_time: str
    end_time: str
    sample_count: int = Field(..., ge=0)

    @property
    def duration_ms(self) -> int:
        start = parse_timestamp(self.start_time)
        end = parse_timestamp(self.end_time)
        return int(round((end - start).total_seconds() * 1000))


class FieldObservation(_Record):
    """Aggregated behaviour of one field path across many bodies."""

    path: str
    occurrence_count: int
    occurrence_percentage: float
    observed_types: list[str] = Field(default_factory=list)
    sample_values: list[JsonValue] = Field(default_factory=list)


class EndpointObservation(_Record):
    """One endpoint's aggregated request/response fields and status histogram."""

    method: HttpMethod
    path: str
    window: ObservationWindow
    response_fields: list[FieldObservation] = Field(default_factory=list)
    request_fields: list[FieldObservation] = Field(default_factory=list)
    status_codes: dict[int, int] = Field(default_factory=dict)


class SpecEndpoint(_Record):
    """Contract declaration for one ``METHOD path`` pair."""

    method: HttpMethod
    path: str
    responses: dict[int, dict[str, Any]] = Field(default_factory=dict)
    request_body: Optional[dict[str, Any]] = None

    @property
    def key(self) -> str:
        return f"{self.method.value} {self.path}"


# ---------------------------------------------------------------------------
# Findings
# ---------------------------------------------------------------------------


class ConfidenceInputs(_Record):
    """
    Raw statistical inputs behind a finding.

    Deliberately not combined into a single score; consumers judge.
    """

    sample_count: int
    consistency_percentage: float
    window_duration_ms: int


class ObservedEvidence(_Record):
    """What the traffic showed."""

    value: JsonValue = None
    types: Optional[list[str]] = None
    count: Optional[int] = None
    percentage: Optional[float] = None


class DocumentedEvidence(_Record):
    """What the contract declared."""

    types: Optional[list[str]] = None
    required: Optional[bool] = None
    status_codes: Optional[list[int]] = None


class _FindingBase(_Record):
    type: str
    method: HttpMethod
    path: str
    field_path: Optional[str] = None
    status_code: Optional[int] = None
    observed: ObservedEvidence
    documented: Optional[DocumentedEvidence] = None
    confidence: ConfidenceInputs
    severity: SeverityLevel
    window: ObservationWindow


class UndocumentedFieldFinding(_FindingBase):
    """Field observed in traffic but absent from the contract schema."""

    type: Literal[DriftType.UNDOCUMENTED_FIELD] = DriftType.UNDOCUMENTED_FIELD
    field_path: str


class MissingFieldFinding(_FindingBase):
    """Required field observed in fewer than half of the samples."""

    type: Literal[DriftType.MISSING_FIELD] = DriftType.MISSING_FIELD
    field_path: str
    documented: DocumentedEvidence

    @model_validator(mode="after")
    def _require_documented_shape(self) -> "MissingFieldFinding":
        if self.documented.types is None or self.documented.required is None:
            raise ValueError(
                "missing-field finding requires documented.types and documented.required"
            )
        return self


class TypeMismatchFinding(_FindingBase):
    """Observed types share nothing with the documented types."""

    type: Literal[DriftType.TYPE_MISMATCH] = DriftType.TYPE_MISMATCH
    field_path: str
    documented: DocumentedEvidence

    @model_validator(mode="after")
    def _require_documented_types(self) -> "TypeMismatchFinding":
        if self.documented.types is None:
            raise ValueError("type-mismatch finding requires documented.types")
        return self


class UndocumentedStatusCodeFinding(_FindingBase):
    """Status code observed but not declared for the endpoint."""

    type: Literal[DriftType.UNDOCUMENTED_STATUS_CODE] = DriftType.UNDOCUMENTED_STATUS_CODE
    status_code: int
    documented: DocumentedEvidence

    @model_validator(mode="after")
    def _require_documented_codes(self) -> "UndocumentedStatusCodeFinding":
        if self.documented.status_codes is None:
            raise ValueError(
                "undocumented-status-code finding requires documented.status_codes"
            )
        return self


class MissingStatusCodeFinding(_FindingBase):
    """Status code declared for the endpoint but never observed."""

    type: Literal[DriftType.MISSING_STATUS_CODE] = DriftType.MISSING_STATUS_CODE
    status_code: int
    documented: DocumentedEvidence

    @model_validator(mode="after")
    def _require_documented_codes(self) -> "MissingStatusCodeFinding":
        if self.documented.status_codes is None:
            raise ValueError(
                "missing-status-code finding requires documented.status_codes"
            )
        return self


DriftFinding = Annotated[
    Union[
        UndocumentedFieldFinding,
        MissingFieldFinding,
        TypeMismatchFinding,
        UndocumentedStatusCodeFinding,
        MissingStatusCodeFinding,
    ],
    Field(discriminator="type"),
]

_FINDING_ADAPTER: TypeAdapter = TypeAdapter(DriftFinding)


def parse_finding(data: dict[str, Any]) -> DriftFinding:
    """Validate a raw mapping into the matching finding variant."""
    return _FINDING_ADAPTER.validate_python(data)


# ---------------------------------------------------------------------------
# Cross-run records
# ---------------------------------------------------------------------------


class FindingScope(_Record):
    """Identity of a finding across runs. Equality is exact on every field."""

    method: HttpMethod
    path: str
    field_path: Optional[str] = None
    status_code: Optional[int] = None


class ChangeSnapshot(_Record):
    """Partial view of a finding; only fields relevant to the change are set."""

    severity: Optional[SeverityLevel] = None
    frequency_percentage: Optional[float] = None
    sample_count: Optional[int] = None
    confidence_inputs: Optional[ConfidenceInputs] = None


class ChangeEvent(_Record):
    """One transition for a scope between two runs. Evidence, not a verdict."""

    change_id: str
    change_type: ChangeType
    scope: FindingScope
    previous: Optional[ChangeSnapshot] = None
    current: Optional[ChangeSnapshot] = None


class TrendSummary(_Record):
    """Descriptive behaviour of one current finding across stored runs."""

    scope: FindingScope
    observation_count: int
    frequency_band: FrequencyBand
    confidence_trend: ConfidenceTrend
    stability: Stability


class ContinuitySignal(_Record):
    """Affirmative statement that recent runs showed no change."""

    compared_runs: int
    unchanged_findings: int
    message: str


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


class FilterCriteria(_Record):
    """Thresholds that were applied when a report was filtered."""

    min_severity: Optional[SeverityLevel] = None
    min_sample_count: Optional[int] = None
    min_consistency_percentage: Optional[float] = None


class DriftReport(_Record):
    """One run's filtered and sorted findings."""

    window: ObservationWindow
    endpoints_analyzed: int
    findings: list[DriftFinding] = Field(default_factory=list)
    filtered: bool = False
    filter_criteria: Optional[FilterCriteria] = None
    observation_complete: Optional[bool] = None


class RunMetadata(_Record):
    """Identity of one invocation. No conclusions."""

    run_id: str
    executed_at: str
    service_name: str
    environment: str
    spec_hash: str
    tool_version: str


class PreviousRunRef(_Record):
    """Reference to a stored run; no report data is copied."""

    run_id: str
    executed_at: str


class SpecChange(_Record):
    """The contract document differs from the one used by the previous run."""

    previous_hash: str
    current_hash: str
    note: str


class DriftReportV2(_Record):
    """
    Longitudinal report.

    ``report`` is the single-run report exactly as built; everything else
    is context added around it.
    """

    schema_version: Literal["2.0"] = "2.0"
    report: DriftReport
    run: RunMetadata
    previous_run: Optional[PreviousRunRef] = None
    spec_change: Optional[SpecChange] = None
    changes: list[ChangeEvent] = Field(default_factory=list)
    trends: list[TrendSummary] = Field(default_factory=list)
    continuity: Optional[ContinuitySignal] = None
