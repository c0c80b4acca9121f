"""
Drift detector.

Compares one endpoint's observation with its contract declaration and
emits typed findings:

- **undocumented-status-code**: a status code seen in traffic that the
  contract does not declare for the endpoint.
- **undocumented-field**: a response field seen in traffic but absent
  from the success response schema.
- **missing-field**: a required field seen in fewer than half of the
  samples.
- **type-mismatch**: a field whose observed types share nothing with the
  declared types.

Fields are compared against the success response schema only: status 200,
otherwise 201, otherwise no field comparison at all.

Severity is a statistical-strength label computed from a per-type
"signal" percentage:

===========================  =======================================
finding type                 signal percentage
===========================  =======================================
undocumented-field           observed occurrence percentage
type-mismatch                observed occurrence percentage
missing-field                100 - observed occurrence percentage
undocumented-status-code     share of samples with that status code
===========================  =======================================

The same percentage becomes ``confidence.consistency_percentage``.
"""

from __future__ import annotations

import logging
from typing import Optional

from apidrift.comparison.schema_extractor import compare_fields, types_match
from apidrift.models import (
    ConfidenceInputs,
    DocumentedEvidence,
    DriftFinding,
    EndpointObservation,
    MissingFieldFinding,
    ObservedEvidence,
    SpecEndpoint,
    TypeMismatchFinding,
    UndocumentedFieldFinding,
    UndocumentedStatusCodeFinding,
)
from apidrift.types import SeverityLevel

logger = logging.getLogger(__name__)

MISSING_FIELD_THRESHOLD = 50.0
SUCCESS_STATUS_CODES = (200, 201)


def determine_severity(occurrence_percentage: float, sample_count: int) -> SeverityLevel:
    """Classify signal strength.

    ``high``: > 80%, or > 50% with more than 10 samples.
    ``low``: < 20%, or fewer than 5 samples.
    ``medium`` otherwise.
    """
    if occurrence_percentage > 80 or (occurrence_percentage > 50 and sample_count > 10):
        return SeverityLevel.HIGH
    if occurrence_percentage < 20 or sample_count < 5:
        return SeverityLevel.LOW
    return SeverityLevel.MEDIUM


def calculate_confidence_inputs(
    observation: EndpointObservation,
    consistency_percentage: float,
) -> ConfidenceInputs:
    return ConfidenceInputs(
        sample_count=observation.window.sample_count,
        consistency_percentage=consistency_percentage,
        window_duration_ms=observation.window.duration_ms,
    )


def success_schema(spec_endpoint: SpecEndpoint) -> Optional[dict]:
    """Schema of the 200 response, else the 201 response, else ``None``."""
    for code in SUCCESS_STATUS_CODES:
        if code in spec_endpoint.responses:
            return spec_endpoint.responses[code]
    return None


def _status_code_findings(
    spec_endpoint: SpecEndpoint,
    observation: EndpointObservation,
) -> list[DriftFinding]:
    findings: list[DriftFinding] = []
    documented_codes = list(spec_endpoint.responses.keys())
    total = observation.window.sample_count

    for code, count in observation.status_codes.items():
        if code in spec_endpoint.responses:
            continue
        percentage = (count / total) * 100 if total > 0 else 0.0
        findings.append(
            UndocumentedStatusCodeFinding(
                method=observation.method,
                path=observation.path,
                status_code=code,
                observed=ObservedEvidence(count=count, percentage=percentage),
                documented=DocumentedEvidence(status_codes=documented_codes),
                confidence=calculate_confidence_inputs(observation, percentage),
                severity=determine_severity(percentage, count),
                window=observation.window,
            )
        )
    return findings


def _field_findings(
    schema: dict,
    observation: EndpointObservation,
) -> list[DriftFinding]:
    findings: list[DriftFinding] = []
    sample_count = observation.window.sample_count

    for comp in compare_fields(schema, observation.response_fields):
        observed_pct = comp.observed_occurrence_percentage or 0.0
        observed = ObservedEvidence(
            types=comp.observed_types,
            percentage=comp.observed_occurrence_percentage,
        )

        if comp.in_observed and not comp.in_spec:
            findings.append(
                UndocumentedFieldFinding(
                    method=observation.method,
                    path=observation.path,
                    field_path=comp.field_path,
                    observed=observed,
                    confidence=calculate_confidence_inputs(observation, observed_pct),
                    severity=determine_severity(observed_pct, sample_count),
                    window=observation.window,
                )
            )
            continue

        if not (comp.in_spec and comp.in_observed):
            continue

        if comp.spec_required and observed_pct < MISSING_FIELD_THRESHOLD:
            absence_pct = 100 - observed_pct
            findings.append(
                MissingFieldFinding(
                    method=observation.method,
                    path=observation.path,
                    field_path=comp.field_path,
                    observed=observed,
                    documented=DocumentedEvidence(
                        types=comp.spec_types,
                        required=comp.spec_required,
                    ),
                    confidence=calculate_confidence_inputs(observation, absence_pct),
                    severity=determine_severity(absence_pct, sample_count),
                    window=observation.window,
                )
            )

        if not types_match(comp.spec_types, comp.observed_types):
            findings.append(
                TypeMismatchFinding(
                    method=observation.method,
                    path=observation.path,
                    field_path=comp.field_path,
                    observed=observed,
                    documented=DocumentedEvidence(types=comp.spec_types),
                    confidence=calculate_confidence_inputs(observation, observed_pct),
                    severity=determine_severity(observed_pct, sample_count),
                    window=observation.window,
                )
            )

    return findings


def detect_drift(
    spec_endpoint: Optional[SpecEndpoint],
    observation: EndpointObservation,
) -> list[DriftFinding]:
    """Findings for one endpoint.

    Endpoints the contract does not declare produce no findings.
    """
    if spec_endpoint is None:
        return []

    findings = _status_code_findings(spec_endpoint, observation)

    schema = success_schema(spec_endpoint)
    if schema is not None:
        findings.extend(_field_findings(schema, observation))

    logger.debug(
        "Drift for %s %s: %d findings",
        observation.method.value,
        observation.path,
        len(findings),
    )
    return findings
