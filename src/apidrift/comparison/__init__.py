"""Contract loading, schema flattening and drift detection."""

from apidrift.comparison.drift_detector import (
    calculate_confidence_inputs,
    detect_drift,
    determine_severity,
)
from apidrift.comparison.schema_extractor import (
    FieldComparison,
    SchemaField,
    compare_fields,
    extract_fields,
    types_match,
)
from apidrift.comparison.spec_loader import build_spec_index, extract_endpoints, load_spec

__all__ = [
    "FieldComparison",
    "SchemaField",
    "build_spec_index",
    "calculate_confidence_inputs",
    "compare_fields",
    "detect_drift",
    "determine_severity",
    "extract_endpoints",
    "extract_fields",
    "load_spec",
    "types_match",
]
