"""Field- and endpoint-level observation of JSON traffic bodies."""

from apidrift.observation.endpoint_observer import build_endpoint_observation
from apidrift.observation.field_observer import (
    MAX_SAMPLE_VALUES,
    FieldObserver,
    extract_field_paths,
    json_type_name,
)

__all__ = [
    "MAX_SAMPLE_VALUES",
    "FieldObserver",
    "build_endpoint_observation",
    "extract_field_paths",
    "json_type_name",
]
