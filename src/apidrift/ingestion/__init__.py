"""Traffic ingestion: sample reading, validation and windowing."""

from apidrift.ingestion.traffic_reader import load_traffic_file, read_traffic_samples
from apidrift.ingestion.window import (
    build_observation_window,
    endpoint_key,
    group_by_endpoint,
    parse_endpoint_key,
)

__all__ = [
    "load_traffic_file",
    "read_traffic_samples",
    "build_observation_window",
    "endpoint_key",
    "group_by_endpoint",
    "parse_endpoint_key",
]
