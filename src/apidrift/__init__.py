"""
apidrift - Observed-behaviour drift auditing for HTTP services.

Compares captured request/response traffic against an OpenAPI contract and
reports structured evidence of divergence ("drift findings"). Repeated runs
are persisted so that findings can be matched across runs, diffed, and
summarised as trends.

Key Features:
- Field-level aggregation of JSON bodies (dot/bracket field paths)
- Typed drift findings with a descriptive severity classification
- Run-to-run change events, frequency/confidence/stability trends
- Affirmative "nothing changed" continuity signal

Example usage:
    from pathlib import Path

    from apidrift import analyze_traffic, read_traffic_samples
    from apidrift.comparison.spec_loader import extract_endpoints, load_spec

    samples = read_traffic_samples(open("traffic.json").read())
    endpoints = extract_endpoints(load_spec(Path("openapi.yaml")))
    report = analyze_traffic(samples, endpoints)
"""

__version__ = "0.2.0"
__all__ = [
    "analyze_traffic",
    "read_traffic_samples",
    "build_report_v2",
    "detect_changes",
    "build_trends",
    "__version__",
]


# Lazy imports keep ``apidrift --help`` fast
def __getattr__(name: str):
    if name == "analyze_traffic":
        from apidrift.pipeline import analyze_traffic
        return analyze_traffic
    if name == "read_traffic_samples":
        from apidrift.ingestion.traffic_reader import read_traffic_samples
        return read_traffic_samples
    if name == "build_report_v2":
        from apidrift.report.longitudinal import build_report_v2
        return build_report_v2
    if name == "detect_changes":
        from apidrift.diff.change_detector import detect_changes
        return detect_changes
    if name == "build_trends":
        from apidrift.trends.builder import build_trends
        return build_trends
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
