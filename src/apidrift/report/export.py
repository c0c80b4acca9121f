"""
Report export.

Raw structured output only; presentation is left to consumers.

===============  ==========================================
format           output
===============  ==========================================
``json``         compact JSON
``json-pretty``  JSON indented by two spaces
``ndjson``       compact JSON followed by a newline
===============  ==========================================
"""

from __future__ import annotations

import json
from typing import Union

from apidrift.models import DriftReport, DriftReportV2

EXPORT_FORMATS = ("json", "json-pretty", "ndjson")


def export_report(report: Union[DriftReport, DriftReportV2], fmt: str = "json-pretty") -> str:
    data = report.to_dict()
    if fmt == "json":
        return json.dumps(data, separators=(",", ":"))
    if fmt == "json-pretty":
        return json.dumps(data, indent=2)
    if fmt == "ndjson":
        return json.dumps(data, separators=(",", ":")) + "\n"
    raise ValueError(f"Unknown export format: {fmt}. Expected one of {', '.join(EXPORT_FORMATS)}")
