"""Tests for report export formats."""

from __future__ import annotations

import json

import pytest

from apidrift.report.export import export_report


class TestExportReport:
    def test_json_is_compact(self, make_report):
        text = export_report(make_report(), "json")
        assert "\n" not in text
        assert json.loads(text)["endpointsAnalyzed"] == 1

    def test_json_pretty_indents_two_spaces(self, make_report):
        text = export_report(make_report(), "json-pretty")
        assert '\n  "window"' in text

    def test_ndjson_is_one_line(self, make_report):
        text = export_report(make_report(), "ndjson")
        assert text.endswith("\n")
        assert text.count("\n") == 1

    def test_unknown_format(self, make_report):
        with pytest.raises(ValueError, match="Unknown export format"):
            export_report(make_report(), "xml")
