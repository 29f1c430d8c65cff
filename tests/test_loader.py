"""Tests for loading report files."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from reportpdf.core.loader import ReportSourceError, load_report, parse_report
from reportpdf.core.models import SummaryBoxBlock, TableBlock

REPORT = {
    "metadata": {"title": "Tips Report", "range": {"from": "2024-05-01", "to": "2024-05-07"}},
    "blocks": [
        {"kind": "table", "columns": [{"label": "Server", "width": 120}], "rows": [["Ana"]]},
    ],
}


@pytest.fixture
def sample_report_path():
    return Path(__file__).parent.parent / "examples" / "sample_report.json"


class TestLoadReport:
    def test_json(self, tmp_path):
        path = tmp_path / "tips.json"
        path.write_text(json.dumps(REPORT), encoding="utf-8")
        report = load_report(path)
        assert report.metadata.title == "Tips Report"
        assert isinstance(report.blocks[0], TableBlock)

    def test_yaml(self, tmp_path):
        path = tmp_path / "tips.yaml"
        path.write_text(
            "metadata:\n"
            "  title: Tips Report\n"
            "blocks:\n"
            "  - kind: summaryBox\n"
            "    pairs:\n"
            "      - [Cash Tips, '$120.00']\n",
            encoding="utf-8",
        )
        report = load_report(path)
        assert isinstance(report.blocks[0], SummaryBoxBlock)
        assert report.blocks[0].pairs == [("Cash Tips", "$120.00")]

    def test_unknown_suffix_tries_json_then_yaml(self, tmp_path):
        path = tmp_path / "tips.report"
        path.write_text("metadata:\n  title: From YAML\n", encoding="utf-8")
        assert load_report(path).metadata.title == "From YAML"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_report(path).blocks == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_report(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ReportSourceError, match="bad.json"):
            load_report(path)

    def test_schema_violation(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"blocks": [{"kind": "chart"}]}), encoding="utf-8")
        with pytest.raises(ReportSourceError):
            load_report(path)

    def test_sample_report(self, sample_report_path):
        report = load_report(sample_report_path)
        assert report.metadata.company.name == "Blue Fig Kitchen"
        assert len(report.blocks) == 5


class TestParseReport:
    def test_non_mapping(self):
        with pytest.raises(ReportSourceError, match="mapping"):
            parse_report([1, 2])

    def test_none_is_empty_report(self):
        assert parse_report(None).blocks == []

    def test_source_error_is_value_error(self):
        assert issubclass(ReportSourceError, ValueError)
