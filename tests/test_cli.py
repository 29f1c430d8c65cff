"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from reportpdf.cli import main

OUTPUT_NAME = "hours-report-2024-03-01-to-2024-03-15.pdf"


@pytest.fixture
def sample_report_path():
    return str(Path(__file__).parent.parent / "examples" / "sample_report.json")


@pytest.fixture
def runner():
    return CliRunner()


class TestRender:
    def test_render(self, runner, sample_report_path, tmp_path):
        result = runner.invoke(main, ["render", sample_report_path, "-o", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert (tmp_path / OUTPUT_NAME).exists()

    def test_render_env_settings(self, runner, sample_report_path, tmp_path):
        result = runner.invoke(
            main,
            ["render", sample_report_path],
            env={"REPORTPDF_OUTPUT_DIR": str(tmp_path), "REPORTPDF_LAYOUT": "detail"},
        )
        assert result.exit_code == 0, result.output
        assert "detail" in result.output
        assert (tmp_path / OUTPUT_NAME).exists()

    def test_render_missing_source(self, runner, tmp_path):
        result = runner.invoke(main, ["render", str(tmp_path / "none.json"), "-o", str(tmp_path)])
        assert result.exit_code == 1

    def test_render_bad_layout(self, runner, sample_report_path, tmp_path):
        result = runner.invoke(main, ["render", sample_report_path, "--layout", "poster"])
        assert result.exit_code == 2


class TestOtherCommands:
    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_layouts(self, runner):
        result = runner.invoke(main, ["layouts"])
        assert result.exit_code == 0
        for name in ("standard", "detail", "ledger"):
            assert name in result.output

    def test_check_valid(self, runner, sample_report_path, tmp_path):
        runner.invoke(main, ["render", sample_report_path, "-o", str(tmp_path)])
        result = runner.invoke(main, ["check", str(tmp_path / OUTPUT_NAME)])
        assert result.exit_code == 0, result.output
        assert "1 page(s)" in result.output

    def test_check_invalid(self, runner, tmp_path):
        bogus = tmp_path / "bogus.pdf"
        bogus.write_bytes(b"%PDF-1.4\nnot really\n")
        result = runner.invoke(main, ["check", str(bogus)])
        assert result.exit_code == 1
        assert "Invalid PDF" in result.output
