"""Tests for the report models, company profile and date labels."""

from __future__ import annotations

import logging
from datetime import date

import pytest
from pydantic import ValidationError

from reportpdf.core.company import DEFAULT_COMPANY_NAME, CompanyProfile
from reportpdf.core.formatting import format_long_date, format_period, format_us_date, parse_iso_date
from reportpdf.core.models import (
    Align,
    ColumnSpec,
    DateRange,
    LineBlock,
    ReportMetadata,
    ReportModel,
    SpacerBlock,
    SummaryBoxBlock,
    TableBlock,
    cell_text,
)


class TestCellText:
    def test_values(self):
        assert cell_text(None) == ""
        assert cell_text(8.0) == "8"
        assert cell_text(3.25) == "3.25"
        assert cell_text(True) == "Yes"
        assert cell_text(12) == "12"


class TestBlocks:
    def test_discriminated_blocks(self):
        model = ReportModel.model_validate({
            "blocks": [
                {"kind": "line", "text": "Hello"},
                {"kind": "table", "columns": [{"label": "A", "width": 50}], "rows": [["x"]]},
                {"kind": "summaryBox", "pairs": [["Net", "$1"]]},
                {"kind": "spacer"},
            ]
        })
        kinds = [type(b) for b in model.blocks]
        assert kinds == [LineBlock, TableBlock, SummaryBoxBlock, SpacerBlock]

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            ReportModel.model_validate({"blocks": [{"kind": "chart"}]})

    def test_table_rows_coerced(self):
        table = TableBlock.model_validate({
            "columns": [{"label": "A", "width": 50}],
            "rows": [[None, 8.0, 3.25, True], None],
            "emptyMessage": "Nothing",
        })
        assert table.rows == [["", "8", "3.25", "Yes"], []]
        assert table.empty_message == "Nothing"

    def test_table_requires_columns(self):
        with pytest.raises(ValidationError):
            TableBlock(columns=[])

    def test_column_width_positive(self):
        with pytest.raises(ValidationError):
            ColumnSpec(label="A", width=0)

    def test_unknown_alignment_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            column = ColumnSpec(label="A", width=50, align="justify")
        assert column.align is Align.LEFT
        assert "justify" in caplog.text

    def test_alignment_case_insensitive(self):
        assert ColumnSpec(label="A", width=50, align="RIGHT").align is Align.RIGHT

    def test_summary_pairs_from_mapping(self):
        box = SummaryBoxBlock(pairs={"Total": 5, "Net": None})
        assert box.pairs == [("Total", "5"), ("Net", "")]
        assert box.headers == ("Metric", "Amount")


class TestMetadata:
    def test_defaults(self):
        meta = ReportMetadata()
        assert meta.title == "Report"
        assert meta.company.name == DEFAULT_COMPANY_NAME
        assert meta.generated_on == format_long_date(date.today())
        assert not meta.range.is_set

    def test_camel_case_and_nulls(self):
        model = ReportModel.model_validate({
            "metadata": {
                "company": None,
                "range": {"from": "2024-03-01", "to": "2024-03-15"},
                "generatedOn": "Mar 16, 2024",
                "footerText": "Internal",
            },
            "blocks": None,
        })
        assert model.metadata.company.name == DEFAULT_COMPANY_NAME
        assert model.metadata.range.label == "Mar 01 - Mar 15, 2024"
        assert model.metadata.generated_on == "Mar 16, 2024"
        assert model.metadata.footer_text == "Internal"
        assert model.blocks == []

    def test_date_range_by_field_name(self):
        assert DateRange(start="2024-01-01", end="2024-01-31").is_set


class TestCompanyProfile:
    def test_name_fallbacks(self):
        assert CompanyProfile(display_name="Blue Fig").name == "Blue Fig"
        assert CompanyProfile(legal_name="Blue Fig LLC").name == "Blue Fig LLC"
        assert CompanyProfile().name == DEFAULT_COMPANY_NAME

    def test_meta_rows(self):
        company = CompanyProfile.model_validate({
            "displayName": "Blue Fig",
            "legalName": "Blue Fig LLC",
            "addressLine1": "412 Market Street",
            "city": "Austin",
            "state": "TX",
            "postalCode": "78701",
            "country": None,
            "phone": "(512) 555-0142",
            "website": "bluefig.example",
            "taxId": " 12-3456789 ",
        })
        assert company.meta_rows() == [
            ("Company", "Blue Fig"),
            ("Legal Name", "Blue Fig LLC"),
            ("Address", "412 Market Street | Austin, TX, 78701"),
            ("Contact", "(512) 555-0142 | bluefig.example"),
            ("Tax ID", "12-3456789"),
        ]

    def test_sparse_profile(self):
        assert CompanyProfile().meta_rows() == [("Company", DEFAULT_COMPANY_NAME)]


class TestFormatting:
    def test_parse_iso_date(self):
        assert parse_iso_date("2024-03-09") == date(2024, 3, 9)
        assert parse_iso_date("2024-02-30") is None
        assert parse_iso_date("03/09/2024") is None
        assert parse_iso_date(None) is None

    def test_us_date(self):
        assert format_us_date("2024-03-09") == "03/09/2024"
        assert format_us_date("soon") == "soon"

    def test_long_date(self):
        assert format_long_date(date(2024, 3, 9)) == "Mar 9, 2024"

    def test_period_same_year(self):
        assert format_period("2024-01-05", "2024-02-03") == "Jan 05 - Feb 03, 2024"

    def test_period_across_years(self):
        assert format_period("2023-12-28", "2024-01-03") == "12/28/2023 - 01/03/2024"

    def test_period_unparseable(self):
        assert format_period("x", "2024-01-01") == "x - 01/01/2024"
