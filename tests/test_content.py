"""Tests for the content-stream composer."""

from __future__ import annotations

from reportpdf.pdf.content import (
    Line,
    Rect,
    Text,
    compose,
    draw_line,
    draw_rect,
    draw_text,
    escape_pdf_text,
    format_number,
)


class TestEscaping:
    def test_parentheses_and_backslash(self):
        assert escape_pdf_text("Co. (2024)\\path") == "Co. \\(2024\\)\\\\path"

    def test_backslash_escaped_before_parentheses(self):
        # a single "(" must become exactly one backslash plus "("
        assert escape_pdf_text("(") == "\\("
        assert escape_pdf_text("\\(") == "\\\\\\("

    def test_plain_text_untouched(self):
        assert escape_pdf_text("Ana Morales 8.5") == "Ana Morales 8.5"


class TestNumbers:
    def test_integers_have_no_decimal_point(self):
        assert format_number(45) == "45"
        assert format_number(800.0) == "800"

    def test_fractions_are_trimmed(self):
        assert format_number(8.5) == "8.5"
        assert format_number(0.97) == "0.97"
        assert format_number(1 / 3) == "0.333"

    def test_negative_zero(self):
        assert format_number(-0.0001) == "0"


class TestOperators:
    def test_text_regular(self):
        assert draw_text("Hi", 45, 800, 10) == "0 g BT /F1 10 Tf 1 0 0 1 45 800 Tm (Hi) Tj ET"

    def test_text_bold_gray(self):
        op = draw_text("Total", 50.5, 700, 8.5, bold=True, gray=1)
        assert op == "1 g BT /F2 8.5 Tf 1 0 0 1 50.5 700 Tm (Total) Tj ET"

    def test_text_is_escaped(self):
        assert "(a\\(b\\)) Tj" in draw_text("a(b)", 0, 0)

    def test_filled_rect(self):
        op = draw_rect(10, 20, 100, 16, fill_gray=0.9, stroke_gray=0.2)
        assert op == "0.9 g 10 20 100 16 re f\n0.2 G 10 20 100 16 re S"

    def test_stroked_rect(self):
        assert draw_rect(0, 0, 5, 5) == "0 G 0 0 5 5 re S"

    def test_line(self):
        assert draw_line(1, 2, 3, 4, 0.5) == "0.5 G 1 2 m 3 4 l S"


class TestDrawCommands:
    def test_commands_match_builders(self):
        assert Text("x", 1, 2).to_operators() == draw_text("x", 1, 2)
        assert Rect(1, 2, 3, 4, 0.5).to_operators() == draw_rect(1, 2, 3, 4, 0.5)
        assert Line(1, 2, 3, 4).to_operators() == draw_line(1, 2, 3, 4)

    def test_compose_joins_in_order(self):
        stream = compose([Line(0, 0, 1, 1), Text("a", 0, 0)])
        assert stream.splitlines() == [draw_line(0, 0, 1, 1), draw_text("a", 0, 0)]

    def test_compose_empty(self):
        assert compose([]) == ""
