"""Tests for text measurement, truncation and alignment."""

from __future__ import annotations

from reportpdf.core.models import Align
from reportpdf.layout.text import ELLIPSIS, PLACEHOLDER, TextMetrics

METRICS = TextMetrics()


class TestTruncation:
    def test_max_chars(self):
        assert METRICS.max_chars(60) == 11
        assert METRICS.max_chars(200) == 43

    def test_max_chars_floor(self):
        assert METRICS.max_chars(20) == 4
        assert METRICS.max_chars(1) == 4

    def test_forty_chars_in_sixty_points(self):
        value = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789abcd"
        assert len(value) == 40
        assert METRICS.truncate(value, 60) == "ABCDEFGHIJ" + ELLIPSIS

    def test_fits_unchanged(self):
        assert METRICS.truncate("Server", 60) == "Server"

    def test_exact_fit_unchanged(self):
        assert METRICS.truncate("x" * 11, 60) == "x" * 11

    def test_blank_becomes_placeholder(self):
        assert METRICS.truncate("", 60) == PLACEHOLDER
        assert METRICS.truncate(None, 60) == PLACEHOLDER
        assert METRICS.truncate("   ", 60) == PLACEHOLDER

    def test_whitespace_collapsed(self):
        assert METRICS.truncate("Line\nCook", 60) == "Line Cook"

    def test_custom_char_width(self):
        wide = TextMetrics(avg_char_width=8.8)
        assert wide.max_chars(60) == 5

    def test_fit_free_text(self):
        assert METRICS.fit("abcdefghij", 20, 10) == "abc" + ELLIPSIS
        assert METRICS.fit("", 20, 10) == ""


class TestAlignment:
    def test_left(self):
        assert METRICS.aligned_x("12", 100, 60, 10, Align.LEFT) == 104

    def test_right(self):
        # 2 chars * 10pt * 0.5 = 10pt wide
        assert METRICS.aligned_x("12", 100, 60, 10, Align.RIGHT) == 146

    def test_center(self):
        assert METRICS.aligned_x("12", 100, 60, 10, Align.CENTER) == 125

    def test_center_never_left_of_padding(self):
        assert METRICS.aligned_x("abcdef", 100, 10, 10, Align.CENTER) == 104

    def test_text_width(self):
        assert METRICS.text_width("abcd", 8) == 16
