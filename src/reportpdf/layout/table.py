"""Turn column specs and cell values into table draw commands.

The renderer only knows how to draw a header or a single row at a given
top edge; deciding *whether* a row still fits on the page belongs to the
paginator. Column left edges are the running sum of the preceding widths.
"""

from __future__ import annotations

from typing import Sequence

from ..core.models import Align, ColumnSpec
from ..pdf.content import Line, Rect, Text
from ..pdf.document import Page
from .settings import Layout


def baseline(top: float, height: float, size: float) -> float:
    """Baseline that vertically centres *size*-pt text in a band of *height*."""
    return top - height / 2 - size * 0.35


class TableRenderer:
    """Draws the header and body rows of one table."""

    def __init__(self, layout: Layout, columns: Sequence[ColumnSpec], x: float | None = None) -> None:
        self.layout = layout
        self.columns = list(columns)
        self.x = layout.page.left if x is None else x

    @property
    def width(self) -> float:
        return sum(c.width for c in self.columns)

    def column_edges(self) -> list[float]:
        """Left edge of every column."""
        edges: list[float] = []
        x = self.x
        for column in self.columns:
            edges.append(x)
            x += column.width
        return edges

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw_cell(
        self,
        page: Page,
        value: str | None,
        x: float,
        width: float,
        y: float,
        size: float,
        align: Align = Align.LEFT,
        bold: bool = False,
        gray: float = 0,
    ) -> None:
        metrics = self.layout.metrics
        text = metrics.truncate(value, width)
        page.add(Text(text, metrics.aligned_x(text, x, width, size, align), y, size, bold, gray))

    def _separators(self, page: Page, top: float, height: float, gray: float) -> None:
        for edge in self.column_edges()[1:]:
            page.add(Line(edge, top, edge, top - height, gray))

    def draw_header(self, page: Page, top: float) -> float:
        """Filled header band with bold labels; returns the height used."""
        style = self.layout.table
        height = style.header_height
        page.add(Rect(self.x, top - height, self.width, height,
                      style.header_fill_gray, style.header_stroke_gray))
        y = baseline(top, height, style.header_font_size)
        for edge, column in zip(self.column_edges(), self.columns):
            self.draw_cell(page, column.label, edge, column.width, y,
                           style.header_font_size, Align.LEFT, True, style.header_text_gray)
        self._separators(page, top, height, style.header_separator_gray)
        return height

    def draw_row(
        self,
        page: Page,
        top: float,
        cells: Sequence[str],
        index: int = 0,
        zebra: bool = True,
        bold_columns: Sequence[int] = (),
    ) -> float:
        """One body row; missing cells render as ``-``. Returns the height used."""
        style = self.layout.table
        height = style.row_height
        fill = style.zebra_grays[index % 2] if zebra and style.zebra else None
        page.add(Rect(self.x, top - height, self.width, height, fill, style.row_stroke_gray))
        y = baseline(top, height, style.cell_font_size)
        for i, (edge, column) in enumerate(zip(self.column_edges(), self.columns)):
            value = cells[i] if i < len(cells) else None
            self.draw_cell(page, value, edge, column.width, y, style.cell_font_size,
                           column.align, i in bold_columns)
        self._separators(page, top, height, style.row_separator_gray)
        return height


def draw_summary_band(
    page: Page,
    layout: Layout,
    top: float,
    pairs: Sequence[tuple[str, str]],
) -> float:
    """Horizontal labels-over-values band spanning the content width.

    Returns the height used (two band rows).
    """
    style = layout.table
    x = layout.page.left
    width = layout.page.content_width
    height = style.band_row_height
    page.add(Rect(x, top - height, width, height, style.band_label_fill_gray, style.header_stroke_gray))
    page.add(Rect(x, top - 2 * height, width, height, style.band_value_fill_gray, style.header_stroke_gray))

    if not pairs:
        return 2 * height
    cell_width = width / len(pairs)
    renderer = TableRenderer(layout, [ColumnSpec(label=label, width=cell_width) for label, _ in pairs], x)
    for edge in renderer.column_edges()[1:]:
        page.add(Line(edge, top, edge, top - 2 * height, style.header_separator_gray))
    for edge, (label, value) in zip(renderer.column_edges(), pairs):
        renderer.draw_cell(page, label, edge, cell_width, baseline(top, height, 9), 9,
                           Align.CENTER, True, style.band_text_gray)
        renderer.draw_cell(page, value, edge, cell_width, baseline(top - height, height, 10), 10,
                           Align.CENTER, True, style.band_text_gray)
    return 2 * height
