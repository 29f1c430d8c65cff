"""Pagination engine — vertical cursor, page breaks and repeated headers.

The paginator consumes report blocks in order and flows them down the
page. Coordinates are PDF user space, so "down" means *decreasing* ``y``:
the cursor starts at the layout's top margin and every drawn element
subtracts its height.

Lifecycle::

    EMPTY --first block--> OPEN --page full--> OPEN (next page) ... --finalize()--> FINALIZED

Invariants:

- ``cursor.y`` never goes below the bottom margin; when the next element
  does not fit, the page is closed and a new one opened first.
- A table row is never split: the space check precedes each whole row.
- When a table is interrupted, the new page gets the table's
  "(continued)" title and header block before the next row.
- A freshly opened page that cannot hold the next element is a layout
  defect: ``ensure_space`` raises ``RuntimeError`` instead of drawing
  into the footer area.
- A finalized document always has at least one page; with nothing to
  show, that page carries the layout's no-data message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from ..core.models import (
    ColumnSpec,
    LineBlock,
    ReportBlock,
    ReportMetadata,
    SpacerBlock,
    SummaryBoxBlock,
    TableBlock,
)
from ..pdf.content import Line, Text
from ..pdf.document import Document, Page
from .settings import DEFAULT_LAYOUT, Layout
from .table import TableRenderer, draw_summary_band

log = logging.getLogger(__name__)

CONTINUED_SUFFIX = " (continued)"


class PaginatorState(str, Enum):
    EMPTY = "empty"
    OPEN = "open"
    FINALIZED = "finalized"


@dataclass
class Cursor:
    """Current page and the y of the highest still-free point on it."""
    page: Page
    y: float


@dataclass
class _ActiveTable:
    renderer: TableRenderer
    title: str


class Paginator:
    """Flows report blocks onto pages of a ``Document``.

    Parameters
    ----------
    document
        Target document; a fresh one sized to the layout is created when
        omitted.
    layout
        Geometry, type scale and table style.
    metadata
        Masthead content. Without metadata pages carry no masthead and the
        cursor starts directly at the top margin.
    """

    def __init__(
        self,
        document: Document | None = None,
        layout: Layout = DEFAULT_LAYOUT,
        metadata: ReportMetadata | None = None,
    ) -> None:
        self.layout = layout
        self.metadata = metadata
        self.document = document or Document(media_box=(layout.page.width, layout.page.height))
        self.state = PaginatorState.EMPTY
        self.cursor: Cursor | None = None
        self.page_number = 0
        self._active: _ActiveTable | None = None
        self._has_body = False
        self._page_has_body = False

    # ------------------------------------------------------------------
    # Page lifecycle
    # ------------------------------------------------------------------

    @property
    def remaining(self) -> float:
        """Vertical space left above the bottom margin on the open page."""
        cursor = self._require_open()
        return cursor.y - self.layout.page.bottom_margin

    def open_page(self, continued: bool = False) -> Page:
        """Close the current page and start the next one at the top margin."""
        if self.state is PaginatorState.FINALIZED:
            raise RuntimeError("paginator already finalized")
        self._close_current()
        page = self.document.new_page()
        self.page_number += 1
        self.cursor = Cursor(page, self.layout.page.top_margin)
        self.state = PaginatorState.OPEN
        self._page_has_body = False

        first = self.page_number == 1
        if self.metadata is not None and (first or self.layout.repeat_masthead):
            self.draw_page_scaffold(
                continued=continued,
                include_summary_block=first and bool(self.metadata.summary),
            )
        return page

    def ensure_space(self, needed: float) -> bool:
        """Break the page if *needed* points do not fit; return True on a break."""
        cursor = self._require_open()
        if cursor.y - needed >= self.layout.page.bottom_margin:
            return False

        log.debug(
            "Page %d full at y=%.1f (needed %.1f), starting page %d",
            self.page_number, cursor.y, needed, self.page_number + 1,
        )
        self.open_page(continued=True)
        if self._active is not None:
            self._draw_table_head(self._active.renderer, self._active.title, continued=True)
        if self.cursor.y - needed < self.layout.page.bottom_margin:
            raise RuntimeError(
                f"layout '{self.layout.name}' leaves {self.remaining:.1f}pt on a fresh page "
                f"for a {needed:.1f}pt element"
            )
        return True

    def finalize(self) -> Document:
        """Close the last page and hand back the document."""
        if self.state is PaginatorState.FINALIZED:
            raise RuntimeError("paginator already finalized")
        if not self._has_body:
            self._require_open()
            self.add_line(self.layout.no_data_message)
        self._close_current()
        self.state = PaginatorState.FINALIZED
        log.debug("Finalized %d page(s)", len(self.document.pages))
        return self.document

    def _require_open(self) -> Cursor:
        if self.state is PaginatorState.FINALIZED:
            raise RuntimeError("paginator already finalized")
        if self.cursor is None:
            self.open_page()
        assert self.cursor is not None
        return self.cursor

    def _close_current(self) -> None:
        if self.cursor is None:
            return
        page = self.cursor.page
        if page.has_content:
            self._draw_footer(page)
        self.document.close_page()
        self.cursor = None

    # ------------------------------------------------------------------
    # Masthead & footer
    # ------------------------------------------------------------------

    def draw_page_scaffold(self, continued: bool = False, include_summary_block: bool = False) -> None:
        """Company name, company rows, report title and period at the page top."""
        meta = self.metadata
        if meta is None:
            return
        cursor = self._require_open()
        fonts = self.layout.fonts
        geometry = self.layout.page

        self._text(meta.company.name, fonts.company_size, fonts.company_step, bold=True)
        for label, value in meta.company.meta_rows()[1:]:
            self._text(f"{label}: {value}", fonts.meta_size, fonts.meta_step)
        cursor.y -= 4

        title = meta.title + CONTINUED_SUFFIX if continued else meta.title
        self._text(title, fonts.title_size, fonts.title_step, bold=True)
        if meta.range.is_set:
            self._text(f"Report Period: {meta.range.label}", fonts.info_size, fonts.info_step)
        self._text(f"Generated On: {meta.generated_on}", fonts.info_size, fonts.info_step)

        cursor.y -= 3
        cursor.page.add(Line(geometry.left, cursor.y, geometry.right, cursor.y, fonts.rule_gray))
        cursor.y -= fonts.rule_gap

        if include_summary_block:
            cursor.y -= draw_summary_band(cursor.page, self.layout, cursor.y, meta.summary)
            cursor.y -= fonts.rule_gap

    def scaffold_height(self, include_summary_block: bool = False) -> float:
        """Vertical space ``draw_page_scaffold`` takes below the top margin."""
        meta = self.metadata
        if meta is None:
            return 0
        fonts = self.layout.fonts
        height = fonts.company_step + fonts.meta_step * (len(meta.company.meta_rows()) - 1) + 4
        height += fonts.title_step + fonts.info_step
        if meta.range.is_set:
            height += fonts.info_step
        height += 3 + fonts.rule_gap
        if include_summary_block:
            height += 2 * self.layout.table.band_row_height + fonts.rule_gap
        return height

    def fresh_page_space(self) -> float:
        """Body space on a continuation page, below its masthead."""
        geometry = self.layout.page
        space = geometry.top_margin - geometry.bottom_margin
        if self.layout.repeat_masthead:
            space -= self.scaffold_height()
        return space

    def _draw_footer(self, page: Page) -> None:
        fonts = self.layout.fonts
        geometry = self.layout.page
        footer = self.layout.footer_text
        if self.metadata is not None and self.metadata.footer_text is not None:
            footer = self.metadata.footer_text
        if footer:
            text = self.layout.metrics.fit(footer, geometry.content_width * 0.75, fonts.footer_size)
            page.add(Text(text, geometry.left, geometry.footer_y, fonts.footer_size, False, fonts.footer_gray))
        if self.layout.page_numbers:
            label = f"Page {self.page_number}"
            x = geometry.right - self.layout.metrics.text_width(label, fonts.footer_size)
            page.add(Text(label, x, geometry.footer_y, fonts.footer_size, False, fonts.footer_gray))

    def _text(self, value: str, size: float, step: float, bold: bool = False, gray: float = 0) -> None:
        """Draw one line at the cursor (no space check) and advance by *step*."""
        cursor = self._require_open()
        geometry = self.layout.page
        text = self.layout.metrics.fit(value, geometry.content_width, size)
        if text:
            cursor.page.add(Text(text, geometry.left, cursor.y - size * 0.8, size, bold, gray))
        cursor.y -= step

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def add(self, block: ReportBlock) -> None:
        """Dispatch one report block."""
        if isinstance(block, LineBlock):
            self.add_line(block.text, block.bold, block.size, block.gray, block.step)
        elif isinstance(block, TableBlock):
            self.add_table(block)
        elif isinstance(block, SummaryBoxBlock):
            self.add_summary_box(block)
        elif isinstance(block, SpacerBlock):
            self.add_spacer(block.height)
        else:
            raise TypeError(f"unsupported block: {type(block).__name__}")

    def add_line(
        self,
        text: str,
        bold: bool = False,
        size: Optional[float] = None,
        gray: float = 0,
        step: Optional[float] = None,
    ) -> None:
        fonts = self.layout.fonts
        if size is None:
            size = fonts.line_size
            step = step or fonts.line_step
        step = step or round(size * 1.4, 2)
        self.ensure_space(step)
        self._text(text, size, step, bold, gray)
        if text.strip():
            self._has_body = self._page_has_body = True

    def add_spacer(self, height: float) -> None:
        cursor = self._require_open()
        if cursor.y - height < self.layout.page.bottom_margin:
            # whitespace never needs its own page
            cursor.y = self.layout.page.bottom_margin
        else:
            cursor.y -= height

    def add_table(self, block: TableBlock) -> None:
        extra = max((len(row) for row in block.rows), default=0) - len(block.columns)
        if extra > 0:
            log.warning("Table '%s': %d cell(s) beyond the column list ignored", block.title, extra)
        renderer = TableRenderer(self.layout, block.columns)
        self._flow_table(renderer, block.title, block.rows, block.zebra, block.empty_message)

    def add_summary_box(self, block: SummaryBoxBlock) -> None:
        width = self.layout.page.content_width
        label_width = round(width * self.layout.table.summary_label_share, 2)
        columns = [
            ColumnSpec(label=block.headers[0], width=label_width),
            ColumnSpec(label=block.headers[1], width=width - label_width),
        ]
        renderer = TableRenderer(self.layout, columns)
        rows = [[label, value] for label, value in block.pairs]
        self._flow_table(renderer, block.title, rows, zebra=False, bold_columns=(1,), keep_together=True)

    # ------------------------------------------------------------------
    # Table flow
    # ------------------------------------------------------------------

    def _title_height(self, title: str) -> float:
        return self.layout.fonts.section_step if title else 0

    def _draw_table_head(self, renderer: TableRenderer, title: str, continued: bool = False) -> None:
        cursor = self._require_open()
        fonts = self.layout.fonts
        if title:
            label = title + CONTINUED_SUFFIX if continued else title
            self._text(label, fonts.section_size, fonts.section_step, bold=True)
        cursor.y -= renderer.draw_header(cursor.page, cursor.y)

    def _flow_table(
        self,
        renderer: TableRenderer,
        title: str,
        rows: Sequence[Sequence[str]],
        zebra: bool = True,
        empty_message: Optional[str] = None,
        bold_columns: Sequence[int] = (),
        keep_together: bool = False,
    ) -> None:
        table = self.layout.table
        fonts = self.layout.fonts
        head = self._title_height(title) + table.header_height

        if not rows:
            self.ensure_space(self._title_height(title) + fonts.line_step)
            if title:
                self._text(title, fonts.section_size, fonts.section_step, bold=True)
            self.add_line(empty_message or self.layout.no_data_message)
            self._after_table()
            return

        total = head + table.row_height * len(rows)
        if keep_together and self._page_has_body and total <= self.fresh_page_space():
            self.ensure_space(total)
        else:
            self.ensure_space(head + table.row_height)
        self._draw_table_head(renderer, title)

        self._active = _ActiveTable(renderer, title)
        try:
            for index, row in enumerate(rows):
                self.ensure_space(table.row_height)
                cursor = self._require_open()
                cursor.y -= renderer.draw_row(cursor.page, cursor.y, row, index, zebra, bold_columns)
                self._page_has_body = True
        finally:
            self._active = None
        self._has_body = True
        self._after_table()

    def _after_table(self) -> None:
        cursor = self._require_open()
        cursor.y = max(cursor.y - self.layout.table.gap_after, self.layout.page.bottom_margin)
