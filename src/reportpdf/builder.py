"""Report builder — the single entry point report assemblers talk to.

Usage::

    builder = ReportBuilder(metadata, layout=get_layout("standard"))
    builder.add_title("Shifts")
    builder.add_table(columns, rows)
    pdf_bytes = builder.build()

Every builder owns its own document and paginator, so concurrent requests
never share state. A builder produces exactly one buffer; calling
``build()`` twice is a programming error.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from .core.models import (
    ColumnSpec,
    LineBlock,
    ReportBlock,
    ReportMetadata,
    ReportModel,
    SpacerBlock,
    SummaryBoxBlock,
    TableBlock,
)
from .layout.paginator import Paginator
from .layout.settings import DEFAULT_LAYOUT, Layout

log = logging.getLogger(__name__)


class ReportBuilder:
    """Streams blocks into a paginator and serializes the result."""

    def __init__(self, metadata: ReportMetadata | None = None, layout: Layout | None = None) -> None:
        self.layout = layout or DEFAULT_LAYOUT
        self.metadata = metadata
        self.paginator = Paginator(layout=self.layout, metadata=metadata)
        self._block_count = 0

    @classmethod
    def from_model(cls, model: ReportModel, layout: Layout | None = None) -> "ReportBuilder":
        builder = cls(model.metadata, layout)
        for block in model.blocks:
            builder.add_block(block)
        return builder

    # -- Blocks ----------------------------------------------------------

    def add_block(self, block: ReportBlock) -> None:
        self.paginator.add(block)
        self._block_count += 1

    def add_title(self, text: str) -> None:
        """Bold section heading."""
        fonts = self.layout.fonts
        self.add_block(LineBlock(text=text, bold=True, size=fonts.section_size, step=fonts.section_step))

    def add_line(
        self,
        text: str,
        bold: bool = False,
        size: Optional[float] = None,
        gray: float = 0,
        step: Optional[float] = None,
    ) -> None:
        self.add_block(LineBlock(text=text, bold=bold, size=size, gray=gray, step=step))

    def add_table(
        self,
        columns: Sequence[ColumnSpec | dict[str, Any]],
        rows: Iterable[Sequence[Any]] | None,
        title: str = "",
        zebra: bool = True,
        empty_message: Optional[str] = None,
    ) -> None:
        self.add_block(TableBlock(
            title=title,
            columns=list(columns),
            rows=None if rows is None else list(rows),
            zebra=zebra,
            empty_message=empty_message,
        ))

    def add_summary_box(self, pairs: Iterable[Sequence[Any]] | dict[str, Any], title: str = "") -> None:
        self.add_block(SummaryBoxBlock(title=title, pairs=pairs))

    def add_spacer(self, height: float = 12) -> None:
        self.add_block(SpacerBlock(height=height))

    # -- Output ----------------------------------------------------------

    def build(self) -> bytes:
        """Finalize pagination and return the PDF bytes."""
        document = self.paginator.finalize()
        data = document.build()
        log.info(
            "Rendered %d block(s) into %d page(s), %d bytes",
            self._block_count, len(document.pages), len(data),
        )
        return data


def render_report(model: ReportModel, layout: Layout | None = None) -> bytes:
    """One-shot: ``ReportModel`` → PDF bytes."""
    return ReportBuilder.from_model(model, layout).build()
