"""Pluggable layout presets for the pagination engine.

A ``Layout`` bundles page geometry, table styling, the type scale and the
text-width heuristics. Every engine component receives a ``Layout`` and
reads its values instead of hardcoded constants. Presets are frozen, so a
layout can be shared freely between concurrent renders.

Usage::

    from reportpdf.layout.settings import get_layout, list_layouts

    layout = get_layout("detail")
    paginator = Paginator(Document(), layout=layout)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .text import TextMetrics


# ---------------------------------------------------------------------------
# Layout dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PageGeometry:
    """Media box and margins, in points (PDF user space, origin bottom-left)."""

    width: float = 595
    height: float = 842
    left: float = 45
    right: float = 550

    # Cursor reset on every new page / lowest y body content may reach.
    # An 18pt table header band opening a page leaves the first body row at 800.
    top_margin: float = 818
    bottom_margin: float = 54

    # Footer baseline, below the bottom margin
    footer_y: float = 26

    @property
    def content_width(self) -> float:
        return self.right - self.left


@dataclass(frozen=True)
class TableStyle:
    """Row metrics and gray levels (0 = black, 1 = white) for tables."""

    header_height: float = 18
    row_height: float = 16
    header_font_size: float = 8
    cell_font_size: float = 8.5

    header_fill_gray: float = 0.88
    header_text_gray: float = 0
    header_stroke_gray: float = 0.2
    header_separator_gray: float = 0.35

    zebra: bool = True
    zebra_grays: tuple[float, float] = (0.97, 0.93)
    row_stroke_gray: float = 0.85
    row_separator_gray: float = 0.88

    # Space left below a finished table
    gap_after: float = 12

    # Summary band drawn in the first page's masthead
    band_row_height: float = 20
    band_label_fill_gray: float = 0.12
    band_value_fill_gray: float = 0.2
    band_text_gray: float = 1

    # Share of the content width given to the label column of a summary box
    summary_label_share: float = 0.65


@dataclass(frozen=True)
class TypeScale:
    """Font sizes and the vertical advance (step) after each kind of line."""

    company_size: float = 24
    company_step: float = 34
    meta_size: float = 8
    meta_step: float = 11
    title_size: float = 12
    title_step: float = 18
    info_size: float = 10
    info_step: float = 13
    rule_gap: float = 18
    rule_gray: float = 0.55

    section_size: float = 11
    section_step: float = 15
    line_size: float = 10
    line_step: float = 14

    footer_size: float = 7
    footer_gray: float = 0.55


@dataclass(frozen=True)
class Layout:
    """Complete layout definition."""

    name: str = "standard"
    display_name: str = "Standard"
    description: str = "Light table headers with zebra rows; masthead on every page."
    page: PageGeometry = field(default_factory=PageGeometry)
    table: TableStyle = field(default_factory=TableStyle)
    fonts: TypeScale = field(default_factory=TypeScale)
    metrics: TextMetrics = field(default_factory=TextMetrics)

    # Draw the full masthead on continuation pages (otherwise only page 1)
    repeat_masthead: bool = True
    no_data_message: str = "No data found for this reporting period."
    footer_text: str = "Confidential - Internal Use Only"
    page_numbers: bool = True

    def with_margins(self, *, top: float | None = None, bottom: float | None = None) -> "Layout":
        """Copy of this layout with different vertical margins."""
        page = replace(
            self.page,
            top_margin=self.page.top_margin if top is None else top,
            bottom_margin=self.page.bottom_margin if bottom is None else bottom,
        )
        return replace(self, page=page)


# ---------------------------------------------------------------------------
# Built-in layouts
# ---------------------------------------------------------------------------

STANDARD_LAYOUT = Layout()

DETAIL_LAYOUT = Layout(
    name="detail",
    display_name="Detail",
    description="Dark header band with white labels; dense rows for long detail reports.",
    page=PageGeometry(left=60, right=525, top_margin=780, bottom_margin=78),
    table=TableStyle(
        row_height=17,
        header_fill_gray=0.12,
        header_text_gray=1,
        header_stroke_gray=0.2,
        header_separator_gray=0.35,
        zebra_grays=(0.97, 0.93),
    ),
    footer_text="Confidential - Internal Use Only",
)

LEDGER_LAYOUT = Layout(
    name="ledger",
    display_name="Ledger",
    description="Masthead on the first page only; plain ruled rows for financial statements.",
    page=PageGeometry(left=45, right=550, top_margin=790, bottom_margin=68),
    table=TableStyle(
        header_height=18,
        row_height=18,
        header_font_size=8,
        cell_font_size=8,
        header_fill_gray=0.9,
        header_stroke_gray=0,
        header_separator_gray=0,
        row_stroke_gray=0,
        row_separator_gray=0,
        zebra=False,
        gap_after=12,
    ),
    fonts=TypeScale(company_size=26, company_step=34, meta_size=9, meta_step=12,
                    title_size=13, title_step=18, info_size=9, info_step=12),
    repeat_masthead=False,
    footer_text="Confidential - Internal Financial Report",
)

_LAYOUT_REGISTRY: dict[str, Layout] = {
    t.name: t
    for t in [
        STANDARD_LAYOUT,
        DETAIL_LAYOUT,
        LEDGER_LAYOUT,
    ]
}


def get_layout(name: str) -> Layout:
    """Get a layout by name. Raises ``KeyError`` if not found."""
    key = name.lower().strip()
    if key not in _LAYOUT_REGISTRY:
        available = ", ".join(sorted(_LAYOUT_REGISTRY.keys()))
        raise KeyError(f"Unknown layout '{name}'. Available: {available}")
    return _LAYOUT_REGISTRY[key]


def list_layouts() -> list[Layout]:
    """Return all registered layouts."""
    return list(_LAYOUT_REGISTRY.values())


def register_layout(layout: Layout) -> None:
    """Register a custom layout at runtime."""
    _LAYOUT_REGISTRY[layout.name.lower().strip()] = layout


# Convenience: default layout
DEFAULT_LAYOUT = STANDARD_LAYOUT
