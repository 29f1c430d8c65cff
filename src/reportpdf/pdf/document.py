"""Document builder — pages, object numbering and final serialization.

A ``Document`` owns an ordered list of ``Page`` objects. Each page owns its
own command buffer; the pagination layer calls ``document.new_page()`` to
close the current page and start the next one.

Object numbers follow a fixed scheme::

    1        Catalog
    2        Pages tree (/Kids lists every page, /Count == len(pages))
    3        Font F1 (Helvetica)
    4        Font F2 (Helvetica-Bold)
    5 + 2i   Page i
    6 + 2i   Content stream of page i
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .content import BOLD_FONT, REGULAR_FONT, DrawCommand, compose
from .writer import PdfWriter

log = logging.getLogger(__name__)

# A4 portrait in points
DEFAULT_MEDIA_BOX: tuple[float, float] = (595, 842)

# Text encoding shared by the font dictionaries and the content streams
TEXT_ENCODING = "cp1252"


@dataclass
class Page:
    """One page: a media box plus an ordered list of draw commands."""

    width: float = DEFAULT_MEDIA_BOX[0]
    height: float = DEFAULT_MEDIA_BOX[1]
    commands: list[DrawCommand] = field(default_factory=list)
    closed: bool = False

    def add(self, command: DrawCommand) -> None:
        if self.closed:
            raise RuntimeError("cannot draw on a closed page")
        self.commands.append(command)

    def close(self) -> None:
        self.closed = True

    @property
    def has_content(self) -> bool:
        return bool(self.commands)

    def content(self) -> str:
        return compose(self.commands)

    def content_bytes(self) -> bytes:
        """Encoded content stream; characters outside cp1252 become ``?``."""
        return self.content().encode(TEXT_ENCODING, errors="replace")


class Document:
    """Request-local collection of pages that serializes to PDF bytes."""

    def __init__(self, media_box: tuple[float, float] = DEFAULT_MEDIA_BOX) -> None:
        self.media_box = media_box
        self._pages: list[Page] = []
        self._current: Page | None = None

    # ------------------------------------------------------------------
    # Page lifecycle
    # ------------------------------------------------------------------

    @property
    def pages(self) -> list[Page]:
        """Closed pages, in order."""
        return list(self._pages)

    @property
    def current_page(self) -> Page | None:
        return self._current

    def new_page(self) -> Page:
        """Close the current page (if any) and open a fresh one."""
        self.close_page()
        self._current = Page(width=self.media_box[0], height=self.media_box[1])
        return self._current

    def close_page(self) -> None:
        """Close the current page; an empty page is dropped, not appended."""
        page = self._current
        if page is None:
            return
        self._current = None
        page.close()
        if page.has_content:
            self._pages.append(page)
            log.debug("Closed page %d (%d commands)", len(self._pages), len(page.commands))

    def build(self) -> bytes:
        self.close_page()
        return build_pdf(self._pages)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _font_dict(base_font: str) -> str:
    return (
        f"<< /Type /Font /Subtype /Type1 /BaseFont /{base_font} "
        f"/Encoding /WinAnsiEncoding >>"
    )


def build_pdf(pages: list[Page]) -> bytes:
    """Serialize *pages* into a complete PDF byte buffer."""
    writer = PdfWriter()
    catalog_id = writer.reserve()
    tree_id = writer.reserve()
    regular_id = writer.reserve()
    bold_id = writer.reserve()

    page_ids: list[tuple[int, int]] = []
    for _ in pages:
        page_ids.append((writer.reserve(), writer.reserve()))

    kids = " ".join(f"{page_id} 0 R" for page_id, _ in page_ids)
    writer.put(catalog_id, f"<< /Type /Catalog /Pages {tree_id} 0 R >>")
    writer.put(tree_id, f"<< /Type /Pages /Kids [{kids}] /Count {len(pages)} >>")
    writer.put(regular_id, _font_dict("Helvetica"))
    writer.put(bold_id, _font_dict("Helvetica-Bold"))

    resources = (
        f"<< /Font << /{REGULAR_FONT} {regular_id} 0 R /{BOLD_FONT} {bold_id} 0 R >> >>"
    )
    for page, (page_id, content_id) in zip(pages, page_ids):
        media_box = f"[0 0 {page.width:g} {page.height:g}]"
        writer.put(
            page_id,
            f"<< /Type /Page /Parent {tree_id} 0 R /MediaBox {media_box} "
            f"/Resources {resources} /Contents {content_id} 0 R >>",
        )
        writer.put_stream(content_id, page.content_bytes())

    data = writer.to_bytes(root_id=catalog_id)
    log.debug("Built PDF: %d page(s), %d bytes", len(pages), len(data))
    return data
