"""Hand-rolled PDF 1.4 output: draw commands, pages and serialization."""

from .content import DrawCommand, Line, Rect, Text, escape_pdf_text
from .document import Document, Page, build_pdf
from .inspect import PdfStructureError, PdfSummary, inspect_pdf

__all__ = [
    "Document",
    "DrawCommand",
    "Line",
    "Page",
    "PdfStructureError",
    "PdfSummary",
    "Rect",
    "Text",
    "build_pdf",
    "escape_pdf_text",
    "inspect_pdf",
]
