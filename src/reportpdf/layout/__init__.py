"""Layout presets, table rendering and pagination."""

from .paginator import Cursor, Paginator, PaginatorState
from .settings import DEFAULT_LAYOUT, Layout, get_layout, list_layouts, register_layout
from .table import TableRenderer
from .text import TextMetrics

__all__ = [
    "Cursor",
    "DEFAULT_LAYOUT",
    "Layout",
    "Paginator",
    "PaginatorState",
    "TableRenderer",
    "TextMetrics",
    "get_layout",
    "list_layouts",
    "register_layout",
]
