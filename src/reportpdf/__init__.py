"""reportpdf — paginated PDF reports without a PDF library."""

__version__ = "0.1.0"

from .builder import ReportBuilder, render_report
from .core.models import ReportMetadata, ReportModel
from .layout.settings import DEFAULT_LAYOUT, Layout, get_layout

__all__ = [
    "DEFAULT_LAYOUT",
    "Layout",
    "ReportBuilder",
    "ReportMetadata",
    "ReportModel",
    "__version__",
    "get_layout",
    "render_report",
]
