"""Download naming, response headers and on-disk output for rendered PDFs."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from .core.models import ReportMetadata

log = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """``Hours Report`` → ``hours-report``."""
    return _SLUG_RE.sub("-", text.lower()).strip("-")


def safe_filename(name: str, ext: str) -> str:
    """Create a filesystem-safe filename."""
    safe = "".join(c if c.isalnum() or c in "-_ " else "_" for c in name)
    safe = safe.strip().replace(" ", "_")[:80] or "report"
    return f"{safe}.{ext}"


def report_filename(metadata: ReportMetadata) -> str:
    """``<report>-<from>-to-<to>.pdf``; the range part is omitted when unset."""
    stem = slugify(metadata.slug) or slugify(metadata.title) or "report"
    if metadata.range.is_set:
        stem = f"{stem}-{metadata.range.start}-to-{metadata.range.end}"
    return safe_filename(stem, "pdf")


@dataclass(frozen=True)
class PdfExport:
    """A rendered report ready to be handed to an HTTP layer or disk."""

    filename: str
    data: bytes

    @classmethod
    def from_report(cls, metadata: ReportMetadata, data: bytes) -> "PdfExport":
        return cls(report_filename(metadata), data)

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": PDF_CONTENT_TYPE,
            "Content-Disposition": f'attachment; filename="{self.filename}"',
        }

    def write(self, output_dir: str | Path) -> Path:
        """Write the buffer into *output_dir* (created if missing)."""
        directory = Path(output_dir)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self.filename
        path.write_bytes(self.data)
        log.debug("Wrote %s (%d bytes)", path, len(self.data))
        return path
