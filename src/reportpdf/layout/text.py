"""Approximate text measurement for fixed character-budget layout.

No font metrics are read. Widths come from two tuned constants:

- ``avg_char_width`` (pt per character) decides how many characters fit
  in a column before truncation.
- ``width_factor`` (fraction of the font size per character) estimates
  rendered width for right / center alignment.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.models import Align

ELLIPSIS = "…"
PLACEHOLDER = "-"


@dataclass(frozen=True)
class TextMetrics:
    """Character-budget heuristics shared by every table and label."""

    avg_char_width: float = 4.4
    width_factor: float = 0.5
    cell_padding: float = 4
    min_chars: int = 4

    def max_chars(self, width: float) -> int:
        """Characters that fit in a column *width* points wide."""
        return max(self.min_chars, math.floor((width - 2 * self.cell_padding) / self.avg_char_width))

    def truncate(self, value: str | None, width: float) -> str:
        """Fit *value* into *width*; blank values become ``-``.

        Over-long text keeps ``max_chars - 1`` characters and gains an
        ellipsis, so the result is exactly ``max_chars`` long.
        """
        text = " ".join((value or "").split()) or PLACEHOLDER
        limit = self.max_chars(width)
        if len(text) <= limit:
            return text
        return text[: limit - 1] + ELLIPSIS

    def fit(self, value: str | None, width: float, size: float) -> str:
        """Like ``truncate`` but for free text at *size* pt; blank stays blank."""
        text = " ".join((value or "").split())
        limit = max(self.min_chars, math.floor(width / (size * self.width_factor)))
        if len(text) <= limit:
            return text
        return text[: limit - 1] + ELLIPSIS

    def text_width(self, text: str, size: float) -> float:
        return len(text) * size * self.width_factor

    def aligned_x(self, text: str, x: float, width: float, size: float, align: Align) -> float:
        """Left edge for *text* inside the column ``[x, x + width]``."""
        if align == Align.RIGHT:
            return x + width - self.text_width(text, size) - self.cell_padding
        if align == Align.CENTER:
            return x + max((width - self.text_width(text, size)) / 2, self.cell_padding)
        return x + self.cell_padding
