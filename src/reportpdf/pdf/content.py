"""Drawing commands and the PDF operator text they render to.

Every page owns an ordered list of draw commands. A command is one of
three tagged variants (``Text``, ``Rect``, ``Line``); each knows how to
render itself as a single line of PDF operator syntax. The composer never
looks at page state: all coordinates are supplied by the layout layer and
are PDF user space (origin bottom-left, y grows upward).

Operator forms::

    <gray> g BT /F1 <size> Tf 1 0 0 1 <x> <y> Tm (<text>) Tj ET
    <fill> g <x> <y> <w> <h> re f
    <stroke> G <x> <y> <w> <h> re S
    <stroke> G <x1> <y1> m <x2> <y2> l S
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

# Resource names declared by every page (see ``document.py``)
REGULAR_FONT = "F1"
BOLD_FONT = "F2"


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def escape_pdf_text(value: str) -> str:
    """Backslash-escape ``\\``, ``(`` and ``)`` for a PDF literal string.

    The backslash is replaced first so the escapes added for parentheses
    are not doubled.
    """
    return value.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def format_number(value: float) -> str:
    """Render a coordinate or gray level compactly (``12``, ``11.5``, ``0.97``)."""
    if float(value).is_integer():
        return str(int(value))
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


# ---------------------------------------------------------------------------
# Operator builders
# ---------------------------------------------------------------------------

def draw_text(
    text: str,
    x: float,
    y: float,
    size: float = 10,
    bold: bool = False,
    gray: float = 0,
) -> str:
    """Operator text showing *text* with its baseline origin at (*x*, *y*)."""
    font = BOLD_FONT if bold else REGULAR_FONT
    return (
        f"{format_number(gray)} g BT /{font} {format_number(size)} Tf "
        f"1 0 0 1 {format_number(x)} {format_number(y)} Tm "
        f"({escape_pdf_text(text)}) Tj ET"
    )


def draw_rect(
    x: float,
    y: float,
    width: float,
    height: float,
    fill_gray: Optional[float] = None,
    stroke_gray: float = 0,
) -> str:
    """Operator text for an optionally filled, always stroked rectangle."""
    path = (
        f"{format_number(x)} {format_number(y)} "
        f"{format_number(width)} {format_number(height)} re"
    )
    ops = []
    if fill_gray is not None:
        ops.append(f"{format_number(fill_gray)} g {path} f")
    ops.append(f"{format_number(stroke_gray)} G {path} S")
    return "\n".join(ops)


def draw_line(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    stroke_gray: float = 0,
) -> str:
    """Operator text for a single stroked segment."""
    return (
        f"{format_number(stroke_gray)} G "
        f"{format_number(x1)} {format_number(y1)} m "
        f"{format_number(x2)} {format_number(y2)} l S"
    )


# ---------------------------------------------------------------------------
# Draw commands
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Text:
    value: str
    x: float
    y: float
    size: float = 10
    bold: bool = False
    gray: float = 0

    def to_operators(self) -> str:
        return draw_text(self.value, self.x, self.y, self.size, self.bold, self.gray)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float
    fill_gray: Optional[float] = None
    stroke_gray: float = 0

    def to_operators(self) -> str:
        return draw_rect(self.x, self.y, self.w, self.h, self.fill_gray, self.stroke_gray)


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke_gray: float = 0

    def to_operators(self) -> str:
        return draw_line(self.x1, self.y1, self.x2, self.y2, self.stroke_gray)


DrawCommand = Union[Text, Rect, Line]


def compose(commands: list[DrawCommand]) -> str:
    """Join the operator text of *commands* into one content stream."""
    return "\n".join(cmd.to_operators() for cmd in commands)
