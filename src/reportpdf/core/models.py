"""Pydantic models for the abstract report representation.

These models form the intermediate representation (IR) between the report
assemblers that fetch domain data and the PDF engine. An assembler hands
over a ``ReportModel`` (metadata plus an ordered list of blocks); the same
block list can feed other serializers so every export format carries the
same rows and totals.

Field names accept the upstream API's camelCase as well as snake_case.
"""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .company import CompanyProfile
from .formatting import format_long_date, format_period

logger = logging.getLogger(__name__)


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def cell_text(value: Any) -> str:
    """Stringify one upstream value; ``None`` becomes ``""``."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Align(str, Enum):
    """Horizontal alignment of a table cell."""
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


# ---------------------------------------------------------------------------
# Content blocks
# ---------------------------------------------------------------------------

class ColumnSpec(_ApiModel):
    """One table column: header label, width in points, alignment."""
    label: str = ""
    width: float = Field(gt=0)
    align: Align = Align.LEFT

    @field_validator("label", mode="before")
    @classmethod
    def _label(cls, value: Any) -> str:
        return cell_text(value)

    @field_validator("align", mode="before")
    @classmethod
    def _align(cls, value: Any) -> Any:
        if value is None:
            return Align.LEFT
        if isinstance(value, str):
            key = value.strip().lower()
            if key not in {a.value for a in Align}:
                logger.warning("Unknown column alignment '%s', using 'left'", value)
                return Align.LEFT
            return key
        return value


class LineBlock(_ApiModel):
    """A single line of text (titles, labels, notes)."""
    kind: Literal["line"] = "line"
    text: str = ""
    bold: bool = False
    size: Optional[float] = Field(default=None, gt=0)
    gray: float = Field(default=0, ge=0, le=1)
    step: Optional[float] = Field(default=None, gt=0)

    @field_validator("text", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return cell_text(value)


class TableBlock(_ApiModel):
    """A table with fixed columns and string rows."""
    kind: Literal["table"] = "table"
    title: str = ""
    columns: list[ColumnSpec] = Field(min_length=1)
    rows: list[list[str]] = Field(default_factory=list)
    zebra: bool = True
    empty_message: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, value: Any) -> str:
        return cell_text(value)

    @field_validator("rows", mode="before")
    @classmethod
    def _rows(cls, value: Any) -> list[list[str]]:
        if value is None:
            return []
        return [[cell_text(cell) for cell in (row or [])] for row in value]


class SummaryBoxBlock(_ApiModel):
    """Key/value pairs rendered as a two-column Metric/Amount box."""
    kind: Literal["summaryBox"] = "summaryBox"
    title: str = ""
    pairs: list[tuple[str, str]] = Field(default_factory=list)
    headers: tuple[str, str] = ("Metric", "Amount")

    @field_validator("pairs", mode="before")
    @classmethod
    def _pairs(cls, value: Any) -> list[tuple[str, str]]:
        return _coerce_pairs(value)


class SpacerBlock(_ApiModel):
    """Vertical whitespace."""
    kind: Literal["spacer"] = "spacer"
    height: float = Field(default=12, ge=0)


ReportBlock = Annotated[
    Union[LineBlock, TableBlock, SummaryBoxBlock, SpacerBlock],
    Field(discriminator="kind"),
]


def _coerce_pairs(value: Any) -> list[tuple[str, str]]:
    if value is None:
        return []
    if isinstance(value, dict):
        value = list(value.items())
    pairs: list[tuple[str, str]] = []
    for item in value:
        item = list(item or [])
        label = cell_text(item[0]) if len(item) > 0 else ""
        amount = cell_text(item[1]) if len(item) > 1 else ""
        pairs.append((label, amount))
    return pairs


# ---------------------------------------------------------------------------
# Metadata & report
# ---------------------------------------------------------------------------

class DateRange(_ApiModel):
    """Reporting period as ISO dates (``{"from": ..., "to": ...}``)."""
    start: str = Field(default="", alias="from")
    end: str = Field(default="", alias="to")

    @field_validator("start", "end", mode="before")
    @classmethod
    def _clean(cls, value: Any) -> str:
        return cell_text(value).strip()

    @property
    def label(self) -> str:
        return format_period(self.start, self.end)

    @property
    def is_set(self) -> bool:
        return bool(self.start and self.end)


class ReportMetadata(_ApiModel):
    """Masthead information printed at the top of every page."""
    company: CompanyProfile = Field(default_factory=CompanyProfile)
    title: str = "Report"
    slug: str = ""
    range: DateRange = Field(default_factory=DateRange)
    generated_on: str = ""
    summary: list[tuple[str, str]] = Field(default_factory=list)
    footer_text: Optional[str] = None

    @field_validator("company", "range", mode="before")
    @classmethod
    def _none_to_default(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("summary", mode="before")
    @classmethod
    def _summary(cls, value: Any) -> list[tuple[str, str]]:
        return _coerce_pairs(value)

    def model_post_init(self, __context: Any) -> None:
        """Auto-fill generated_on if not set."""
        if not self.generated_on:
            self.generated_on = format_long_date(date.today())


class ReportModel(_ApiModel):
    """The top-level input to the PDF engine."""
    metadata: ReportMetadata = Field(default_factory=ReportMetadata)
    blocks: list[ReportBlock] = Field(default_factory=list)

    @field_validator("metadata", mode="before")
    @classmethod
    def _metadata(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("blocks", mode="before")
    @classmethod
    def _blocks(cls, value: Any) -> Any:
        return [] if value is None else value


# ---------------------------------------------------------------------------
# Render result
# ---------------------------------------------------------------------------

class RenderResult(BaseModel):
    """Result of rendering one report to disk."""
    source: str = ""
    output_path: Optional[Path] = None
    page_count: int = 0
    byte_size: int = 0
    success: bool = True
    error: Optional[str] = None
