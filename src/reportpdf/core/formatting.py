"""Date and period labels used in report mastheads."""

from __future__ import annotations

import re
from datetime import date

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def parse_iso_date(value: str | None) -> date | None:
    """``YYYY-MM-DD`` → ``date``; anything else (or an impossible date) → *None*."""
    m = _ISO_DATE_RE.match((value or "").strip())
    if not m:
        return None
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return None


def format_us_date(value: str | None) -> str:
    """``2024-03-09`` → ``03/09/2024``; unparseable input is returned as-is."""
    parsed = parse_iso_date(value)
    if parsed is None:
        return value or ""
    return parsed.strftime("%m/%d/%Y")


def format_long_date(value: date) -> str:
    """``Mar 9, 2024``."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_period(start: str | None, end: str | None) -> str:
    """Human label for a reporting period.

    Same-year ranges use ``Jan 05 - Feb 03, 2024``; ranges crossing a year
    boundary (or with unparseable ends) fall back to US numeric dates.
    """
    first = parse_iso_date(start)
    last = parse_iso_date(end)
    if first is None or last is None:
        return f"{format_us_date(start)} - {format_us_date(end)}"
    if first.year == last.year:
        return f"{first.strftime('%b %d')} - {last.strftime('%b %d')}, {last.year}"
    return f"{format_us_date(start)} - {format_us_date(end)}"
