"""Load a ``ReportModel`` from a JSON or YAML file on disk.

Report file format (JSON shown; YAML uses the same keys)::

    {
      "metadata": {
        "company": {"displayName": "Acme Diner", "city": "Austin"},
        "title": "Hours Report",
        "slug": "hours-report",
        "range": {"from": "2024-03-01", "to": "2024-03-31"},
        "summary": [["Total Hours", "1,204.5"], ["Labor Cost", "$18,220.00"]]
      },
      "blocks": [
        {"kind": "table", "title": "Shifts",
         "columns": [{"label": "Employee", "width": 200}],
         "rows": [["Ana"]]}
      ]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import ReportModel

logger = logging.getLogger(__name__)


class ReportSourceError(ValueError):
    """A report file could not be parsed or does not describe a report."""


def _parse(raw: str, suffix: str) -> Any:
    if suffix in (".yaml", ".yml"):
        return yaml.safe_load(raw)
    if suffix == ".json":
        return json.loads(raw)
    # Try JSON first, then YAML
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return yaml.safe_load(raw)


def parse_report(data: Any) -> ReportModel:
    """Validate an already-decoded mapping into a ``ReportModel``."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ReportSourceError(f"Report must be a mapping, got {type(data).__name__}")
    try:
        return ReportModel.model_validate(data)
    except ValidationError as exc:
        raise ReportSourceError(f"Invalid report: {exc}") from exc


def load_report(path: str | Path) -> ReportModel:
    """Read *path* (``.json``, ``.yaml`` or ``.yml``) into a ``ReportModel``.

    Raises ``FileNotFoundError`` for a missing file and ``ReportSourceError``
    for anything that cannot be decoded or validated.
    """
    source = Path(path).expanduser().resolve()
    if not source.exists():
        raise FileNotFoundError(f"Report file not found: {source}")

    raw = source.read_text(encoding="utf-8")
    try:
        data = _parse(raw, source.suffix.lower())
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ReportSourceError(f"Cannot parse {source.name}: {exc}") from exc

    report = parse_report(data)
    logger.debug("Loaded %s: %d block(s)", source.name, len(report.blocks))
    return report
