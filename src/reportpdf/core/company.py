"""Company profile shown in every report masthead."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_COMPANY_NAME = "WORKFORCE REPORT"


class CompanyProfile(BaseModel):
    """Tenant identity as returned by the settings endpoint.

    Every field is optional; blanks and ``null`` collapse to ``""`` so a
    sparse profile still renders.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    display_name: str = ""
    legal_name: str = ""
    address_line1: str = ""
    address_line2: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""
    phone: str = ""
    email: str = ""
    website: str = ""
    tax_id: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _clean(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    # ------------------------------------------------------------------
    # Derived masthead lines
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.display_name or self.legal_name or DEFAULT_COMPANY_NAME

    def address_line(self) -> str:
        city_line = ", ".join(p for p in (self.city, self.state, self.postal_code) if p)
        parts = (self.address_line1, self.address_line2, city_line, self.country)
        return " | ".join(p for p in parts if p)

    def contact_line(self) -> str:
        return " | ".join(p for p in (self.phone, self.email, self.website) if p)

    def meta_rows(self) -> list[tuple[str, str]]:
        """``(label, value)`` rows; the first is always the company name."""
        rows = [("Company", self.name)]
        if self.legal_name and self.legal_name != self.name:
            rows.append(("Legal Name", self.legal_name))
        if self.address_line():
            rows.append(("Address", self.address_line()))
        if self.contact_line():
            rows.append(("Contact", self.contact_line()))
        if self.tax_id:
            rows.append(("Tax ID", self.tax_id))
        return rows
