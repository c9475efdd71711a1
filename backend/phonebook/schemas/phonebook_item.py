"""Phonebook Item Schemas — Pydantic models for the REST boundary.

Invariants:
    - PhonebookItemPayload never carries id, inserted_on or updated_on
      (undeclared keys are dropped on parse)
    - All payload fields optional: presence is enforced by core/entry_rules
      so errors use the field -> message envelope
    - PhonebookItemRead mirrors every column of phonebook_item

Design Decisions:
    - extra="ignore" strips server-owned and unknown keys in one place
    - model_dump(exclude_unset=True) drives partial updates
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PhonebookItemPayload(BaseModel):
    """Create/update body — client-writable fields only."""
    model_config = ConfigDict(extra="ignore")

    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    country_code: str | None = None
    timezone_name: str | None = None


class PhonebookItemRead(BaseModel):
    """Public representation of a stored entry."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str | None = None
    phone_number: str
    country_code: str | None = None
    timezone_name: str | None = None
    inserted_on: datetime
    updated_on: datetime | None = None


class PhonebookPage(BaseModel):
    """Listing window: items, current page number, total matching rows."""
    items: list[PhonebookItemRead]
    page: int
    total: int


def success(data=None) -> dict:
    """Wrap data in the success envelope (data omitted when None)."""
    if data is None:
        return {"status": "success"}
    return {"status": "success", "data": data}
