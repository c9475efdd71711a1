"""PhonebookItem ORM — persists a single phonebook entry.

Invariants:
    - id is an autoincrement integer primary key, never client-settable
    - phone_number is unique at the schema level (the real uniqueness guarantee)
    - inserted_on set once at creation, updated_on set on every update (service-assigned)

Design Decisions:
    - Timestamps assigned explicitly by PhonebookService, not by column defaults,
      so a single clock governs both fields
    - phone_number indexed through the unique constraint: listing orders by it
"""

from datetime import datetime

from sqlalchemy import String, Integer, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from phonebook.db.base import Base


class PhonebookItem(Base):
    """Phonebook entry — name, phone number, country and timezone."""
    __tablename__ = "phonebook_item"
    __table_args__ = (
        UniqueConstraint("phone_number", name="uq_phonebook_item_phone_number"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[str] = mapped_column(String(64), nullable=False)
    country_code: Mapped[str | None] = mapped_column(String(8), nullable=True)
    timezone_name: Mapped[str | None] = mapped_column(
        String(64), nullable=True,
    )
    inserted_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    updated_on: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

