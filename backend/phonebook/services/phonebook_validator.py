"""Phonebook Validator — runs entry rules against live reference data and the store.

Invariants:
    - Reference sets are read at validation time (latest cached values)
    - Uniqueness excludes the row being updated (exclude_id)
    - Returns a ValidationResult; raising is left to the caller
"""

from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from phonebook.core.domain_types import EntryId
from phonebook.core.entry_rules import ValidationResult, is_present, validate_entry
from phonebook.models.phonebook_item import PhonebookItem
from phonebook.services.reference_data import ReferenceDataService


class PhonebookValidator:

    def __init__(self, db: AsyncSession, reference_data: ReferenceDataService):
        self.db = db
        self.reference_data = reference_data

    async def validate(
        self, candidate: Mapping[str, Any], exclude_id: EntryId | None = None,
    ) -> ValidationResult:
        country_codes = await self.reference_data.get_valid_country_codes()
        timezone_names = await self.reference_data.get_valid_timezone_names()
        taken = await self.phone_number_taken(
            candidate.get("phone_number"), exclude_id,
        )
        return validate_entry(candidate, country_codes, timezone_names, taken)

    async def phone_number_taken(
        self, phone_number: Any, exclude_id: EntryId | None = None,
    ) -> bool:
        if not is_present(phone_number):
            return False
        query = select(PhonebookItem.id).where(
            PhonebookItem.phone_number == phone_number,
        )
        if exclude_id is not None:
            query = query.where(PhonebookItem.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.first() is not None
