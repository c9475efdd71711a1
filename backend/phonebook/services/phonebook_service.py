"""Phonebook Service — create, update and delete orchestration.

Invariants:
    - Payloads arrive already stripped of id/inserted_on/updated_on (schema layer)
    - Create: presence check first, then full validation, then persist
    - Update: only supplied fields change; merged entity is validated;
      the row is exempt from its own phone_number uniqueness check
    - inserted_on assigned once at create; updated_on assigned on every update
    - Exactly one commit per operation; IntegrityError at commit -> PersistenceError
    - Missing entity on update/delete -> ResourceNotFoundError (404)
"""

import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from phonebook.core.domain_types import EntryId
from phonebook.core.entry_rules import (
    PHONE_NUMBER_TAKEN, REQUIRED_MESSAGES, check_required,
)
from phonebook.core.errors import (
    EntryValidationError, ErrorContext, PersistenceError, ResourceNotFoundError,
)
from phonebook.models.phonebook_item import PhonebookItem
from phonebook.services.phonebook_validator import PhonebookValidator

logger = logging.getLogger(__name__)

WRITABLE_FIELDS = (
    "first_name", "last_name", "phone_number", "country_code", "timezone_name",
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PhonebookService:
    """Write-side operations on phonebook_item."""

    def __init__(self, db: AsyncSession, validator: PhonebookValidator):
        self.db = db
        self.validator = validator

    async def get_or_404(self, entry_id: EntryId) -> PhonebookItem:
        result = await self.db.execute(
            select(PhonebookItem).where(PhonebookItem.id == entry_id),
        )
        item = result.scalar_one_or_none()
        if item is None:
            raise ResourceNotFoundError(
                "Phonebook item", str(entry_id),
                ErrorContext(entry_id=entry_id),
            )
        return item

    async def create(self, payload: Mapping[str, Any]) -> PhonebookItem:
        data = {k: v for k, v in payload.items() if k in WRITABLE_FIELDS}

        required = check_required(data, REQUIRED_MESSAGES)
        if not required.valid:
            raise EntryValidationError(required.errors)

        result = await self.validator.validate(data)
        if not result.valid:
            raise EntryValidationError(result.errors)

        item = PhonebookItem(**data, inserted_on=utcnow())
        self.db.add(item)
        await self._commit()
        await self.db.refresh(item)
        logger.info(
            f"Created phonebook item {item.id}", extra={"entry_id": item.id},
        )
        return item

    async def update(
        self, entry_id: EntryId, payload: Mapping[str, Any],
    ) -> PhonebookItem:
        item = await self.get_or_404(entry_id)
        changes = {k: v for k, v in payload.items() if k in WRITABLE_FIELDS}

        candidate = {name: getattr(item, name) for name in WRITABLE_FIELDS}
        candidate.update(changes)
        result = await self.validator.validate(candidate, exclude_id=item.id)
        if not result.valid:
            raise EntryValidationError(
                result.errors, ErrorContext(entry_id=entry_id),
            )

        for name, value in changes.items():
            setattr(item, name, value)
        item.updated_on = utcnow()
        await self._commit()
        await self.db.refresh(item)
        logger.info(
            f"Updated phonebook item {item.id} ({', '.join(sorted(changes)) or 'no fields'})",
            extra={"entry_id": item.id},
        )
        return item

    async def delete(self, entry_id: EntryId) -> None:
        item = await self.get_or_404(entry_id)
        await self.db.delete(item)
        await self._commit()
        logger.info(
            f"Deleted phonebook item {entry_id}", extra={"entry_id": entry_id},
        )

    async def _commit(self) -> None:
        """Commit, mapping the phone_number unique constraint to a 400."""
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"Phonebook commit rejected by store: {e.orig}")
            raise PersistenceError({"phone_number": PHONE_NUMBER_TAKEN})
