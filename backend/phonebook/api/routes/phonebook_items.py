"""Phonebook Items — REST handlers for /rest/phonebook-item.

Invariants:
    - Every response is a {status, data} envelope
    - Routes parse and delegate; validation and persistence live in services/
    - Domain failures raised as PhonebookError and rendered by the global handler
    - Integer inputs bounded to the store range (ids: 1..MAX_ENTRY_ID); larger values are a 400
    - pageSize is clamped to settings.max_page_size

Design Decisions:
    - Payload parsed into PhonebookItemPayload: server-owned keys dropped at the boundary
    - Missing body treated as an empty payload so presence errors use the field map
    - DELETE reads id from the query string, falling back to a JSON body
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from phonebook.config import Settings, get_settings
from phonebook.core.domain_types import MAX_ENTRY_ID, EntryId
from phonebook.core.entry_rules import (
    ID_INVALID_MESSAGE, ID_OUT_OF_RANGE_MESSAGE, ID_REQUIRED_MESSAGE,
    check_required,
)
from phonebook.core.errors import EntryValidationError, MissingIdentifierError
from phonebook.core.pagination import MAX_WINDOW_VALUE, PageWindow
from phonebook.infrastructure.database import get_db
from phonebook.schemas.phonebook_item import (
    PhonebookItemPayload, PhonebookItemRead, PhonebookPage, success,
)
from phonebook.services.phonebook_query import list_entries
from phonebook.services.phonebook_service import PhonebookService
from phonebook.services.phonebook_validator import PhonebookValidator
from phonebook.services.reference_data import (
    ReferenceDataService, get_reference_data,
)

router = APIRouter(prefix="/rest/phonebook-item", tags=["phonebook"])


def get_phonebook_service(
    db: AsyncSession = Depends(get_db),
    reference_data: ReferenceDataService = Depends(get_reference_data),
) -> PhonebookService:
    return PhonebookService(db, PhonebookValidator(db, reference_data))


def _item_data(item) -> dict:
    return PhonebookItemRead.model_validate(item).model_dump(mode="json")


def _payload_data(payload: PhonebookItemPayload | None) -> dict[str, Any]:
    if payload is None:
        return {}
    return payload.model_dump(exclude_unset=True)


async def _list_response(
    db: AsyncSession,
    settings: Settings,
    entry_id: EntryId | None,
    name: str | None,
    page: int,
    page_size: int | None,
    offset: int,
) -> dict:
    size = min(page_size or settings.default_page_size, settings.max_page_size)
    result = await list_entries(
        db, PageWindow(page=page, page_size=size, offset=offset),
        entry_id=entry_id, name=name,
    )
    body = PhonebookPage(
        items=[PhonebookItemRead.model_validate(i) for i in result.items],
        page=result.current_page,
        total=result.total_items,
    )
    return success(body.model_dump(mode="json"))


@router.get("")
async def list_items(
    name: str | None = Query(None),
    page: int = Query(1, ge=1, le=MAX_WINDOW_VALUE),
    page_size: int | None = Query(None, alias="pageSize", ge=1),
    offset: int = Query(0, ge=0, le=MAX_WINDOW_VALUE),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """List or search entries, ordered by phone number."""
    return await _list_response(db, settings, None, name, page, page_size, offset)


@router.get("/{entry_id}")
async def get_item(
    entry_id: int = Path(ge=1, le=MAX_ENTRY_ID),
    name: str | None = Query(None),
    page: int = Query(1, ge=1, le=MAX_WINDOW_VALUE),
    page_size: int | None = Query(None, alias="pageSize", ge=1),
    offset: int = Query(0, ge=0, le=MAX_WINDOW_VALUE),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """List envelope holding at most the entry with this id (name ignored)."""
    return await _list_response(
        db, settings, EntryId(entry_id), name, page, page_size, offset,
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_item(
    payload: PhonebookItemPayload | None = Body(None),
    service: PhonebookService = Depends(get_phonebook_service),
):
    item = await service.create(_payload_data(payload))
    return success(_item_data(item))


@router.api_route("", methods=["PUT", "PATCH"])
async def update_item_without_id():
    raise MissingIdentifierError()


@router.api_route("/{entry_id}", methods=["PUT", "PATCH"])
async def update_item(
    entry_id: int = Path(ge=1, le=MAX_ENTRY_ID),
    payload: PhonebookItemPayload | None = Body(None),
    service: PhonebookService = Depends(get_phonebook_service),
):
    """Partial update: only supplied fields change."""
    item = await service.update(EntryId(entry_id), _payload_data(payload))
    return success(_item_data(item))


@router.delete("")
async def delete_item(
    raw_id: str | None = Query(None, alias="id"),
    body: dict[str, Any] | None = Body(None),
    service: PhonebookService = Depends(get_phonebook_service),
):
    if raw_id is None and body:
        raw_id = body.get("id")

    required = check_required({"id": raw_id}, {"id": ID_REQUIRED_MESSAGE})
    if not required.valid:
        raise EntryValidationError(required.errors)
    try:
        entry_id = int(raw_id)
    except (TypeError, ValueError):
        raise EntryValidationError({"id": ID_INVALID_MESSAGE})
    if not 1 <= entry_id <= MAX_ENTRY_ID:
        raise EntryValidationError({"id": ID_OUT_OF_RANGE_MESSAGE})

    await service.delete(EntryId(entry_id))
    return success()
