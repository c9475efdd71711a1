"""Phonebook Query Builder — filtered, ordered, paginated listing.

Invariants:
    - Always ordered by phone_number ascending (id as tiebreaker)
    - entry_id, when given, overrides the name filter
    - name matches first_name OR last_name as a literal substring (LIKE, autoescaped)
    - total_items counts every filtered row, ignoring the window
"""

from dataclasses import dataclass

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from phonebook.core.domain_types import EntryId
from phonebook.core.pagination import PageWindow
from phonebook.models.phonebook_item import PhonebookItem


@dataclass
class Page:
    items: list[PhonebookItem]
    current_page: int
    total_items: int


def build_filter_query(
    entry_id: EntryId | None = None, name: str | None = None,
) -> Select:
    """Base SELECT with filters applied, unordered and unwindowed."""
    query = select(PhonebookItem)
    if entry_id is not None:
        return query.where(PhonebookItem.id == entry_id)
    if name:
        query = query.where(
            or_(
                PhonebookItem.first_name.contains(name, autoescape=True),
                PhonebookItem.last_name.contains(name, autoescape=True),
            ),
        )
    return query


async def list_entries(
    db: AsyncSession,
    window: PageWindow,
    entry_id: EntryId | None = None,
    name: str | None = None,
) -> Page:
    query = build_filter_query(entry_id, name)

    total = await db.scalar(
        select(func.count()).select_from(query.subquery()),
    )
    result = await db.execute(
        query.order_by(PhonebookItem.phone_number.asc(), PhonebookItem.id.asc())
        .offset(window.skip)
        .limit(window.limit),
    )
    return Page(
        items=list(result.scalars().all()),
        current_page=window.page,
        total_items=total or 0,
    )
