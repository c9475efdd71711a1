"""Database Session Manager — error mapping at the session boundary.

Tests:
    - IntegrityError escaping a session → PersistenceError keyed by phone_number
    - health_check succeeds against a live engine
"""

from datetime import datetime, timezone

import pytest

from phonebook.core.errors import PersistenceError
from phonebook.infrastructure.database import DatabaseSessionManager
from phonebook.models.phonebook_item import PhonebookItem


@pytest.fixture
async def manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.create_all()
    yield manager
    await manager.dispose()


def _item(first_name: str) -> PhonebookItem:
    return PhonebookItem(
        first_name=first_name,
        phone_number="+1 555 0100",
        inserted_on=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


async def test_integrity_error_maps_to_phone_number_field(manager):
    async with manager.session() as db:
        db.add(_item("First"))
        await db.commit()

    with pytest.raises(PersistenceError) as exc_info:
        async with manager.session() as db:
            db.add(_item("Second"))
            await db.commit()

    assert exc_info.value.errors == {
        "phone_number": "This phone number is already registered",
    }
    assert exc_info.value.http_status == 400


async def test_health_check(manager):
    assert await manager.health_check() is True
