"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EntryId wraps the integer primary key of phonebook_item
    - Valid ids lie in 1..MAX_ENTRY_ID (the store column is a 32-bit INTEGER)
    - Reference data keys are encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: value doubles as cache key and upstream path segment
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EntryId = NewType("EntryId", int)

MAX_ENTRY_ID = 2**31 - 1


# ─── Enums ───────────────────────────────────────────────────────

class ReferenceKey(str, Enum):
    """Externally sourced reference lists used for inclusion validation."""
    COUNTRIES = "countries"
    TIMEZONES = "timezones"

    @property
    def path(self) -> str:
        """Upstream endpoint path, e.g. ``/countries``."""
        return f"/{self.value}"
