"""Entry Rules — pure field validation for phonebook entries.

Invariants:
    - No IO: reference sets and the uniqueness verdict are passed in by the caller
    - Every check runs; errors are collected, never short-circuited
    - At most one message per field (first failing rule wins)
    - Rule order per field: presence, inclusion, uniqueness, pattern

Design Decisions:
    - Presence treats None, "" and whitespace-only strings as absent
    - Missing country_code/timezone_name fails inclusion (no allow-empty)
"""

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from phonebook.core.domain_types import MAX_ENTRY_ID


PHONE_NUMBER_PATTERN = re.compile(r"(\(?\+?[0-9]*\)?)?[0-9_\- \(\)]*")

REQUIRED_MESSAGES: dict[str, str] = {
    "first_name": "The first_name is required",
    "phone_number": "The phone_number is required",
}
ID_REQUIRED_MESSAGE = "The id is required"
ID_INVALID_MESSAGE = "The id must be an integer"
ID_OUT_OF_RANGE_MESSAGE = f"The id must be between 1 and {MAX_ENTRY_ID}"
INVALID_COUNTRY_CODE = "Invalid country code"
INVALID_TIMEZONE_NAME = "Invalid timezone name"
PHONE_NUMBER_TAKEN = "This phone number is already registered"
PHONE_NUMBER_INVALID = "The phone number is invalid"


@dataclass
class ValidationResult:
    """Aggregated outcome of a validation pass."""
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> None:
        """Record message unless the field already has one."""
        self.errors.setdefault(field_name, message)


def is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def is_valid_phone_number(value: str) -> bool:
    return PHONE_NUMBER_PATTERN.fullmatch(value) is not None


def check_required(
    data: Mapping[str, Any], messages: Mapping[str, str],
) -> ValidationResult:
    """Presence-only check over the given fields."""
    result = ValidationResult()
    for name, message in messages.items():
        if not is_present(data.get(name)):
            result.add(name, message)
    return result


def validate_entry(
    candidate: Mapping[str, Any],
    valid_country_codes: Iterable[str],
    valid_timezone_names: Iterable[str],
    phone_number_taken: bool,
) -> ValidationResult:
    """Full entity validation of a create/update candidate."""
    result = check_required(candidate, REQUIRED_MESSAGES)

    if candidate.get("country_code") not in set(valid_country_codes):
        result.add("country_code", INVALID_COUNTRY_CODE)
    if candidate.get("timezone_name") not in set(valid_timezone_names):
        result.add("timezone_name", INVALID_TIMEZONE_NAME)

    phone_number = candidate.get("phone_number")
    if is_present(phone_number):
        if phone_number_taken:
            result.add("phone_number", PHONE_NUMBER_TAKEN)
        elif not is_valid_phone_number(phone_number):
            result.add("phone_number", PHONE_NUMBER_INVALID)

    return result
