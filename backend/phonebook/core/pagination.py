"""Pagination — window arithmetic for the listing endpoint.

Invariants:
    - skip = (page - 1) * page_size + offset
    - limit = page_size
    - 1 <= page <= MAX_WINDOW_VALUE, page_size >= 1,
      0 <= offset <= MAX_WINDOW_VALUE (ValueError otherwise)
    - skip never exceeds MAX_SKIP (the store's 64-bit OFFSET)
"""

from dataclasses import dataclass

MAX_WINDOW_VALUE = 2**31 - 1
MAX_SKIP = 2**63 - 1


@dataclass(frozen=True)
class PageWindow:
    page: int = 1
    page_size: int = 2
    offset: int = 0

    def __post_init__(self):
        if not 1 <= self.page <= MAX_WINDOW_VALUE:
            raise ValueError(f"page must be between 1 and {MAX_WINDOW_VALUE}")
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")
        if not 0 <= self.offset <= MAX_WINDOW_VALUE:
            raise ValueError(f"offset must be between 0 and {MAX_WINDOW_VALUE}")
        if self.skip > MAX_SKIP:
            raise ValueError("page window starts past the largest offset")

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size + self.offset

    @property
    def limit(self) -> int:
        return self.page_size
