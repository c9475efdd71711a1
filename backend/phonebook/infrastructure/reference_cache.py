"""In-process reference cache backed by cachetools.TTLCache."""

from typing import Any

from cachetools import TTLCache


class TTLReferenceCache:
    """ReferenceCache implementation: bounded size, per-entry time-to-live."""

    def __init__(self, maxsize: int = 16, ttl_seconds: int = 86_400):
        self._cache: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl_seconds)

    def get(self, key: str) -> dict[str, Any] | None:
        return self._cache.get(key)

    def set(self, key: str, value: dict[str, Any]) -> None:
        self._cache[key] = value

    def clear(self) -> None:
        self._cache.clear()
