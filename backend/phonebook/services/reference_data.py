"""Reference Data Service — valid country codes and timezone names, cached.

Invariants:
    - A cached, non-empty mapping is returned without network IO
    - Missing or empty cache entry triggers exactly one upstream fetch
    - Upstream failure yields an empty set (fail-closed: every value is rejected
      until the next successful fetch); empty results are never cached
    - UpstreamFetchError never escapes this module

Design Decisions:
    - Cache and source injected (ReferenceCache / ReferenceSource protocols)
    - Concurrent misses may refetch in parallel; last writer wins
    - Module-level singleton wired in the FastAPI lifespan, exposed via get_reference_data()
"""

import logging

from phonebook.core.domain_types import ReferenceKey
from phonebook.core.errors import UpstreamFetchError
from phonebook.core.repository_protocols import ReferenceCache, ReferenceSource

logger = logging.getLogger(__name__)


class ReferenceDataService:
    """Resolves reference key sets through the cache, falling back to upstream."""

    def __init__(self, source: ReferenceSource, cache: ReferenceCache):
        self.source = source
        self.cache = cache

    async def get_valid_country_codes(self) -> set[str]:
        return await self._keys(ReferenceKey.COUNTRIES)

    async def get_valid_timezone_names(self) -> set[str]:
        return await self._keys(ReferenceKey.TIMEZONES)

    async def _keys(self, key: ReferenceKey) -> set[str]:
        cached = self.cache.get(key.value)
        if cached:
            return set(cached)

        try:
            mapping = await self.source.fetch(key.path)
        except UpstreamFetchError as e:
            logger.warning(
                f"Reference fetch failed, rejecting all {key.value}: {e.reason}",
                extra={"reference_key": key.value, "error_code": e.code},
            )
            return set()

        if mapping:
            self.cache.set(key.value, mapping)
        else:
            logger.warning(
                f"Upstream returned empty {key.value}",
                extra={"reference_key": key.value},
            )
        return set(mapping)


# Singleton (initialized on startup)
reference_data: ReferenceDataService | None = None


def init_reference_data(
    source: ReferenceSource, cache: ReferenceCache,
) -> ReferenceDataService:
    global reference_data
    reference_data = ReferenceDataService(source, cache)
    return reference_data


def get_reference_data() -> ReferenceDataService:
    """FastAPI dependency for the shared reference data service."""
    if not reference_data:
        raise RuntimeError("Reference data not initialized")
    return reference_data
