"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Reference data IO accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Values are opaque display data; only keys matter for validation
    - Cache is synchronous (in-process), source is async (network IO)
"""

from typing import Any, Protocol


class ReferenceCache(Protocol):
    """Key-value store for reference mappings (code -> display data)."""
    def get(self, key: str) -> dict[str, Any] | None: ...
    def set(self, key: str, value: dict[str, Any]) -> None: ...


class ReferenceSource(Protocol):
    """Upstream provider of reference mappings.

    Raises UpstreamFetchError on any failure (non-200, timeout, bad body).
    """
    async def fetch(self, path: str) -> dict[str, Any]: ...
