"""Reference API Client — fetches country/timezone mappings over HTTP.

Invariants:
    - Only HTTP 200 with a JSON body {"result": {code: ...}} is a success
    - Timeouts, transport errors, non-200 and malformed bodies all raise UpstreamFetchError
    - No retries: the caller decides how to degrade

Design Decisions:
    - Long-lived httpx.AsyncClient created on startup, closed on shutdown
    - Optional transport argument lets tests plug in httpx.MockTransport
"""

import logging
from typing import Any

import httpx

from phonebook.core.errors import UpstreamFetchError

logger = logging.getLogger(__name__)


class ReferenceApiClient:
    """Thin httpx wrapper implementing the ReferenceSource protocol."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def fetch(self, path: str) -> dict[str, Any]:
        """GET path and return its ``result`` mapping."""
        try:
            response = await self.client.get(path)
        except httpx.TimeoutException:
            raise UpstreamFetchError(path, "timeout")
        except httpx.HTTPError as e:
            raise UpstreamFetchError(path, f"transport error: {type(e).__name__}")

        if response.status_code != 200:
            raise UpstreamFetchError(path, f"HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError:
            raise UpstreamFetchError(path, "invalid JSON body")

        result = body.get("result") if isinstance(body, dict) else None
        if not isinstance(result, dict):
            raise UpstreamFetchError(path, "missing result object")

        logger.debug(
            f"Fetched {len(result)} reference entries from {path}",
            extra={"status_code": response.status_code},
        )
        return result

    async def aclose(self) -> None:
        await self.client.aclose()
