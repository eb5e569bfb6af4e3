from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from doctor.contracts.diagnostics import AssetQuery

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0


class InvalidBaseAddress(ValueError):
    pass


def parse_base_url(base_url: str) -> httpx.URL:
    """
    Accepts only absolute http(s) URLs with a host. Raises InvalidBaseAddress.
    """
    try:
        url = httpx.URL((base_url or "").strip())
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidBaseAddress(f"invalid base address {base_url!r}: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidBaseAddress(f"invalid base address {base_url!r}: expected http(s)://host[:port]")
    return url


class AssetChainClient:
    """
    Read-only async client for the asset-chain indexing API.

    Every endpoint lives at the root of the base URL; any path on the base URL
    is replaced, while its userinfo and query parameters are kept. Responses
    are returned as decoded JSON without interpretation.
    """

    def __init__(
        self,
        base_url: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = parse_base_url(base_url)
        self.timeout_s = timeout_s
        self._http = httpx.AsyncClient(timeout=timeout_s, transport=transport)

    def url_for(self, query: AssetQuery) -> httpx.URL:
        # query params on the base URL are kept; ours win on conflicts
        return self.base_url.copy_with(path="/" + query.endpoint).copy_merge_params(query.params())

    async def fetch(self, query: AssetQuery) -> Any:
        url = self.url_for(query)
        logger.debug("GET %s", url)
        r = await self._http.get(url, headers={"Accept": "application/json"})
        return r.json()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AssetChainClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
