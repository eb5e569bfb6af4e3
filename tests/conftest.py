from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from doctor.client import AssetChainClient
from doctor.contracts.diagnostics import ExpectedAssetState, Report
from doctor.diagnostics.cases import FetchCase, SharedChainFrontierCase
from doctor.diagnostics.catalog import SHARED_CHAIN_QUERY, SWAP_ISSUER, default_catalog
from doctor.diagnostics.suite import diagnose

BASE = "http://nft-api.test"

RouteKey = Tuple[str, Optional[str], Optional[str]]


def block(state: ExpectedAssetState) -> Dict[str, Any]:
    return {
        "block_hash": state.block_hash,
        "account": state.account,
        "owner": state.owner,
        "locked": state.locked,
    }


def route_key(request: httpx.Request) -> RouteKey:
    params = request.url.params
    return request.url.path.lstrip("/"), params.get("mint_block_hash"), params.get("height")


def healthy_routes() -> Dict[RouteKey, Any]:
    """
    Frozen responses of an API that agrees with every fixture in the catalog.
    """
    routes: Dict[RouteKey, Any] = {}
    chain_frontier = None
    for case in default_catalog():
        if isinstance(case, FetchCase):
            for c in case.checks:
                q = c.query
                routes[(q.endpoint, q.mint_block_hash, None if q.height is None else str(q.height))] = block(c.expected)
        elif isinstance(case, SharedChainFrontierCase):
            chain_frontier = block(case.expected)

    mint = SHARED_CHAIN_QUERY.mint_block_hash
    routes[(SHARED_CHAIN_QUERY.endpoint, mint, None)] = {
        "asset_chain": [
            {"block_hash": mint, "account": SWAP_ISSUER, "owner": SWAP_ISSUER, "locked": False},
            {"block_hash": "AB" * 32, "account": SWAP_ISSUER, "owner": SWAP_ISSUER, "locked": False},
            chain_frontier,
        ]
    }
    return routes


def make_transport(routes: Dict[RouteKey, Any], calls: Optional[List[RouteKey]] = None) -> httpx.MockTransport:
    """
    Values in routes: dict/list -> JSON body, str -> raw text body, Exception -> raised.
    Unknown routes answer 404 with an {"error": ...} body like the real API.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        key = route_key(request)
        if calls is not None:
            calls.append(key)
        body = routes.get(key)
        if body is None:
            return httpx.Response(404, json={"error": "asset not found"})
        if isinstance(body, Exception):
            raise body
        if isinstance(body, str):
            return httpx.Response(200, text=body)
        return httpx.Response(200, json=body)

    return httpx.MockTransport(handler)


def run_suite(routes: Dict[RouteKey, Any], sink=None, calls: Optional[List[RouteKey]] = None) -> Report:
    async def go() -> Report:
        async with AssetChainClient(BASE, transport=make_transport(routes, calls)) as client:
            return await diagnose(BASE, sink=sink, client=client)

    return asyncio.run(go())


def run_with_client(routes: Dict[RouteKey, Any], fn: Callable[[AssetChainClient], Any]) -> Any:
    async def go():
        async with AssetChainClient(BASE, transport=make_transport(routes)) as client:
            return await fn(client)

    return asyncio.run(go())


@pytest.fixture
def routes() -> Dict[RouteKey, Any]:
    return healthy_routes()
