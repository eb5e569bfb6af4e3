from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Tuple

from doctor.client import AssetChainClient
from doctor.contracts.diagnostics import (
    FRONTIER_ENDPOINT,
    INCORRECT_DATA,
    AssetQuery,
    ExpectedAssetState,
    ValidationError,
    exception_error,
)
from doctor.verification.asset_block import rpc_error, validate_expected


class ChainUnavailable(Exception):
    pass


@dataclass(frozen=True)
class SharedChain:
    """
    Result of the single get_asset_chain fetch done during suite setup.
    Exactly one of response / error is meaningful.
    """
    query: AssetQuery
    response: Any = None
    error: Optional[BaseException] = None


@dataclass
class CaseContext:
    client: AssetChainClient
    shared_chain: Optional[SharedChain] = None


class DiagnosticCase(Protocol):
    name: str

    async def check(self, ctx: CaseContext) -> List[ValidationError]:
        ...


@dataclass(frozen=True)
class BlockCheck:
    query: AssetQuery
    expected: ExpectedAssetState


def frontier(issuer: str, expected: ExpectedAssetState) -> BlockCheck:
    return BlockCheck(
        query=AssetQuery(endpoint=FRONTIER_ENDPOINT, issuer=issuer, mint_block_hash=expected.mint_block_hash),
        expected=expected,
    )


async def fetch_all(client: AssetChainClient, queries: List[AssetQuery]) -> List[Any]:
    """
    Starts every query at once and waits for all of them. Failed requests come
    back as their exception instead of cancelling the others.
    """
    results = await asyncio.gather(*(client.fetch(q) for q in queries), return_exceptions=True)
    for r in results:
        if isinstance(r, BaseException) and not isinstance(r, Exception):
            raise r
    return list(results)


@dataclass(frozen=True)
class FetchCase:
    """
    Fetches every block the case names concurrently and validates each against
    its expected state. Errors are concatenated in declaration order.
    """
    name: str
    checks: Tuple[BlockCheck, ...]

    async def check(self, ctx: CaseContext) -> List[ValidationError]:
        results = await fetch_all(ctx.client, [c.query for c in self.checks])

        for c, r in zip(self.checks, results):
            if isinstance(r, Exception):
                return [exception_error(r, c.query.mint_block_hash)]

        errors: List[ValidationError] = []
        for c, r in zip(self.checks, results):
            errors.extend(validate_expected(r, c.expected))
        return errors


def _chain_blocks(shared: Optional[SharedChain]) -> Tuple[Optional[List[Any]], List[ValidationError]]:
    if shared is None:
        return None, [exception_error(ChainUnavailable("shared asset chain was never fetched"))]

    mint = shared.query.mint_block_hash
    if shared.error is not None:
        return None, [exception_error(shared.error, mint)]

    resp = shared.response
    if isinstance(resp, dict) and "error" in resp:
        return None, [rpc_error(mint, resp["error"])]

    blocks = resp.get("asset_chain") if isinstance(resp, dict) else None
    if not isinstance(blocks, list):
        return None, [exception_error(ChainUnavailable("response has no asset_chain list"), mint)]
    return blocks, []


@dataclass(frozen=True)
class SharedChainLengthCase:
    name: str
    expected_length: int
    reason: str

    async def check(self, ctx: CaseContext) -> List[ValidationError]:
        blocks, errors = _chain_blocks(ctx.shared_chain)
        if blocks is None:
            return errors

        if len(blocks) == self.expected_length:
            return []

        mint = ctx.shared_chain.query.mint_block_hash
        return [
            ValidationError(
                type=INCORRECT_DATA,
                mint_block_hash=mint,
                field="asset_chain.length",
                message=(
                    f"Expected NFT with mint block hash: {mint} to have an asset chain length of "
                    f"{self.expected_length}, got: {len(blocks)}. {self.reason}"
                ),
            )
        ]


@dataclass(frozen=True)
class SharedChainFrontierCase:
    """
    Validates the last block of the shared chain instead of issuing a request.
    """
    name: str
    expected: ExpectedAssetState

    async def check(self, ctx: CaseContext) -> List[ValidationError]:
        blocks, errors = _chain_blocks(ctx.shared_chain)
        if blocks is None:
            return errors
        if not blocks:
            return [exception_error(ChainUnavailable("asset chain is empty"), self.expected.mint_block_hash)]
        return validate_expected(blocks[-1], self.expected)
