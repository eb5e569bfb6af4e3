from __future__ import annotations

import logging
import time
from typing import List, Optional

from doctor.client import DEFAULT_TIMEOUT_S, AssetChainClient, parse_base_url
from doctor.contracts.diagnostics import AssetQuery, Report
from doctor.diagnostics.cases import CaseContext, DiagnosticCase, SharedChain
from doctor.diagnostics.catalog import SHARED_CHAIN_QUERY, default_catalog, unverified_states
from doctor.diagnostics.runner import DiagnosticRunner
from doctor.diagnostics.sink import ProgressSink

logger = logging.getLogger(__name__)


async def fetch_shared_chain(client: AssetChainClient, query: AssetQuery = SHARED_CHAIN_QUERY) -> SharedChain:
    """
    Setup fetch reused by the shared-chain cases. Failures are captured, not raised.
    """
    try:
        return SharedChain(query=query, response=await client.fetch(query))
    except Exception as e:
        logger.warning("shared asset chain fetch failed: %s", e)
        return SharedChain(query=query, error=e)


class DiagnosticSuite:
    def __init__(self, cases: Optional[List[DiagnosticCase]] = None, shared_chain_query: AssetQuery = SHARED_CHAIN_QUERY) -> None:
        self.cases = cases if cases is not None else default_catalog()
        self.shared_chain_query = shared_chain_query

    async def run(self, client: AssetChainClient, sink: Optional[ProgressSink] = None) -> Report:
        t0 = time.time()
        report = Report()
        runner = DiagnosticRunner(sink)

        unverified = unverified_states(self.cases)
        if unverified:
            logger.info(
                "%d expected states are not yet verified against the ledger: %s",
                len(unverified),
                ", ".join(s.mint_block_hash for s in unverified),
            )

        ctx = CaseContext(client=client, shared_chain=await fetch_shared_chain(client, self.shared_chain_query))

        for case in self.cases:
            await runner.run(case.name, report, lambda case=case: case.check(ctx))

        logger.info(
            "diagnose %s: %d/%d passed in %dms",
            client.base_url,
            len(report) - len(report.failed()),
            len(report),
            int((time.time() - t0) * 1000),
        )
        return report


async def diagnose(
    base_url: str,
    sink: Optional[ProgressSink] = None,
    client: Optional[AssetChainClient] = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
) -> Report:
    """
    Runs the full catalog against the API at base_url.

    Raises InvalidBaseAddress before any case runs if base_url is unusable.
    Every other failure ends up inside the returned report. An injected client
    is used as-is and stays open.
    """
    parse_base_url(base_url)
    suite = DiagnosticSuite()
    if client is not None:
        return await suite.run(client, sink)

    async with AssetChainClient(base_url, timeout_s=timeout_s) as owned:
        return await suite.run(owned, sink)
