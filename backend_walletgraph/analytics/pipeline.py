"""
Wallet graph pipeline: resolve -> fetch all pages -> aggregate.

Single entrypoint for the CLI and API server. Resolution failures abort the
query before the fetcher is touched; fetch failures abort before aggregation,
so no partial graph is ever returned.
"""

from __future__ import annotations

import asyncio

from backend_walletgraph.analytics.wallet_graph import Graph, TransactionAggregator
from backend_walletgraph.config import Settings, get_settings
from backend_walletgraph.config.env import DEFAULT_PAGE_SIZE
from backend_walletgraph.ledger.fetcher import LedgerPageFetcher
from backend_walletgraph.ledger.progress import NullProgressSink, ProgressSink
from backend_walletgraph.resolver.names import NameResolver, RegistryFileResolver, resolve_wallet_input
from backend_walletgraph.walletgraph_logging import get_logger

logger = get_logger(__name__)


async def build_wallet_graph(
    identifier: str,
    *,
    fetcher: LedgerPageFetcher,
    resolver: NameResolver | None = None,
    progress: ProgressSink | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    cancel_event: asyncio.Event | None = None,
) -> Graph:
    """
    Build the interaction graph for one wallet.

    progress, when given, replaces the fetcher's own sink for this query and
    also receives the aggregator's events.
    """
    address = resolve_wallet_input(identifier, resolver)
    sink = progress or NullProgressSink()
    if progress is not None:
        fetcher = fetcher.with_progress(progress)

    logger.info("wallet_graph_pipeline_start", wallet=address, page_size=page_size)
    transactions = await fetcher.fetch_all(address, page_size, cancel_event=cancel_event)
    return TransactionAggregator(sink).build(transactions, address)


def resolver_from_settings(settings: Settings) -> NameResolver | None:
    if settings.name_registry_path is None:
        return None
    return RegistryFileResolver(settings.name_registry_path)


def run_wallet_graph(
    identifier: str,
    settings: Settings | None = None,
    *,
    resolver: NameResolver | None = None,
    progress: ProgressSink | None = None,
    page_size: int | None = None,
) -> Graph:
    """Synchronous wrapper: build fetcher and resolver from settings and run one query."""
    settings = settings or get_settings()
    if resolver is None:
        resolver = resolver_from_settings(settings)
    fetcher = LedgerPageFetcher.from_settings(settings)
    return asyncio.run(
        build_wallet_graph(
            identifier,
            fetcher=fetcher,
            resolver=resolver,
            progress=progress,
            page_size=page_size or settings.page_size,
        )
    )
