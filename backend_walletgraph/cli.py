"""
Build a wallet interaction graph from the command line.

How to run:
    From project root (with .env configured):
        python -m backend_walletgraph 0xabc... --output graph.json
        python -m backend_walletgraph vitalik.eth --names names.json

Required env vars:
    BASESCAN_API_KEY    (or ETHERSCAN_API_KEY; LEDGER_API_URL for other chains)

Output: graph JSON {"nodes": [...], "links": [...]} on stdout or --output.
Progress and structured logs go to stderr.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from pathlib import Path

from backend_walletgraph.analytics.pipeline import run_wallet_graph
from backend_walletgraph.config import get_settings
from backend_walletgraph.core.exceptions import WalletGraphError
from backend_walletgraph.ledger.progress import LoggingProgressSink
from backend_walletgraph.resolver.names import StaticNameResolver
from backend_walletgraph.walletgraph_logging import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="walletgraph",
        description="Fetch a wallet's full transaction history and print its interaction graph as JSON.",
    )
    parser.add_argument("wallet", help="Wallet address (0x...) or ENS-style name")
    parser.add_argument("--page-size", type=int, default=None, help="Records per ledger page (default: LEDGER_PAGE_SIZE or 100)")
    parser.add_argument(
        "--strict-status",
        action="store_true",
        help="Fail on ledger API status errors instead of ending pagination",
    )
    parser.add_argument("--names", type=Path, default=None, help="JSON file mapping names to addresses")
    parser.add_argument("--output", "-o", type=Path, default=None, help="Write graph JSON here instead of stdout")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.page_size is not None and args.page_size < 1:
        print("--page-size must be >= 1", file=sys.stderr)
        return 1

    settings = get_settings()
    if args.strict_status:
        settings = dataclasses.replace(settings, strict_status=True)

    try:
        resolver = StaticNameResolver.from_file(args.names) if args.names else None
        graph = run_wallet_graph(
            args.wallet,
            settings,
            resolver=resolver,
            progress=LoggingProgressSink(wallet=args.wallet),
            page_size=args.page_size,
        )
    except WalletGraphError as e:
        logger.error("walletgraph_cli_failed", wallet=args.wallet, error_code=e.code, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    payload = json.dumps(graph.to_dict(), indent=args.indent)
    if args.output:
        args.output.write_text(payload + "\n", encoding="utf-8")
        logger.info("walletgraph_cli_written", path=str(args.output), nodes=len(graph.nodes), links=len(graph.edges))
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
