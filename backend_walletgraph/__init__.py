"""
Backend WalletGraph: wallet interaction graphs from paginated ledger history.

Fetches a wallet's full transaction list page by page from an
Etherscan-compatible API and aggregates it into a weighted, directed graph
of address interactions for visualization. Modular layout: ledger (fetch),
analytics (aggregate), resolver (name input), API server and CLI.
"""

__version__ = "0.1.0"
