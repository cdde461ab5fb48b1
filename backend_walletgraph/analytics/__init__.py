"""
Wallet graph analytics.

Aggregates a wallet's transaction history into a weighted interaction graph.
Modules: wallet_graph (aggregation), pipeline (resolve -> fetch -> build).
"""

from backend_walletgraph.analytics.wallet_graph import (
    Graph,
    GraphEdge,
    GraphNode,
    TransactionAggregator,
    build_interaction_graph,
)
from backend_walletgraph.analytics.pipeline import build_wallet_graph, run_wallet_graph

__all__ = [
    "Graph",
    "GraphEdge",
    "GraphNode",
    "TransactionAggregator",
    "build_interaction_graph",
    "build_wallet_graph",
    "run_wallet_graph",
]
