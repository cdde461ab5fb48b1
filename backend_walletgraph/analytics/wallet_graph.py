"""
Wallet interaction graph for visualization.

Aggregates a wallet's full transaction list into a weighted, directed graph:
one node per address seen (plus the queried wallet, always seeded), one edge
per distinct ordered (from, to) pair weighted by transaction count. A node's
interactions is the sum of weights on every edge touching it, so a self-edge
counts twice toward its node.

The result depends only on the multiset of (from, to) pairs: any order of the
same transactions yields the same nodes and edges. Duplicate hashes are not
collapsed. Output ordering is incidental.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from backend_walletgraph.ledger.models import TransactionRecord, normalize_address
from backend_walletgraph.ledger.progress import NullProgressSink, ProgressSink
from backend_walletgraph.walletgraph_logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GraphNode:
    address: str
    is_central: bool
    interactions: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.address,
            "address": self.address,
            "isCentral": self.is_central,
            "interactions": self.interactions,
        }


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str
    weight: int

    def to_dict(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target, "value": self.weight}


@dataclass(frozen=True)
class Graph:
    central_address: str
    nodes: tuple[GraphNode, ...]
    edges: tuple[GraphEdge, ...]

    def node(self, address: str) -> GraphNode | None:
        key = normalize_address(address)
        for n in self.nodes:
            if n.address == key:
                return n
        return None

    def edge_weights(self) -> dict[tuple[str, str], int]:
        return {(e.source, e.target): e.weight for e in self.edges}

    def interactions(self) -> dict[str, int]:
        return {n.address: n.interactions for n in self.nodes}

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Wire form consumed by the force-graph front end: {nodes, links}."""
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [e.to_dict() for e in self.edges],
        }


class TransactionAggregator:
    """
    Build a Graph from one query's transactions.

    Stateless between calls: every build() owns its own address set and
    edge/interaction maps, so one aggregator can serve concurrent queries.
    """

    def __init__(self, progress: ProgressSink | None = None):
        self._progress = progress or NullProgressSink()

    def build(self, transactions: Iterable[TransactionRecord], central_address: str) -> Graph:
        self._progress.emit("Processing transactions for graph visualization...")
        central = normalize_address(central_address)

        addresses: set[str] = {central}
        edge_weights: dict[tuple[str, str], int] = {}
        tx_count = 0
        for tx in transactions:
            source = normalize_address(tx.from_address)
            target = normalize_address(tx.to_address)
            addresses.add(source)
            addresses.add(target)
            pair = (source, target)
            edge_weights[pair] = edge_weights.get(pair, 0) + 1
            tx_count += 1

        interactions: dict[str, int] = {address: 0 for address in addresses}
        for (source, target), weight in edge_weights.items():
            interactions[source] += weight
            interactions[target] += weight

        nodes = tuple(
            GraphNode(address=address, is_central=address == central, interactions=interactions[address])
            for address in addresses
        )
        edges = tuple(
            GraphEdge(source=source, target=target, weight=weight)
            for (source, target), weight in edge_weights.items()
        )

        self._progress.emit(f"Graph data prepared: {len(nodes)} nodes, {len(edges)} links")
        logger.info(
            "wallet_graph_built",
            wallet=central,
            transactions=tx_count,
            nodes=len(nodes),
            links=len(edges),
            self_edges=sum(1 for e in edges if e.source == e.target),
        )
        return Graph(central_address=central, nodes=nodes, edges=edges)


def build_interaction_graph(
    transactions: Iterable[TransactionRecord],
    central_address: str,
    progress: ProgressSink | None = None,
) -> Graph:
    """Aggregate transactions into a Graph centred on central_address."""
    return TransactionAggregator(progress).build(transactions, central_address)
