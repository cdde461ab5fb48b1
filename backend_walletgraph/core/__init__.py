"""
Core utilities: domain exceptions shared by ledger, analytics, CLI and API server.
"""

from backend_walletgraph.core.exceptions import (
    APIStatusError,
    FetchCancelledError,
    MalformedRecordError,
    ResolutionError,
    TransportError,
    WalletGraphError,
)

__all__ = [
    "APIStatusError",
    "FetchCancelledError",
    "MalformedRecordError",
    "ResolutionError",
    "TransportError",
    "WalletGraphError",
]
