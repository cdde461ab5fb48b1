"""
Ledger API access: paginated transaction history for one wallet.

Fetches txlist pages sequentially, normalizes items into TransactionRecord
and reports progress to an injected sink.
"""

from backend_walletgraph.ledger.fetcher import LedgerPageFetcher
from backend_walletgraph.ledger.models import TransactionRecord, normalize_address
from backend_walletgraph.ledger.progress import (
    LoggingProgressSink,
    NullProgressSink,
    ProgressEvent,
    ProgressLog,
    ProgressSink,
)

__all__ = [
    "LedgerPageFetcher",
    "LoggingProgressSink",
    "NullProgressSink",
    "ProgressEvent",
    "ProgressLog",
    "ProgressSink",
    "TransactionRecord",
    "normalize_address",
]
