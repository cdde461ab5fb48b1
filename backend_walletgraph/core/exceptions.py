"""
Application-level exceptions.

Every failure surfaced by the wallet graph pipeline derives from
WalletGraphError and carries a short machine-readable code used by the CLI
and API server. No layer retries; an error aborts the query in progress.
"""

from __future__ import annotations


class WalletGraphError(Exception):
    """Base class for wallet graph failures."""

    code = "wallet_graph_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ResolutionError(WalletGraphError):
    """Identifier could not be mapped to an address. Raised before any fetch."""

    code = "resolution_failed"

    def __init__(self, identifier: str, message: str | None = None):
        super().__init__(message or f"Could not resolve {identifier!r} to an address")
        self.identifier = identifier


class TransportError(WalletGraphError):
    """A page request failed at the network layer (or returned an unreadable body)."""

    code = "transport_failed"

    def __init__(self, message: str, page: int | None = None):
        super().__init__(message)
        self.page = page


class APIStatusError(WalletGraphError):
    """Ledger API answered with status != "1" and strict status handling is on."""

    code = "api_status"

    def __init__(self, status: str, api_message: str, page: int | None = None):
        super().__init__(f"Ledger API status {status!r} on page {page}: {api_message}")
        self.status = status
        self.api_message = api_message
        self.page = page


class MalformedRecordError(WalletGraphError, ValueError):
    """A ledger item lacks a usable from/to address, block number or timestamp."""

    code = "malformed_record"


class FetchCancelledError(WalletGraphError):
    """Pagination was stopped by its cancel event before completing."""

    code = "cancelled"

    def __init__(self, page: int):
        super().__init__(f"Fetch cancelled before page {page}")
        self.page = page
