"""
Data models for ledger API output.

TransactionRecord is the normalized form of one item in a txlist page. The
API returns every field as a string; ints and the error flag are parsed here
so downstream code never touches raw payloads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from backend_walletgraph.core.exceptions import MalformedRecordError


def normalize_address(address: str) -> str:
    """Canonical AddressKey: stripped, lowercase hex string."""
    return (address or "").strip().lower()


def _to_int(item: dict[str, Any], key: str) -> int:
    value = item.get(key)
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise MalformedRecordError(
            f"Ledger item {item.get('hash') or '<no hash>'} has invalid {key}: {value!r}"
        ) from None


@dataclass(frozen=True)
class TransactionRecord:
    """
    One ledger transaction as returned by the txlist endpoint.

    block_height is the ordering key; value is a decimal string (wei) kept
    verbatim to avoid float rounding.
    """

    block_height: int
    timestamp: int
    hash: str
    from_address: str
    to_address: str
    value: str = "0"
    gas: str = "0"
    gas_price: str = "0"
    is_error: bool = False

    @classmethod
    def from_api_item(cls, item: dict[str, Any]) -> "TransactionRecord":
        """Build from a single txlist result item. Contract creations use contractAddress as to."""
        if not isinstance(item, dict):
            raise MalformedRecordError(f"Ledger item is not an object: {item!r}")
        from_address = str(item.get("from") or "").strip()
        to_address = str(item.get("to") or "").strip() or str(item.get("contractAddress") or "").strip()
        tx_hash = str(item.get("hash") or "")
        if not from_address or not to_address:
            raise MalformedRecordError(f"Ledger item {tx_hash or '<no hash>'} is missing from/to")
        return cls(
            block_height=_to_int(item, "blockNumber"),
            timestamp=_to_int(item, "timeStamp"),
            hash=tx_hash,
            from_address=from_address,
            to_address=to_address,
            value=str(item.get("value") or "0"),
            gas=str(item.get("gas") or "0"),
            gas_price=str(item.get("gasPrice") or "0"),
            is_error=str(item.get("isError") or "0").strip() == "1",
        )
