"""
Environment variable loading and validation for the wallet graph backend.

- BASESCAN_API_KEY: ledger API key (falls back to ETHERSCAN_API_KEY)
- LEDGER_API_URL: Etherscan-compatible endpoint (default: Basescan)
- LEDGER_PAGE_SIZE: records requested per page (offset)
- LEDGER_END_BLOCK: endblock query parameter
- LEDGER_REQUEST_TIMEOUT: per-request timeout in seconds
- LEDGER_STRICT_STATUS: raise on status != "1" instead of ending pagination
- NAME_REGISTRY_PATH: optional JSON mapping of names to addresses
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from backend_walletgraph.walletgraph_logging import get_logger

logger = get_logger(__name__)

# Project root: config is backend_walletgraph/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

BASESCAN_API_URL = "https://api.basescan.org/api"
DEFAULT_PAGE_SIZE = 100
DEFAULT_END_BLOCK = 99999999
DEFAULT_REQUEST_TIMEOUT = 30.0

_TRUTHY = ("1", "true", "yes", "on")


def load_walletgraph_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env."""
    load_dotenv(_ENV_PATH)


def _int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("config_invalid_int", var=name, value=raw, default=default)
        return default
    if value < 1:
        logger.warning("config_non_positive_int", var=name, value=value, default=default)
        return default
    return value


def get_api_key() -> str:
    """Return BASESCAN_API_KEY, or ETHERSCAN_API_KEY, or empty string."""
    load_walletgraph_env()
    return (os.getenv("BASESCAN_API_KEY") or os.getenv("ETHERSCAN_API_KEY") or "").strip()


def get_ledger_api_url() -> str:
    load_walletgraph_env()
    return (os.getenv("LEDGER_API_URL") or "").strip() or BASESCAN_API_URL


def get_page_size() -> int:
    load_walletgraph_env()
    return _int_env("LEDGER_PAGE_SIZE", DEFAULT_PAGE_SIZE)


def get_end_block() -> int:
    load_walletgraph_env()
    return _int_env("LEDGER_END_BLOCK", DEFAULT_END_BLOCK)


def get_request_timeout() -> float:
    """Per-request timeout in seconds; invalid or non-positive values fall back to the default."""
    load_walletgraph_env()
    raw = (os.getenv("LEDGER_REQUEST_TIMEOUT") or "").strip()
    if not raw:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logger.warning("config_invalid_float", var="LEDGER_REQUEST_TIMEOUT", value=raw)
        return DEFAULT_REQUEST_TIMEOUT
    return value if value > 0 else DEFAULT_REQUEST_TIMEOUT


def use_strict_status() -> bool:
    """Return True when LEDGER_STRICT_STATUS is set to a truthy value."""
    load_walletgraph_env()
    return (os.getenv("LEDGER_STRICT_STATUS") or "").strip().lower() in _TRUTHY


def get_name_registry_path() -> Path | None:
    load_walletgraph_env()
    raw = (os.getenv("NAME_REGISTRY_PATH") or "").strip()
    return Path(raw) if raw else None


def mask_api_key(key: str) -> str:
    """Mask an API key for log output: keep the first 4 chars."""
    if not key:
        return ""
    return key[:4] + "***"
