"""
Structured logging for the wallet graph backend.

Use get_logger() in all modules for aggregation-friendly JSON output.
"""

from backend_walletgraph.walletgraph_logging.logger import configure_structlog, get_logger, redact_api_key

__all__ = ["configure_structlog", "get_logger", "redact_api_key"]
