"""
Structured logging for wallet graph queries.

Every record carries event_type (snake_case, e.g. ledger_page_fetched,
wallet_graph_built), an ISO timestamp, the level and the module name; query
context (wallet, page, count) travels as keyword fields. Records go to stderr
so the CLI can print graph JSON on stdout.

Ledger URLs carry the API key as an `apikey` query parameter and httpx puts
the full URL into its error messages, so every string field is scrubbed of
`apikey=...` before rendering. redact_api_key() applies the same scrubbing
to text that leaves the process by other routes (progress events, HTTP errors).

Uses only Python stdlib logging and structlog; no backend_walletgraph imports to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

# json (default) or console
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()

_APIKEY_PARAM_RE = re.compile(r"(apikey=)[^&\s'\"]+", re.IGNORECASE)


def redact_api_key(text: str) -> str:
    """Replace the value of any apikey=... query parameter in text with ***."""
    return _APIKEY_PARAM_RE.sub(r"\1***", text)


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _event_type(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def _scrub_api_keys(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    for key, value in event_dict.items():
        if isinstance(value, str) and "apikey=" in value.lower():
            event_dict[key] = redact_api_key(value)
    return event_dict


def configure_structlog(log_format: str | None = None, level: int | None = None) -> None:
    """Configure structlog for JSON (LOG_FORMAT=json) or console output at LOG_LEVEL."""
    fmt = (log_format or LOG_FORMAT).strip().lower()
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        _add_timestamp,
        _event_type,
        _scrub_api_keys,
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level if level is not None else LOG_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger bound to the module name.

        logger = get_logger(__name__)
        logger.info("ledger_page_fetched", wallet=addr, page=2, count=100)
    """
    return structlog.get_logger(name).bind(logger=name)
