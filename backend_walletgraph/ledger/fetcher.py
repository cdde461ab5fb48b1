"""
Ledger page fetcher: drain a wallet's full txlist history from an
Etherscan-compatible API (Basescan by default).

Pagination is an explicit state machine:

    Fetching(page, accumulated) --full page--> Fetching(page + 1, accumulated)
    Fetching(page, accumulated) --short page--> Done(accumulated)
    Fetching(page, accumulated) --error------> Failed(error)

A page holding strictly fewer than page_size records (zero included) is the
only exhaustion signal; the API never reports a total. Pages are fetched one
at a time because the next request depends on the size of the previous one.
Any failure discards everything fetched so far. No retries.

A status != "1" answer is treated as an empty page by default, which ends
pagination even mid-history. strict_status=True raises APIStatusError instead,
except for the API's genuine "No transactions found" answer.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

import httpx

from backend_walletgraph.config.env import (
    BASESCAN_API_URL,
    DEFAULT_END_BLOCK,
    DEFAULT_PAGE_SIZE,
    DEFAULT_REQUEST_TIMEOUT,
    mask_api_key,
)
from backend_walletgraph.core.exceptions import (
    APIStatusError,
    FetchCancelledError,
    TransportError,
    WalletGraphError,
)
from backend_walletgraph.ledger.models import TransactionRecord
from backend_walletgraph.ledger.progress import NullProgressSink, ProgressSink
from backend_walletgraph.walletgraph_logging import get_logger, redact_api_key

logger = get_logger(__name__)

STATUS_OK = "1"
NO_TRANSACTIONS_MESSAGE = "No transactions found"


@dataclass
class Fetching:
    page: int
    accumulated: list[TransactionRecord] = field(default_factory=list)


@dataclass
class Done:
    accumulated: list[TransactionRecord]


@dataclass
class Failed:
    error: WalletGraphError


PaginationState = Fetching | Done | Failed


class LedgerPageFetcher:
    """
    Retrieve txlist pages for an address. Knows nothing about graphs.

    Pass an httpx.AsyncClient to share a connection pool (or a MockTransport
    in tests); otherwise each fetch_all / fetch_page call opens and closes
    its own client.
    """

    def __init__(
        self,
        api_key: str = "",
        base_url: str = BASESCAN_API_URL,
        *,
        client: httpx.AsyncClient | None = None,
        progress: ProgressSink | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        end_block: int = DEFAULT_END_BLOCK,
        strict_status: bool = False,
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._client = client
        self._progress = progress or NullProgressSink()
        self._timeout = timeout
        self._end_block = end_block
        self._strict_status = strict_status

    @classmethod
    def from_settings(cls, settings: Any, **kwargs: Any) -> "LedgerPageFetcher":
        """Build from a config.Settings object; kwargs (client, progress) pass through."""
        return cls(
            api_key=settings.api_key,
            base_url=settings.api_url,
            timeout=settings.request_timeout,
            end_block=settings.end_block,
            strict_status=settings.strict_status,
            **kwargs,
        )

    def with_progress(self, progress: ProgressSink) -> "LedgerPageFetcher":
        """Copy of this fetcher reporting to another sink (same client and settings)."""
        return LedgerPageFetcher(
            api_key=self._api_key,
            base_url=self._base_url,
            client=self._client,
            progress=progress,
            timeout=self._timeout,
            end_block=self._end_block,
            strict_status=self._strict_status,
        )

    def _params(self, address: str, page: int, page_size: int) -> dict[str, str]:
        return {
            "module": "account",
            "action": "txlist",
            "address": address,
            "startblock": "0",
            "endblock": str(self._end_block),
            "page": str(page),
            "offset": str(page_size),
            "sort": "asc",
            "apikey": self._api_key,
        }

    async def _request_page(
        self,
        client: httpx.AsyncClient,
        address: str,
        page: int,
        page_size: int,
        fetched_so_far: int = 0,
    ) -> list[TransactionRecord]:
        self._progress.emit(
            f"Fetching transactions for {address} (page {page}, {fetched_so_far} fetched so far)..."
        )
        try:
            resp = await client.get(
                self._base_url,
                params=self._params(address, page, page_size),
                timeout=self._timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            # httpx error text includes the request URL, apikey and all
            error = redact_api_key(str(e))
            self._progress.emit(f"Failed to fetch transactions: {error}")
            logger.warning("ledger_transport_failed", wallet=address, page=page, error=error)
            raise TransportError(f"Page {page} request failed: {error}", page=page) from e
        except ValueError as e:
            self._progress.emit(f"Failed to fetch transactions: {e}")
            logger.warning("ledger_invalid_json", wallet=address, page=page, error=str(e))
            raise TransportError(f"Page {page} returned an unreadable body", page=page) from e
        if not isinstance(data, dict):
            raise TransportError(f"Page {page} returned an unexpected payload", page=page)

        status = str(data.get("status", ""))
        message = str(data.get("message", ""))
        if status != STATUS_OK:
            self._progress.emit(f"Error: {message}")
            if self._strict_status and message != NO_TRANSACTIONS_MESSAGE:
                logger.warning("ledger_status_error", wallet=address, page=page, status=status, api_message=message)
                raise APIStatusError(status, message, page=page)
            logger.info("ledger_status_not_ok", wallet=address, page=page, status=status, api_message=message)
            return []

        result = data.get("result") or []
        if not isinstance(result, list):
            raise TransportError(f"Page {page} result is not a list", page=page)
        records = [TransactionRecord.from_api_item(item) for item in result]
        self._progress.emit(f"Successfully fetched {len(records)} transactions")
        logger.debug("ledger_page_fetched", wallet=address, page=page, count=len(records))
        return records

    async def fetch_page(self, address: str, page: int, page_size: int = DEFAULT_PAGE_SIZE) -> list[TransactionRecord]:
        """Fetch a single page (1-based). Returns between 0 and page_size records."""
        if self._client is not None:
            return await self._request_page(self._client, address, page, page_size)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await self._request_page(client, address, page, page_size)

    async def _step(
        self,
        client: httpx.AsyncClient,
        state: Fetching,
        address: str,
        page_size: int,
        cancel_event: asyncio.Event | None,
    ) -> PaginationState:
        if cancel_event is not None and cancel_event.is_set():
            return Failed(FetchCancelledError(state.page))
        try:
            records = await self._request_page(client, address, state.page, page_size, len(state.accumulated))
        except WalletGraphError as e:
            return Failed(e)
        state.accumulated.extend(records)
        if len(records) < page_size:
            return Done(state.accumulated)
        self._progress.emit(
            f"Fetched page {state.page}, continuing... ({len(state.accumulated)} transactions so far)"
        )
        return Fetching(page=state.page + 1, accumulated=state.accumulated)

    async def _drain(
        self,
        client: httpx.AsyncClient,
        address: str,
        page_size: int,
        cancel_event: asyncio.Event | None,
    ) -> list[TransactionRecord]:
        state: PaginationState = Fetching(page=1)
        pages = 0
        while isinstance(state, Fetching):
            pages += 1
            state = await self._step(client, state, address, page_size, cancel_event)

        if isinstance(state, Failed):
            logger.warning(
                "ledger_fetch_aborted",
                wallet=address,
                pages=pages,
                error_code=state.error.code,
                error=str(state.error),
            )
            raise state.error

        self._progress.emit(f"Completed fetching all transactions: {len(state.accumulated)} total")
        logger.info("ledger_fetch_completed", wallet=address, pages=pages, total=len(state.accumulated))
        return state.accumulated

    async def fetch_all(
        self,
        address: str,
        page_size: int = DEFAULT_PAGE_SIZE,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> list[TransactionRecord]:
        """
        Drain every page for address, starting at page 1, in arrival order.

        Raises TransportError / APIStatusError / MalformedRecordError on the
        first failing page and FetchCancelledError when cancel_event is set
        before a request; nothing partial is returned.
        """
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self._progress.emit(f"Starting to fetch all transactions for {address}")
        logger.info(
            "ledger_fetch_started",
            wallet=address,
            page_size=page_size,
            api_url=self._base_url,
            api_key=mask_api_key(self._api_key),
        )
        if self._client is not None:
            return await self._drain(self._client, address, page_size, cancel_event)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await self._drain(client, address, page_size, cancel_event)
