"""
Pytest fixtures for wallet graph tests. The ledger API is mocked with
httpx.MockTransport so no test touches the network.
"""

from __future__ import annotations

import httpx
import pytest

WALLET_A = "0x" + "a" * 40
WALLET_B = "0x" + "b" * 40
WALLET_C = "0x" + "c" * 40


def make_item(frm: str, to: str, n: int = 0, tx_hash: str | None = None, **extra: str) -> dict:
    """txlist result item with the API's string-typed fields."""
    item = {
        "blockNumber": str(1000 + n),
        "timeStamp": str(1700000000 + n),
        "hash": tx_hash or f"0x{n:064x}",
        "from": frm,
        "to": to,
        "value": "1000000000000000",
        "gas": "21000",
        "gasPrice": "1000000",
        "isError": "0",
        "contractAddress": "",
    }
    item.update(extra)
    return item


def make_page(count: int, start: int = 0, frm: str = WALLET_A, to: str = WALLET_B) -> list[dict]:
    return [make_item(frm, to, n=start + i) for i in range(count)]


class LedgerStub:
    """
    Fake txlist endpoint. pages[i] answers page i + 1: a list of items
    (wrapped as status "1"), a raw response dict, an int HTTP status, or an
    exception to raise. Pages past the end answer "No transactions found".
    """

    def __init__(self, pages: list | None = None):
        self.pages = list(pages or [])
        self.requests: list[httpx.Request] = []

    @property
    def pages_requested(self) -> list[int]:
        return [int(r.url.params["page"]) for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        page = int(request.url.params["page"])
        body = self.pages[page - 1] if page <= len(self.pages) else []
        if isinstance(body, Exception):
            raise body
        if isinstance(body, int):
            return httpx.Response(body, json={"status": "0", "message": "NOTOK", "result": "server error"})
        if isinstance(body, dict):
            return httpx.Response(200, json=body)
        if not body:
            return httpx.Response(200, json={"status": "0", "message": "No transactions found", "result": []})
        return httpx.Response(200, json={"status": "1", "message": "OK", "result": body})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def ledger_stub():
    """Factory: ledger_stub([page1_items, page2_items, ...]) -> LedgerStub."""
    return LedgerStub


@pytest.fixture
def walletgraph_env(tmp_path, monkeypatch):
    """Isolate settings from the developer's env and .env file."""
    for var in (
        "BASESCAN_API_KEY",
        "ETHERSCAN_API_KEY",
        "LEDGER_API_URL",
        "LEDGER_PAGE_SIZE",
        "LEDGER_END_BLOCK",
        "LEDGER_REQUEST_TIMEOUT",
        "LEDGER_STRICT_STATUS",
        "NAME_REGISTRY_PATH",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr("backend_walletgraph.config.env._ENV_PATH", tmp_path / ".env")
    return monkeypatch
