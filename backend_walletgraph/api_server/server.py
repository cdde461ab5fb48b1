"""
FastAPI server: wallet interaction graph over HTTP.

Exposes GET /graph/{identifier} returning the graph (nodes/links) plus the
progress log of that query. Computes on request; nothing is persisted.
Config via env (see backend_walletgraph.config).

Run: uvicorn backend_walletgraph.api_server.server:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from backend_walletgraph import __version__
from backend_walletgraph.analytics.pipeline import build_wallet_graph
from backend_walletgraph.config import get_settings
from backend_walletgraph.core.exceptions import (
    APIStatusError,
    ResolutionError,
    TransportError,
    WalletGraphError,
)
from backend_walletgraph.ledger.fetcher import LedgerPageFetcher
from backend_walletgraph.ledger.progress import ProgressLog
from backend_walletgraph.resolver.names import NameResolver, RegistryFileResolver
from backend_walletgraph.walletgraph_logging import get_logger

logger = get_logger(__name__)

MAX_PAGE_SIZE = 10000


# -----------------------------------------------------------------------------
# Dependencies
# -----------------------------------------------------------------------------

def get_fetcher() -> LedgerPageFetcher:
    return LedgerPageFetcher.from_settings(get_settings())


@lru_cache(maxsize=8)
def _registry_resolver(path: Path) -> RegistryFileResolver:
    return RegistryFileResolver(path)


def get_resolver() -> NameResolver | None:
    """Process-wide resolver for NAME_REGISTRY_PATH; the file is read on the first name lookup."""
    path = get_settings().name_registry_path
    return _registry_resolver(path) if path is not None else None


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------

class NodeModel(BaseModel):
    id: str
    address: str
    isCentral: bool
    interactions: int = Field(..., ge=0)


class LinkModel(BaseModel):
    source: str
    target: str
    value: int = Field(..., ge=1, description="Number of transactions from source to target")


class ProgressModel(BaseModel):
    id: int
    message: str
    timestamp: str


class GraphResponse(BaseModel):
    """GET /graph/{identifier} response."""

    address: str = Field(..., description="Resolved central address (lowercase)")
    nodes: list[NodeModel]
    links: list[LinkModel]
    progress: list[ProgressModel] = Field(default_factory=list, description="Progress log of this query")


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------

app = FastAPI(
    title="Backend WalletGraph API",
    description="Wallet interaction graphs built from paginated ledger history.",
    version=__version__,
)


def _status_for(error: WalletGraphError) -> int:
    if isinstance(error, ResolutionError):
        return 404
    if isinstance(error, (APIStatusError, TransportError)):
        return 502
    return 500


@app.get("/health")
def health() -> dict[str, Any]:
    return {"status": "ok", "version": __version__}


@app.get("/graph/{identifier}", response_model=GraphResponse)
async def get_graph(
    identifier: str,
    page_size: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
    fetcher: LedgerPageFetcher = Depends(get_fetcher),
    resolver: NameResolver | None = Depends(get_resolver),
):
    """
    Resolve identifier, drain its ledger history and return the interaction graph.

    404 when the identifier cannot be resolved, 502 when the ledger API fails.
    """
    progress = ProgressLog()
    try:
        graph = await build_wallet_graph(
            identifier,
            fetcher=fetcher,
            resolver=resolver,
            progress=progress,
            page_size=page_size or get_settings().page_size,
        )
    except WalletGraphError as e:
        status = _status_for(e)
        logger.warning("graph_request_failed", identifier=identifier, error_code=e.code, status=status)
        raise HTTPException(status_code=status, detail={"code": e.code, "message": str(e)}) from e

    data = graph.to_dict()
    return GraphResponse(
        address=graph.central_address,
        nodes=data["nodes"],
        links=data["links"],
        progress=[ProgressModel(**ev.to_dict()) for ev in progress.events],
    )
