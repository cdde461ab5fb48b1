"""
Progress reporting for long-running wallet queries.

The fetcher and aggregator emit human-readable progress strings to an
injected ProgressSink; they never read from it. ProgressLog keeps an ordered
in-memory list (served back by the API), LoggingProgressSink forwards to
structlog, NullProgressSink drops everything.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

from backend_walletgraph.walletgraph_logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProgressEvent:
    id: int
    message: str
    timestamp: datetime

    def to_dict(self) -> dict:
        return {"id": self.id, "message": self.message, "timestamp": self.timestamp.isoformat()}


class ProgressSink(Protocol):
    def emit(self, message: str) -> None: ...


class NullProgressSink:
    def emit(self, message: str) -> None:
        return None


class LoggingProgressSink:
    """Forward progress messages to structlog as wallet_graph_progress events."""

    def __init__(self, **context: object):
        self._logger = logger.bind(**context) if context else logger

    def emit(self, message: str) -> None:
        self._logger.info("wallet_graph_progress", progress=message)


class ProgressLog:
    """Ordered, per-query progress log. Not shared between queries."""

    def __init__(self) -> None:
        self._events: list[ProgressEvent] = []

    def emit(self, message: str) -> None:
        self._events.append(
            ProgressEvent(id=len(self._events), message=message, timestamp=datetime.now(timezone.utc))
        )

    @property
    def events(self) -> list[ProgressEvent]:
        return list(self._events)

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self._events]
