"""
Application settings.

Responsibilities:
- Collect ledger API, pagination and resolver settings from env (.env aware).
- Expose them as one frozen Settings object for CLI, pipeline and API server.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from backend_walletgraph.config import env


@dataclass(frozen=True)
class Settings:
    api_key: str
    api_url: str
    page_size: int
    end_block: int
    request_timeout: float
    strict_status: bool
    name_registry_path: Path | None


def get_settings() -> Settings:
    """
    Return the current application settings.

    Read fresh on every call so tests can adjust env with monkeypatch.
    """
    return Settings(
        api_key=env.get_api_key(),
        api_url=env.get_ledger_api_url(),
        page_size=env.get_page_size(),
        end_block=env.get_end_block(),
        request_timeout=env.get_request_timeout(),
        strict_status=env.use_strict_status(),
        name_registry_path=env.get_name_registry_path(),
    )
