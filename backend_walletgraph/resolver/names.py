"""
Wallet input resolution: hex address or human-readable name → AddressKey.

Name lookup itself (ENS and the like) is an external collaborator behind the
NameResolver protocol. StaticNameResolver covers the offline case with a
name → address mapping (optionally loaded from a JSON file).
Resolution always happens before any ledger request.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Protocol

from backend_walletgraph.core.exceptions import ResolutionError
from backend_walletgraph.ledger.models import normalize_address
from backend_walletgraph.walletgraph_logging import get_logger

logger = get_logger(__name__)

ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
ENS_NAME_RE = re.compile(r"^[a-zA-Z0-9-]+\.eth$")


class NameResolver(Protocol):
    def resolve(self, name: str) -> str | None: ...


def is_address(value: str) -> bool:
    return bool(value and ADDRESS_RE.match(value.strip()))


def is_ens_name(value: str) -> bool:
    """True if value looks like an ENS name (label.eth)."""
    return bool(value and ENS_NAME_RE.match(value.strip()))


class StaticNameResolver:
    """Resolve names from a fixed mapping. Lookups are case-insensitive."""

    def __init__(self, names: dict[str, str] | None = None):
        self._names = {k.strip().lower(): v.strip() for k, v in (names or {}).items() if k and v}

    @classmethod
    def from_file(cls, path: Path | str) -> "StaticNameResolver":
        """Load a JSON object {name: address}. Raises ResolutionError if the file is unusable."""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ResolutionError(str(path), f"Cannot load name registry {path}: {e}") from e
        if not isinstance(data, dict):
            raise ResolutionError(str(path), f"Name registry {path} must be a JSON object")
        return cls({str(k): str(v) for k, v in data.items()})

    def resolve(self, name: str) -> str | None:
        return self._names.get((name or "").strip().lower())


class RegistryFileResolver:
    """
    StaticNameResolver over a JSON registry file, loaded on the first lookup.

    An unusable file raises ResolutionError from resolve(), so only name
    queries fail; plain address queries never read the registry. A failed
    load is retried on the next lookup.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._loaded: StaticNameResolver | None = None

    def resolve(self, name: str) -> str | None:
        if self._loaded is None:
            self._loaded = StaticNameResolver.from_file(self.path)
            logger.info("name_registry_loaded", path=str(self.path))
        return self._loaded.resolve(name)


def resolve_wallet_input(identifier: str, resolver: NameResolver | None = None) -> str:
    """
    Return the normalized address for identifier.

    Accepts a 0x-prefixed 40-hex-digit address directly; ENS-style names go
    through resolver. Anything else, a missing resolver, or a resolver
    answer that is not an address raises ResolutionError.
    """
    value = (identifier or "").strip()
    if not value:
        raise ResolutionError(identifier, "Wallet address or name must be non-empty")
    if is_address(value):
        return normalize_address(value)
    if not is_ens_name(value):
        raise ResolutionError(value, f"{value!r} is neither an address nor a resolvable name")
    if resolver is None:
        raise ResolutionError(value, f"No name resolver configured for {value!r}")

    resolved = resolver.resolve(value)
    if not resolved or not is_address(resolved):
        logger.info("name_resolution_failed", name=value)
        raise ResolutionError(value, f"Could not resolve name {value!r}")
    logger.info("name_resolved", name=value, wallet=normalize_address(resolved))
    return normalize_address(resolved)
