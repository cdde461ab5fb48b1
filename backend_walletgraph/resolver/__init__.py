"""
Name resolution for wallet input (addresses and ENS-style names).
"""

from backend_walletgraph.resolver.names import (
    NameResolver,
    StaticNameResolver,
    is_address,
    is_ens_name,
    resolve_wallet_input,
)

__all__ = [
    "NameResolver",
    "StaticNameResolver",
    "is_address",
    "is_ens_name",
    "resolve_wallet_input",
]
