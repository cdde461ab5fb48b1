"""
Tests for wallet input resolution (resolver.names).
"""

from __future__ import annotations

import json

import pytest

from backend_walletgraph.core.exceptions import ResolutionError
from backend_walletgraph.resolver.names import (
    RegistryFileResolver,
    StaticNameResolver,
    is_address,
    is_ens_name,
    resolve_wallet_input,
)
from conftest import WALLET_A, WALLET_B


def test_is_address():
    assert is_address(WALLET_A)
    assert is_address("0x" + "AbC123" * 6 + "dEf0")
    assert not is_address("0x1234")
    assert not is_address("vitalik.eth")
    assert not is_address("")


def test_is_ens_name():
    assert is_ens_name("vitalik.eth")
    assert is_ens_name("my-wallet.eth")
    assert not is_ens_name("vitalik.com")
    assert not is_ens_name("sub.vitalik.eth")
    assert not is_ens_name(WALLET_A)


def test_resolve_address_normalizes():
    assert resolve_wallet_input("  0x" + "A" * 40 + " ") == WALLET_A


def test_resolve_name_via_resolver():
    resolver = StaticNameResolver({"Alice.eth": WALLET_B.upper().replace("0X", "0x")})
    assert resolve_wallet_input("alice.eth", resolver) == WALLET_B


def test_resolve_unknown_name_raises():
    with pytest.raises(ResolutionError) as exc_info:
        resolve_wallet_input("nobody.eth", StaticNameResolver({}))
    assert exc_info.value.identifier == "nobody.eth"
    assert exc_info.value.code == "resolution_failed"


def test_resolve_name_without_resolver_raises():
    with pytest.raises(ResolutionError):
        resolve_wallet_input("alice.eth")


def test_resolve_garbage_raises():
    with pytest.raises(ResolutionError):
        resolve_wallet_input("not a wallet")
    with pytest.raises(ResolutionError):
        resolve_wallet_input("")


def test_resolver_answer_must_be_address():
    with pytest.raises(ResolutionError):
        resolve_wallet_input("alice.eth", StaticNameResolver({"alice.eth": "garbage"}))


def test_static_resolver_from_file(tmp_path):
    path = tmp_path / "names.json"
    path.write_text(json.dumps({"alice.eth": WALLET_A}), encoding="utf-8")
    resolver = StaticNameResolver.from_file(path)
    assert resolver.resolve("ALICE.eth") == WALLET_A


def test_static_resolver_from_bad_file(tmp_path):
    path = tmp_path / "names.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ResolutionError):
        StaticNameResolver.from_file(path)
    with pytest.raises(ResolutionError):
        StaticNameResolver.from_file(tmp_path / "missing.json")


def test_registry_file_resolver_loads_on_first_lookup(tmp_path):
    path = tmp_path / "names.json"
    resolver = RegistryFileResolver(path)
    path.write_text(json.dumps({"alice.eth": WALLET_A}), encoding="utf-8")
    assert resolver.resolve("alice.eth") == WALLET_A
    path.unlink()
    assert resolver.resolve("Alice.eth") == WALLET_A


def test_registry_file_resolver_bad_file_only_fails_names(tmp_path):
    resolver = RegistryFileResolver(tmp_path / "missing.json")
    assert resolve_wallet_input(WALLET_A.upper().replace("0X", "0x"), resolver) == WALLET_A
    with pytest.raises(ResolutionError):
        resolve_wallet_input("alice.eth", resolver)
