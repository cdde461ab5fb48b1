"""
Tests for the walletgraph command line entry point. run_wallet_graph is patched.
"""

from __future__ import annotations

import json

from backend_walletgraph import cli
from backend_walletgraph.analytics.wallet_graph import build_interaction_graph
from backend_walletgraph.core.exceptions import TransportError
from backend_walletgraph.ledger.models import TransactionRecord
from conftest import WALLET_A, WALLET_B


def _graph():
    tx = TransactionRecord(block_height=1, timestamp=1, hash="0x1", from_address=WALLET_A, to_address=WALLET_B)
    return build_interaction_graph([tx], WALLET_A)


def test_cli_prints_graph_json(walletgraph_env, monkeypatch, capsys):
    calls = {}

    def fake_run(identifier, settings, **kwargs):
        calls["identifier"] = identifier
        calls["strict_status"] = settings.strict_status
        calls["page_size"] = kwargs["page_size"]
        return _graph()

    monkeypatch.setattr(cli, "run_wallet_graph", fake_run)
    code = cli.main([WALLET_A, "--page-size", "10", "--strict-status"])
    assert code == 0
    assert calls == {"identifier": WALLET_A, "strict_status": True, "page_size": 10}
    data = json.loads(capsys.readouterr().out)
    assert data["links"] == [{"source": WALLET_A, "target": WALLET_B, "value": 1}]


def test_cli_writes_output_file(walletgraph_env, monkeypatch, tmp_path):
    monkeypatch.setattr(cli, "run_wallet_graph", lambda identifier, settings, **kwargs: _graph())
    out = tmp_path / "graph.json"
    assert cli.main([WALLET_A, "--output", str(out)]) == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert len(data["nodes"]) == 2


def test_cli_error_exit_code(walletgraph_env, monkeypatch, capsys):
    def failing_run(identifier, settings, **kwargs):
        raise TransportError("Page 1 request failed: boom", page=1)

    monkeypatch.setattr(cli, "run_wallet_graph", failing_run)
    assert cli.main([WALLET_A]) == 1
    assert "Page 1 request failed" in capsys.readouterr().err


def test_cli_unresolvable_name(walletgraph_env, capsys):
    """No resolver configured: ENS-style input fails before any fetch."""
    assert cli.main(["alice.eth"]) == 1
    assert "No name resolver" in capsys.readouterr().err


def test_cli_rejects_bad_page_size(walletgraph_env):
    assert cli.main([WALLET_A, "--page-size", "0"]) == 1
