"""Regression tests for CLI handoff, output and exit codes."""

from __future__ import annotations

import io
import json
import sys
from pathlib import Path

import pytest
import uvicorn
from _pytest.monkeypatch import MonkeyPatch
from splitscan.api import server
from splitscan.application import scan as scan_workflow
from splitscan.cli import main as unified_cli


def test_parse_file_prints_items(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    receipt = tmp_path / "receipt.txt"
    receipt.write_text("2x Apple Juice $3.99\nTotal: $7.98\n", encoding="utf-8")

    exit_code = unified_cli.main(["parse", str(receipt)])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Apple Juice x2" in out
    assert "Detected total: 7.98" in out


def test_parse_stdin_as_json(monkeypatch: MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("Milk 3.50\nBread 2.00\nTotal 10.70\n"))

    exit_code = unified_cli.main(["parse", "-", "--json"])

    body = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert body["status"] == "parsed"
    assert body["result"]["needs_review"] is True
    assert [item["name"] for item in body["result"]["items"]] == ["Milk", "Bread"]


def test_parse_handoff_builds_typed_request(
    tmp_path: Path,
    monkeypatch: MonkeyPatch,
) -> None:
    captured_request: scan_workflow.TextScanRequest | None = None

    def fake_run(request: scan_workflow.TextScanRequest) -> scan_workflow.ScanOutcome:
        nonlocal captured_request
        captured_request = request
        return scan_workflow.ScanOutcome(status="not_a_receipt", user_message="nothing here")

    monkeypatch.setattr(scan_workflow, "run_text_scan", fake_run)
    receipt = tmp_path / "receipt.txt"

    exit_code = unified_cli.main(["parse", str(receipt), "--confidence", "0.7"])

    assert exit_code == 1
    assert captured_request is not None
    assert captured_request.path == receipt
    assert captured_request.text is None
    assert captured_request.confidence == 0.7


def test_parse_missing_file_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = unified_cli.main(["parse", str(tmp_path / "missing.txt")])

    assert exit_code == 1
    assert "Error:" in capsys.readouterr().out


def test_parse_out_of_range_confidence_fails(tmp_path: Path) -> None:
    receipt = tmp_path / "receipt.txt"
    receipt.write_text("Milk 3.50\n", encoding="utf-8")

    assert unified_cli.main(["parse", str(receipt), "--confidence", "2"]) == 1


def test_decode_json_output(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = unified_cli.main(["decode", '{"id":"TXN1","items":[{"name":"Coffee","price":4.5}]}', "--json"])

    body = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert body["status"] == "decoded"
    assert body["payload"]["items"][0]["price"] == "4.50"


def test_decode_bare_id_suggests_manual_entry(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = unified_cli.main(["decode", "TXN99ABC"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "TXN99ABC" in out
    assert "manually" in out


def test_decode_invalid_payload_fails(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = unified_cli.main(["decode", "not json, not an id!!"])

    assert exit_code == 1
    assert "Error:" in capsys.readouterr().out


def test_missing_config_file_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = unified_cli.main(["--config", str(tmp_path / "nope.toml"), "decode", "TXN99ABC"])

    assert exit_code == 1
    assert "Parser config not found" in capsys.readouterr().out


def test_config_file_is_applied(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_file = tmp_path / "parser.toml"
    config_file.write_text('[classifier]\nextra_skip_keywords = ["bottle deposit"]\n', encoding="utf-8")
    receipt = tmp_path / "receipt.txt"
    receipt.write_text("Bottle Deposit  0.10\nMilk 3.50\n", encoding="utf-8")

    exit_code = unified_cli.main(["--config", str(config_file), "parse", str(receipt), "--json"])

    body = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert [item["name"] for item in body["result"]["items"]] == ["Milk"]


def test_serve_hands_app_to_uvicorn(monkeypatch: MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_run(app: object, host: str, port: int) -> None:
        captured.update(app=app, host=host, port=port)

    monkeypatch.setattr(uvicorn, "run", fake_run)
    monkeypatch.setattr(server, "CONFIG_PATH", None)

    exit_code = unified_cli.main(["serve", "--port", "9000"])

    assert exit_code == 0
    assert captured == {"app": server.app, "host": "127.0.0.1", "port": 9000}


def test_no_command_prints_help() -> None:
    assert unified_cli.main([]) == 1
